"""Command-line entry point: merge raw records, validate and report on catalogs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from chord_catalog.catalog_io import read_chord_records, read_raw_records, write_chords_jsonl
from chord_catalog.errors import CatalogError
from chord_catalog.merge import merge_records
from chord_catalog.sources import order_by_registry
from chord_catalog.validate import (
    ValidationPolicy,
    build_coverage_report,
    build_enharmonic_report,
    check_provenance,
    check_schema_files,
    format_coverage_report,
    format_enharmonic_report,
    validate_chords,
)

logger = logging.getLogger(__name__)


def cmd_merge(args: argparse.Namespace) -> int:
    raw = order_by_registry(read_raw_records(args.raw))
    logger.info("loaded %d raw records from %s", len(raw), args.raw)
    chords = merge_records(raw, include_parser_confidence=args.parser_confidence)
    write_chords_jsonl(args.output, chords)
    print(f"Wrote {len(chords)} chord records to {args.output}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    records = read_chord_records(args.catalog)
    policy = ValidationPolicy.COLLECT if args.collect else ValidationPolicy.FAIL_FAST
    count = validate_chords(records, policy)
    check_provenance(records)
    check_schema_files(args.schema, args.baseline)
    print(f"Validated {count} chord records")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    records = read_chord_records(args.catalog)
    coverage = build_coverage_report(records)
    enharmonic = build_enharmonic_report(records)
    if args.json:
        print(json.dumps({"coverage": coverage.to_dict(), "enharmonic": enharmonic.to_dict()}, indent=2))
    else:
        print(format_coverage_report(coverage))
        print(format_enharmonic_report(enharmonic))
    if args.strict and (enharmonic.asymmetries or coverage.missing_canonical_ids):
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chord-catalog", description="Merge and validate a canonical chord catalog")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    merge = sub.add_parser("merge", help="Merge raw source records into a JSONL catalog")
    merge.add_argument("raw", type=Path, help="Raw records (JSON array or JSONL)")
    merge.add_argument("-o", "--output", type=Path, default=Path("data/chords.jsonl"), help="Catalog output path")
    merge.add_argument(
        "--parser-confidence", action="store_true", help="Keep per-source parser confidence on merged chords"
    )
    merge.set_defaults(func=cmd_merge)

    validate = sub.add_parser("validate", help="Run the schema, voicing, provenance and compat gates")
    validate.add_argument("catalog", type=Path, help="JSONL catalog")
    validate.add_argument("--collect", action="store_true", help="Report every invalid record, not just the first")
    validate.add_argument("--schema", type=Path, default=None, help="Schema to check for compatibility")
    validate.add_argument("--baseline", type=Path, default=None, help="Compatibility baseline")
    validate.set_defaults(func=cmd_validate)

    report = sub.add_parser("report", help="Print coverage and enharmonic reports")
    report.add_argument("catalog", type=Path, help="JSONL catalog")
    report.add_argument("--json", action="store_true", help="Emit JSON instead of Markdown")
    report.add_argument("--strict", action="store_true", help="Exit 1 when any gap or asymmetry is reported")
    report.set_defaults(func=cmd_report)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except CatalogError as exc:
        print(f"Error [{exc.code.value}]: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
