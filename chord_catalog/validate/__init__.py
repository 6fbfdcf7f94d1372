"""Validation suite for merged chord catalogs.

Hard gates raise typed errors (schema and voicing guard, provenance, schema
compatibility). Coverage and enharmonic results are advisory reports.
"""

from chord_catalog.validate.compat import check_schema_compatibility, check_schema_files, find_breaking_removals
from chord_catalog.validate.coverage import CoverageReport, MissingChord, build_coverage_report, format_coverage_report
from chord_catalog.validate.enharmonic import (
    EnharmonicAsymmetry,
    EnharmonicPair,
    EnharmonicReport,
    build_enharmonic_report,
    format_enharmonic_report,
)
from chord_catalog.validate.provenance import check_provenance, find_provenance_gaps
from chord_catalog.validate.schema import (
    RecordResult,
    SchemaGuard,
    ValidationPolicy,
    check_chords,
    validate_chords,
)
from chord_catalog.validate.voicing import check_voicings

__all__ = [
    "CoverageReport",
    "EnharmonicAsymmetry",
    "EnharmonicPair",
    "EnharmonicReport",
    "MissingChord",
    "RecordResult",
    "SchemaGuard",
    "ValidationPolicy",
    "build_coverage_report",
    "build_enharmonic_report",
    "check_chords",
    "check_provenance",
    "check_schema_compatibility",
    "check_schema_files",
    "check_voicings",
    "find_breaking_removals",
    "find_provenance_gaps",
    "format_coverage_report",
    "format_enharmonic_report",
    "validate_chords",
]
