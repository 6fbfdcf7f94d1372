"""JSON Schema validation of canonical chord records.

Each record goes through the voicing guard first, then full validation
against ``chords.schema.json`` with a draft 2020-12 validator. Every schema
error for a record is reported in one message.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from jsonschema import Draft202012Validator, FormatChecker

from chord_catalog.errors import CatalogValidationError, SchemaInvalidError, ValidationError
from chord_catalog.models import as_record
from chord_catalog.validate.voicing import check_voicings

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from chord_catalog.models import CanonicalChord

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"
SCHEMA_PATH = SCHEMA_DIR / "chords.schema.json"
BASELINE_PATH = SCHEMA_DIR / "schema-compat-baseline.json"

DATE_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$")

FORMAT_CHECKER = FormatChecker(formats=())


@FORMAT_CHECKER.checks("uri")
def is_uri(value: object) -> bool:
    """Absolute URI with a scheme and a network location."""
    if not isinstance(value, str):
        return True
    parts = urlsplit(value)
    return bool(parts.scheme and parts.netloc)


@FORMAT_CHECKER.checks("date-time", raises=ValueError)
def is_date_time(value: object) -> bool:
    """RFC 3339 timestamp with an explicit offset."""
    if not isinstance(value, str):
        return True
    if not DATE_TIME_RE.match(value):
        return False
    datetime.fromisoformat(value.upper().replace("Z", "+00:00"))
    return True


def load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class ValidationPolicy(str, Enum):
    """How many invalid records to find before reporting."""

    FAIL_FAST = "fail_fast"
    COLLECT = "collect"


@dataclass(frozen=True)
class RecordResult:
    """Outcome of validating one record.

    Parameters
    ----------
    record_id : str | None
        The record's id, if it has one.
    error : ValidationError | None
        The failure, or None when the record is valid.
    """

    record_id: str | None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SchemaGuard:
    """Voicing guard plus JSON Schema validation for chord records.

    Parameters
    ----------
    schema : Mapping[str, Any] | None
        The chord record schema; ``chords.schema.json`` when omitted.
    """

    def __init__(self, schema: Mapping[str, Any] | None = None) -> None:
        self.schema = schema if schema is not None else load_json(SCHEMA_PATH)
        Draft202012Validator.check_schema(self.schema)
        self.validator = Draft202012Validator(self.schema, format_checker=FORMAT_CHECKER)

    def check(self, chord: CanonicalChord | Mapping[str, Any]) -> None:
        """Validate one record.

        Raises
        ------
        VoicingGuardError
            If a voicing fails a structural fret check.
        SchemaInvalidError
            If the record violates the schema; lists every violation.
        """
        record = as_record(chord)
        check_voicings(record)

        errors = sorted(self.validator.iter_errors(record), key=lambda e: e.json_path)
        if errors:
            record_id = record.get("id") if isinstance(record.get("id"), str) else None
            raise SchemaInvalidError(record_id, [f"{e.json_path}: {e.message}" for e in errors])

    def results(self, chords: Iterable[CanonicalChord | Mapping[str, Any]]) -> list[RecordResult]:
        """Validate every record, returning one result per record in input order."""
        out: list[RecordResult] = []
        for chord in chords:
            record = as_record(chord)
            record_id = record.get("id")
            try:
                self.check(record)
            except ValidationError as exc:
                out.append(RecordResult(record_id=record_id, error=exc))
            else:
                out.append(RecordResult(record_id=record_id))
        return out

    def validate(
        self,
        chords: Iterable[CanonicalChord | Mapping[str, Any]],
        policy: ValidationPolicy = ValidationPolicy.FAIL_FAST,
    ) -> int:
        """Validate records under ``policy``.

        Parameters
        ----------
        chords : Iterable[CanonicalChord | Mapping[str, Any]]
            Records to validate.
        policy : ValidationPolicy
            ``FAIL_FAST`` stops at the first invalid record and raises its
            error. ``COLLECT`` checks every record and raises one
            :class:`CatalogValidationError` listing all failures.

        Returns
        -------
        int
            Number of records validated.
        """
        if policy is ValidationPolicy.FAIL_FAST:
            count = 0
            for chord in chords:
                self.check(chord)
                count += 1
            logger.info("validated %d chord records", count)
            return count

        results = self.results(chords)
        failures = [r.error for r in results if r.error is not None]
        if failures:
            raise CatalogValidationError(failures)
        logger.info("validated %d chord records", len(results))
        return len(results)


@lru_cache(maxsize=1)
def default_guard() -> SchemaGuard:
    """Guard compiled from the packaged schema."""
    return SchemaGuard()


def validate_chords(
    chords: Iterable[CanonicalChord | Mapping[str, Any]],
    policy: ValidationPolicy = ValidationPolicy.FAIL_FAST,
) -> int:
    """Validate records against the packaged schema. See :meth:`SchemaGuard.validate`."""
    return default_guard().validate(chords, policy)


def check_chords(chords: Iterable[CanonicalChord | Mapping[str, Any]]) -> list[RecordResult]:
    """Per-record results against the packaged schema; never raises for invalid records."""
    return default_guard().results(chords)
