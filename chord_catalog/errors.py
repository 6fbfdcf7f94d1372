"""Error taxonomy for the chord catalog.

Every error carries a stable :class:`ErrorCode` so callers can branch on the
failure category without parsing messages. All errors derive from
``ValueError`` so existing ``except ValueError`` handlers keep working.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ErrorCode(str, Enum):
    """Stable error codes."""

    UNSUPPORTED_QUALITY = "UnsupportedQuality"
    INVALID_CANONICAL_ID = "InvalidCanonicalId"
    ALIAS_COLLISION = "AliasCollision"
    SCHEMA_INVALID = "SchemaInvalid"
    VOICING_STRING_COUNT_MISMATCH = "VoicingStringCountMismatch"
    VOICING_INVALID_FRET_VALUE = "VoicingInvalidFretValue"
    VOICING_FRET_OUT_OF_RANGE = "VoicingFretOutOfRange"
    VOICING_ALL_STRINGS_MUTED = "VoicingAllStringsMuted"
    PROVENANCE_MISSING = "ProvenanceMissing"
    SCHEMA_COMPAT_BREAKING_REMOVAL = "SchemaCompatBreakingRemoval"
    UNKNOWN_SOURCE = "UnknownSource"


class CatalogError(ValueError):
    """Base class for all catalog errors.

    Parameters
    ----------
    code : ErrorCode
        The stable failure category.
    message : str
        Human-readable description.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code


class UnsupportedQualityError(CatalogError):
    """A source emitted a chord quality the catalog does not model."""

    def __init__(self, quality_raw: str) -> None:
        super().__init__(ErrorCode.UNSUPPORTED_QUALITY, f"Unsupported chord quality: {quality_raw!r}")
        self.quality_raw = quality_raw


class InvalidCanonicalIdError(CatalogError):
    """A derived chord id does not satisfy the canonical id grammar."""

    def __init__(self, value: str) -> None:
        super().__init__(ErrorCode.INVALID_CANONICAL_ID, f"Invalid canonical chord id: {value}")
        self.value = value


class UnknownSourceError(CatalogError):
    """A raw record names a source missing from the source registry."""

    def __init__(self, source: str) -> None:
        super().__init__(ErrorCode.UNKNOWN_SOURCE, f"No source registry entry found for {source}")
        self.source = source


@dataclass(frozen=True)
class AliasCollision:
    """An alias shared by chords that are not mutual enharmonic equivalents."""

    alias: str
    chord_ids: tuple[str, ...]


class AliasCollisionError(CatalogError):
    """Two or more distinct chords share an alias."""

    def __init__(self, collisions: Sequence[AliasCollision]) -> None:
        lines = "\n".join(f'  "{c.alias}" -> {", ".join(c.chord_ids)}' for c in collisions)
        super().__init__(ErrorCode.ALIAS_COLLISION, f"Normalization alias collision detected:\n{lines}")
        self.collisions = tuple(collisions)


class ValidationError(CatalogError):
    """A single chord record failed validation.

    Parameters
    ----------
    code : ErrorCode
        The failure category.
    message : str
        Description including the chord id.
    record_id : str | None
        The id of the offending record, when known.
    """

    def __init__(self, code: ErrorCode, message: str, record_id: str | None = None) -> None:
        super().__init__(code, message)
        self.record_id = record_id


class SchemaInvalidError(ValidationError):
    """JSON Schema validation failed for a record."""

    def __init__(self, record_id: str | None, details: Sequence[str]) -> None:
        message = f"Schema validation failed for {record_id}\n" + "\n".join(details)
        super().__init__(ErrorCode.SCHEMA_INVALID, message, record_id)
        self.details = tuple(details)


class VoicingGuardError(ValidationError):
    """A voicing failed one of the structural fret checks."""

    def __init__(self, code: ErrorCode, message: str, record_id: str | None, voicing_index: int) -> None:
        super().__init__(code, message, record_id)
        self.voicing_index = voicing_index


class ProvenanceMissingError(ValidationError):
    """A chord or voicing lacks a usable source citation."""

    def __init__(self, path: str, record_id: str | None = None) -> None:
        super().__init__(ErrorCode.PROVENANCE_MISSING, f"Provenance check failed: {path}", record_id)
        self.path = path


class CatalogValidationError(CatalogError):
    """Aggregate of every record failure found in collect mode."""

    def __init__(self, failures: Sequence[ValidationError]) -> None:
        lines = "\n".join(f"  [{f.code.value}] {f}" for f in failures)
        super().__init__(
            failures[0].code if failures else ErrorCode.SCHEMA_INVALID,
            f"{len(failures)} chord record(s) failed validation:\n{lines}",
        )
        self.failures = tuple(failures)


@dataclass(frozen=True)
class SchemaRemoval:
    """A baseline-required field missing from the current schema."""

    section: str
    field: str


class SchemaCompatError(CatalogError):
    """The current schema drops fields the committed baseline requires."""

    def __init__(self, removals: Sequence[SchemaRemoval]) -> None:
        lines = "\n".join(f'  [{r.section}] required field "{r.field}" was removed' for r in removals)
        super().__init__(
            ErrorCode.SCHEMA_COMPAT_BREAKING_REMOVAL,
            f"Schema compatibility check failed, breaking removals detected:\n{lines}",
        )
        self.removals = tuple(removals)
