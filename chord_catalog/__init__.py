"""Canonical guitar chord catalog: multi-source merge and validation.

Raw chord records scraped from several sources are normalized, merged into
one canonical record per ``chord:<root>:<quality>`` id, and certified by a
validation suite before publication.

Examples
--------
>>> from chord_catalog import RawRecord, RawVoicing, merge_records

>>> chords = merge_records([
...     RawRecord(
...         source="guitar-chord-org",
...         url="https://www.guitar-chord.org/c-major.html",
...         root="C",
...         quality_raw="major",
...         voicings=(RawVoicing(frets=(None, 3, 2, 0, 1, 0)),),
...     ),
... ])
>>> chords[0].id
'chord:C:maj'
>>> chords[0].voicings[0].position
'open'
"""

from chord_catalog.config import NormalizationTables
from chord_catalog.errors import (
    AliasCollisionError,
    CatalogError,
    CatalogValidationError,
    ErrorCode,
    InvalidCanonicalIdError,
    ProvenanceMissingError,
    SchemaCompatError,
    SchemaInvalidError,
    UnknownSourceError,
    UnsupportedQualityError,
    ValidationError,
    VoicingGuardError,
)
from chord_catalog.identity import is_canonical_chord_id, parse_chord_id, to_chord_id
from chord_catalog.merge import MergeEngine, detect_alias_collisions, merge_records
from chord_catalog.models import CanonicalChord, ParserConfidence, RawRecord, RawVoicing, SourceRef, Voicing
from chord_catalog.normalize import QualityNormalizer, normalize_quality
from chord_catalog.position import derive_position

__all__ = [
    "AliasCollisionError",
    "CanonicalChord",
    "CatalogError",
    "CatalogValidationError",
    "ErrorCode",
    "InvalidCanonicalIdError",
    "MergeEngine",
    "NormalizationTables",
    "ParserConfidence",
    "ProvenanceMissingError",
    "QualityNormalizer",
    "RawRecord",
    "RawVoicing",
    "SchemaCompatError",
    "SchemaInvalidError",
    "SourceRef",
    "UnknownSourceError",
    "UnsupportedQualityError",
    "ValidationError",
    "Voicing",
    "VoicingGuardError",
    "derive_position",
    "detect_alias_collisions",
    "is_canonical_chord_id",
    "merge_records",
    "normalize_quality",
    "parse_chord_id",
    "to_chord_id",
]
