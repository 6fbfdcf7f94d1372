"""Lookup tables and constants for chord normalization.

The tables are bundled into :class:`NormalizationTables` so the normalizer and
merge engine can be constructed with alternate tables in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping

Severity = Literal["critical", "high", "medium", "low"]

# Accepted chromatic roots, in display order
ROOT_ORDER: tuple[str, ...] = (
    "C",
    "C#",
    "Db",
    "D",
    "D#",
    "Eb",
    "E",
    "F",
    "F#",
    "Gb",
    "G",
    "G#",
    "Ab",
    "A",
    "A#",
    "Bb",
    "B",
)

# The closed set of canonical qualities, in display order
QUALITY_ORDER: tuple[str, ...] = ("maj", "min", "7", "maj7", "min7", "dim", "dim7", "aug", "sus2", "sus4")

POSITIONS: tuple[str, ...] = ("open", "barre", "upper", "unknown")

STANDARD_TUNING: tuple[str, ...] = ("E", "A", "D", "G", "B", "E")

MIN_FRET = 0
MAX_FRET = 24

# Free-text quality token to canonical quality. Keys are matched exactly
# first, then against the lower-cased input.
QUALITY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "": "maj",
        "M": "maj",
        "Δ": "maj",
        "maj": "maj",
        "major": "maj",
        "m": "min",
        "min": "min",
        "minor": "min",
        "-": "min",
        "7": "7",
        "dom7": "7",
        "dominant7": "7",
        "M7": "maj7",
        "Δ7": "maj7",
        "maj7": "maj7",
        "major7": "maj7",
        "m7": "min7",
        "-7": "min7",
        "min7": "min7",
        "minor7": "min7",
        "dim": "dim",
        "diminished": "dim",
        "°": "dim",
        "o": "dim",
        "m7b5": "dim",
        "dim7": "dim7",
        "diminished7": "dim7",
        "°7": "dim7",
        "o7": "dim7",
        "aug": "aug",
        "augmented": "aug",
        "+": "aug",
        "sus2": "sus2",
        "suspended2": "sus2",
        "sus4": "sus4",
        "suspended4": "sus4",
        "sus": "sus4",
    }
)

ENHARMONIC_ROOTS: Mapping[str, str] = MappingProxyType(
    {
        "C#": "Db",
        "Db": "C#",
        "D#": "Eb",
        "Eb": "D#",
        "F#": "Gb",
        "Gb": "F#",
        "G#": "Ab",
        "Ab": "G#",
        "A#": "Bb",
        "Bb": "A#",
    }
)

DEFAULT_FORMULAS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "maj": ("1", "3", "5"),
        "min": ("1", "b3", "5"),
        "7": ("1", "3", "5", "b7"),
        "maj7": ("1", "3", "5", "7"),
        "min7": ("1", "b3", "5", "b7"),
        "dim": ("1", "b3", "b5"),
        "dim7": ("1", "b3", "b5", "bb7"),
        "aug": ("1", "3", "#5"),
        "sus2": ("1", "2", "5"),
        "sus4": ("1", "4", "5"),
    }
)

QUALITY_SEVERITY: Mapping[str, Severity] = MappingProxyType(
    {
        "maj": "critical",
        "min": "critical",
        "7": "critical",
        "maj7": "critical",
        "min7": "high",
        "dim": "medium",
        "dim7": "medium",
        "aug": "medium",
        "sus2": "low",
        "sus4": "low",
    }
)

SEVERITY_LEVELS: tuple[Severity, ...] = ("critical", "high", "medium", "low")


@dataclass(frozen=True)
class NormalizationTables:
    """Lookup tables consumed by the normalizer and merge engine.

    Parameters
    ----------
    quality_aliases : Mapping[str, str]
        Free-text quality token to canonical quality.
    enharmonic_roots : Mapping[str, str]
        Root spelling to its enharmonic counterpart.
    default_formulas : Mapping[str, tuple[str, ...]]
        Canonical quality to interval formula, used when a source omits one.
    roots : tuple[str, ...]
        Accepted roots in sort order.
    qualities : tuple[str, ...]
        Accepted qualities in sort order.
    tuning : tuple[str, ...]
        Default tuning assigned to new chords.

    Examples
    --------
    >>> tables = NormalizationTables.default()
    >>> tables.quality_aliases["M7"]
    'maj7'
    """

    quality_aliases: Mapping[str, str] = field(default_factory=lambda: QUALITY_ALIASES)
    enharmonic_roots: Mapping[str, str] = field(default_factory=lambda: ENHARMONIC_ROOTS)
    default_formulas: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_FORMULAS)
    roots: tuple[str, ...] = ROOT_ORDER
    qualities: tuple[str, ...] = QUALITY_ORDER
    tuning: tuple[str, ...] = STANDARD_TUNING

    @classmethod
    def default(cls) -> NormalizationTables:
        """Return the shipped tables."""
        return cls()
