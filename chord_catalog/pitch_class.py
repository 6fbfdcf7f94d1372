"""Pitch class operations for chord formulas.

This module converts interval formulas into note names so records whose
source omitted pitch classes can still be published with them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

# Interval name to semitones from root
INTERVAL_TO_SEMITONES: dict[str, int] = {
    "1": 0,
    "b2": 1,
    "2": 2,
    "#2": 3,
    "b3": 3,
    "3": 4,
    "4": 5,
    "#4": 6,
    "b5": 6,
    "5": 7,
    "#5": 8,
    "b6": 8,
    "6": 9,
    "bb7": 9,
    "b7": 10,
    "7": 11,
}

SHARP_NOTES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NOTES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("Bb")
    10
    """
    if note in NOTE_TO_PC:
        return NOTE_TO_PC[note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def unique_strings(values: Iterable[str]) -> list[str]:
    """Trim values, drop blanks and duplicates, keep first-seen order.

    Examples
    --------
    >>> unique_strings([" C", "E", "", "C", "G "])
    ['C', 'E', 'G']
    """
    return list(dict.fromkeys(v.strip() for v in values if v.strip()))


def derive_pitch_classes(root: str, formula: Iterable[str]) -> list[str]:
    """Spell the notes of a formula built on ``root``.

    Flat roots are spelled with flats, everything else with sharps. Intervals
    missing from the semitone table are skipped.

    Parameters
    ----------
    root : str
        Root note name.
    formula : Iterable[str]
        Interval names (e.g., ["1", "b3", "5"]).

    Returns
    -------
    list[str]
        Unique note names in formula order, empty for an unknown root.

    Examples
    --------
    >>> derive_pitch_classes("C", ["1", "3", "5"])
    ['C', 'E', 'G']
    >>> derive_pitch_classes("Eb", ["1", "b3", "5", "b7"])
    ['Eb', 'Gb', 'Bb', 'Db']
    """
    if root not in NOTE_TO_PC:
        return []
    root_pc = NOTE_TO_PC[root]
    scale = FLAT_NOTES if "b" in root else SHARP_NOTES
    notes = [
        scale[(root_pc + INTERVAL_TO_SEMITONES[interval]) % 12]
        for interval in formula
        if interval in INTERVAL_TO_SEMITONES
    ]
    return unique_strings(notes)


def pitch_class_set(notes: Iterable[str]) -> frozenset[int]:
    """Convert note names to a set of pitch classes.

    Examples
    --------
    >>> sorted(pitch_class_set(["Db", "F", "Ab"]))
    [1, 5, 8]
    """
    return frozenset(note_to_pc(note) for note in notes)
