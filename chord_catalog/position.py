"""Fretboard position classification for voicings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chord_catalog.models import Fret, Position

# Minimum number of strings sharing the lowest fret to count as a barre
BARRE_MIN_STRINGS = 4

# Highest fret an open-position shape may reach
OPEN_MAX_FRET = 5

# Lowest fret at which a shape counts as an upper-neck voicing
UPPER_MIN_FRET = 5


def derive_position(frets: Sequence[Fret]) -> Position:
    """Classify a voicing by where it sits on the neck.

    Muted strings (None) are ignored. Priority order:

    1. ``open``: some string is played open and the highest fret is <= 5.
    2. ``barre``: at least four strings share the lowest non-open fret.
    3. ``upper``: the lowest played fret, open strings included, is >= 5.
    4. ``unknown`` otherwise.

    Parameters
    ----------
    frets : Sequence[Fret]
        Per-string fret numbers, None when muted.

    Returns
    -------
    Position
        The derived position.

    Examples
    --------
    >>> derive_position([None, 3, 2, 0, 1, 0])
    'open'
    >>> derive_position([3, 3, 5, 5, 3, 3])
    'barre'
    >>> derive_position([None, 7, 9, 9, 8, None])
    'upper'
    >>> derive_position([None, None, None, None, None, None])
    'unknown'
    """
    played = [fret for fret in frets if fret is not None]
    if not played:
        return "unknown"

    if 0 in played and max(played) <= OPEN_MAX_FRET:
        return "open"

    fretted = [fret for fret in played if fret > 0]
    if not fretted:
        return "unknown"

    lowest = min(fretted)
    if fretted.count(lowest) >= BARRE_MIN_STRINGS:
        return "barre"

    if min(played) >= UPPER_MIN_FRET:
        return "upper"

    return "unknown"
