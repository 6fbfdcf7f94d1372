"""Total ordering for canonical chords."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chord_catalog.config import QUALITY_ORDER, ROOT_ORDER

if TYPE_CHECKING:
    from chord_catalog.models import CanonicalChord


def _index_or_end(values: tuple[str, ...], value: str) -> int:
    try:
        return values.index(value)
    except ValueError:
        return len(values)


def chord_sort_key(
    chord: CanonicalChord,
    roots: tuple[str, ...] = ROOT_ORDER,
    qualities: tuple[str, ...] = QUALITY_ORDER,
) -> tuple[int, int, str]:
    """Sort key: root position, quality position, then id.

    Unknown roots or qualities sort after every known one.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> chord_sort_key(SimpleNamespace(root="Db", quality="min", id="chord:Db:min"))
    (2, 1, 'chord:Db:min')
    """
    return (_index_or_end(roots, chord.root), _index_or_end(qualities, chord.quality), chord.id)
