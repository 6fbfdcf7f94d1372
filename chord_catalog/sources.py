"""Registry of the chord sources the catalog ingests.

Raw records are merged in registry order, so voicing sequence numbers are
stable across runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chord_catalog.errors import UnknownSourceError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from chord_catalog.models import RawRecord


@dataclass(frozen=True)
class SourceEntry:
    """A scraped chord source.

    Parameters
    ----------
    id : str
        Registry id, used as ``RawRecord.source``.
    display_name : str
        Human-readable name.
    base_url : str
        Site root.
    """

    id: str
    display_name: str
    base_url: str


SOURCE_REGISTRY: tuple[SourceEntry, ...] = (
    SourceEntry(id="guitar-chord-org", display_name="Guitar Chord Org", base_url="https://www.guitar-chord.org"),
    SourceEntry(id="all-guitar-chords", display_name="All Guitar Chords", base_url="https://all-guitar-chords.com"),
)


def order_by_registry(
    records: Iterable[RawRecord],
    registry: Sequence[SourceEntry] = SOURCE_REGISTRY,
) -> list[RawRecord]:
    """Stable-sort raw records by their source's registry position.

    Records from the same source keep their relative order.

    Raises
    ------
    UnknownSourceError
        If a record names a source missing from the registry.
    """
    rank = {entry.id: index for index, entry in enumerate(registry)}
    records = list(records)
    for record in records:
        if record.source not in rank:
            raise UnknownSourceError(record.source)
    return sorted(records, key=lambda r: rank[r.source])
