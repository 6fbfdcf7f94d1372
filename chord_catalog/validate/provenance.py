"""Provenance coverage checks.

Every chord and every voicing must cite at least one source, and every
citation must carry a non-blank ``source`` and ``url``. Gaps are reported
with a path precise enough to find the defect, for example::

    chord:C:maj › source_refs is empty
    chord:C:maj › voicing chord:C:maj:v1:unit › source_refs[0].url is empty
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from chord_catalog.errors import ProvenanceMissingError
from chord_catalog.models import as_record

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from chord_catalog.models import CanonicalChord


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _ref_gaps(path: str, refs: Any) -> Iterator[str]:
    if not isinstance(refs, Sequence) or isinstance(refs, str) or not refs:
        yield f"{path} › source_refs is empty"
        return
    for index, ref in enumerate(refs):
        ref = ref if isinstance(ref, Mapping) else {}
        if _is_blank(ref.get("source")):
            yield f"{path} › source_refs[{index}].source is empty"
        if _is_blank(ref.get("url")):
            yield f"{path} › source_refs[{index}].url is empty"


def _record_gaps(record: Mapping[str, Any]) -> Iterator[str]:
    chord_path = str(record.get("id"))
    yield from _ref_gaps(chord_path, record.get("source_refs"))
    for voicing in record.get("voicings") or ():
        yield from _ref_gaps(f"{chord_path} › voicing {voicing.get('id')}", voicing.get("source_refs"))


def find_provenance_gaps(chords: Iterable[CanonicalChord | Mapping[str, Any]]) -> list[str]:
    """List every provenance gap, in record order.

    Parameters
    ----------
    chords : Iterable[CanonicalChord | Mapping[str, Any]]
        Records to inspect.

    Returns
    -------
    list[str]
        Paths of the form ``<chord id> › [voicing <id> ›] <field> is empty``.
    """
    gaps: list[str] = []
    for chord in chords:
        gaps.extend(_record_gaps(as_record(chord)))
    return gaps


def check_provenance(chords: Iterable[CanonicalChord | Mapping[str, Any]]) -> None:
    """Fail on the first provenance gap.

    Raises
    ------
    ProvenanceMissingError
        Naming the path of the first gap found.
    """
    for chord in chords:
        record = as_record(chord)
        for gap in _record_gaps(record):
            raise ProvenanceMissingError(gap, record_id=record.get("id"))
