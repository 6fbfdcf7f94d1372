"""Structural fret checks that run ahead of JSON Schema validation.

A failure here names the chord, the voicing index and the reason.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from chord_catalog.config import MAX_FRET, MIN_FRET, STANDARD_TUNING
from chord_catalog.errors import ErrorCode, VoicingGuardError


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str)


def check_voicings(record: Mapping[str, Any]) -> None:
    """Run the voicing guard over one serialized chord record.

    For every voicing, in order:

    - the fret array length must equal the tuning's string count
    - each non-muted fret must be an integer
    - each non-muted fret must lie in ``[0, 24]``
    - at least one string must be played

    Voicings whose shape is too broken to inspect (not a mapping, no fret
    array) are left for the schema guard to report.

    Parameters
    ----------
    record : Mapping[str, Any]
        Chord record in its JSON shape.

    Raises
    ------
    VoicingGuardError
        On the first failing voicing.
    """
    record_id = record.get("id")
    tuning = record.get("tuning")
    string_count = len(tuning) if _is_sequence(tuning) and tuning else len(STANDARD_TUNING)

    voicings = record.get("voicings")
    if not _is_sequence(voicings):
        return

    for index, voicing in enumerate(voicings):
        if not isinstance(voicing, Mapping):
            continue
        frets = voicing.get("frets")
        if not _is_sequence(frets):
            continue

        label = f"{record_id} › voicing[{index}] ({voicing.get('id')})"

        if len(frets) != string_count:
            raise VoicingGuardError(
                ErrorCode.VOICING_STRING_COUNT_MISMATCH,
                f"{label}: expected {string_count} frets for the tuning, got {len(frets)}",
                record_id,
                index,
            )

        for string_index, fret in enumerate(frets):
            if fret is None:
                continue
            if isinstance(fret, bool) or not isinstance(fret, int):
                raise VoicingGuardError(
                    ErrorCode.VOICING_INVALID_FRET_VALUE,
                    f"{label}: string {string_index} has non-integer fret {fret!r}",
                    record_id,
                    index,
                )
            if not MIN_FRET <= fret <= MAX_FRET:
                raise VoicingGuardError(
                    ErrorCode.VOICING_FRET_OUT_OF_RANGE,
                    f"{label}: string {string_index} fret {fret} is outside [{MIN_FRET}, {MAX_FRET}]",
                    record_id,
                    index,
                )

        if all(fret is None for fret in frets):
            raise VoicingGuardError(
                ErrorCode.VOICING_ALL_STRINGS_MUTED,
                f"{label}: all strings are muted",
                record_id,
                index,
            )
