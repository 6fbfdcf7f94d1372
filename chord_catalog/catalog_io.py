"""Reading raw records and reading/writing the JSONL catalog."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chord_catalog.converter import split_symbol
from chord_catalog.models import CanonicalChord, RawRecord

if TYPE_CHECKING:
    from collections.abc import Iterable


def _read_json_or_jsonl(path: Path) -> list[dict[str, Any]]:
    text = path.read_text(encoding="utf-8")
    stripped = text.lstrip()
    if stripped.startswith("["):
        return json.loads(text)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def raw_record_from_dict(data: dict[str, Any]) -> RawRecord:
    """Build a raw record, filling root and quality from ``symbol`` when absent.

    Examples
    --------
    >>> record = raw_record_from_dict({"source": "s", "url": "https://s.test", "symbol": "Ebm7"})
    >>> record.root, record.quality_raw
    ('Eb', 'm7')
    """
    if ("root" not in data or "quality_raw" not in data) and data.get("symbol"):
        root, quality_raw = split_symbol(data["symbol"])
        data = {"root": root, "quality_raw": quality_raw, **data}
    return RawRecord.from_dict(data)


def read_raw_records(path: Path) -> list[RawRecord]:
    """Read raw records from a JSON array or a JSONL file, preserving order."""
    return [raw_record_from_dict(item) for item in _read_json_or_jsonl(Path(path))]


def dumps_chord(chord: CanonicalChord) -> str:
    """Serialize one chord as a compact JSON line with sorted keys."""
    return json.dumps(chord.to_dict(), ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def write_chords_jsonl(path: Path, chords: Iterable[CanonicalChord]) -> None:
    """Write chords one per line; identical input gives identical bytes."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [dumps_chord(chord) for chord in chords]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def read_chord_records(path: Path) -> list[dict[str, Any]]:
    """Read the JSONL catalog as plain mappings, for validation."""
    return _read_json_or_jsonl(Path(path))


def read_chords_jsonl(path: Path) -> list[CanonicalChord]:
    """Read the JSONL catalog back into models."""
    return [CanonicalChord.from_dict(item) for item in read_chord_records(path)]
