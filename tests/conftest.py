import copy

import pytest

from chord_catalog.models import RawRecord, RawVoicing

VALID_RECORD = {
    "id": "chord:C:maj",
    "root": "C",
    "quality": "maj",
    "aliases": ["C", "CM"],
    "enharmonic_equivalents": [],
    "formula": ["1", "3", "5"],
    "pitch_classes": ["C", "E", "G"],
    "tuning": ["E", "A", "D", "G", "B", "E"],
    "voicings": [
        {
            "id": "chord:C:maj:v1:unit",
            "frets": [None, 3, 2, 0, 1, 0],
            "base_fret": 1,
            "position": "open",
            "source_refs": [{"source": "unit", "url": "https://example.com/c-major"}],
        }
    ],
    "notes": {"summary": "C maj chord with formula 1-3-5."},
    "source_refs": [{"source": "unit", "url": "https://example.com/c-major"}],
}


@pytest.fixture
def valid_record():
    """A schema-valid serialized chord record, safe to mutate."""
    return copy.deepcopy(VALID_RECORD)


@pytest.fixture
def make_record():
    """Factory for serialized chord records with an overridable id and fields."""

    def _make(chord_id="chord:C:maj", **overrides):
        record = copy.deepcopy(VALID_RECORD)
        _, root, quality = chord_id.split(":")
        record.update(id=chord_id, root=root, quality=quality)
        record["voicings"][0]["id"] = f"{chord_id}:v1:unit"
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_raw():
    """Factory for raw records with one open C-shape voicing by default."""

    def _make(root="C", quality_raw="major", source="guitar-chord-org", **overrides):
        fields = {
            "source": source,
            "url": f"https://{source}.test/{root.lower()}-{quality_raw}",
            "root": root,
            "quality_raw": quality_raw,
            "voicings": (RawVoicing(frets=(None, 3, 2, 0, 1, 0), fingers=(None, 3, 2, None, 1, None)),),
        }
        fields.update(overrides)
        return RawRecord(**fields)

    return _make
