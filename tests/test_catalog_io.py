import json

import pytest

from chord_catalog import merge_records
from chord_catalog.catalog_io import (
    dumps_chord,
    raw_record_from_dict,
    read_chords_jsonl,
    read_raw_records,
    write_chords_jsonl,
)
from chord_catalog.errors import ErrorCode, UnknownSourceError, UnsupportedQualityError
from chord_catalog.models import RawRecord
from chord_catalog.sources import SOURCE_REGISTRY, SourceEntry, order_by_registry
from chord_catalog.validate import validate_chords

RAW_ITEMS = [
    {
        "source": "guitar-chord-org",
        "url": "https://www.guitar-chord.org/c-maj.html",
        "root": "C",
        "quality_raw": "major",
        "voicings": [{"frets": [None, 3, 2, 0, 1, 0], "fingers": [None, 3, 2, None, 1, None]}],
    },
    {
        "source": "all-guitar-chords",
        "url": "https://all-guitar-chords.com/chords/index/a/minor",
        "symbol": "Am",
        "voicings": [{"frets": [None, 0, 2, 2, 1, 0], "base_fret": 1}],
    },
]


class TestRawRecords:
    def test_read_json_array(self, tmp_path):
        path = tmp_path / "raw.json"
        path.write_text(json.dumps(RAW_ITEMS), encoding="utf-8")
        records = read_raw_records(path)
        assert [r.source for r in records] == ["guitar-chord-org", "all-guitar-chords"]
        assert records[0].voicings[0].frets == (None, 3, 2, 0, 1, 0)

    def test_read_jsonl(self, tmp_path):
        path = tmp_path / "raw.jsonl"
        path.write_text("\n".join(json.dumps(item) for item in RAW_ITEMS) + "\n\n", encoding="utf-8")
        assert len(read_raw_records(path)) == 2

    def test_symbol_fills_root_and_quality(self):
        record = raw_record_from_dict(RAW_ITEMS[1])
        assert (record.root, record.quality_raw) == ("A", "m")
        assert record.symbol == "Am"

    def test_explicit_fields_win_over_symbol(self):
        record = raw_record_from_dict({"source": "s", "url": "u", "root": "Bb", "quality_raw": "7", "symbol": "A#7"})
        assert record.root == "Bb"

    def test_unparseable_symbol(self):
        with pytest.raises(UnsupportedQualityError):
            raw_record_from_dict({"source": "s", "url": "u", "symbol": "Xyz"})

    def test_missing_root_without_symbol(self):
        with pytest.raises(KeyError):
            raw_record_from_dict({"source": "s", "url": "u", "quality_raw": "major"})


class TestCatalogJsonl:
    def test_write_is_deterministic(self, tmp_path):
        raw = [raw_record_from_dict(item) for item in RAW_ITEMS]
        first = tmp_path / "a" / "chords.jsonl"
        second = tmp_path / "b" / "chords.jsonl"
        write_chords_jsonl(first, merge_records(raw))
        write_chords_jsonl(second, merge_records(raw))
        assert first.read_bytes() == second.read_bytes()

    def test_one_sorted_compact_object_per_line(self, tmp_path):
        path = tmp_path / "chords.jsonl"
        write_chords_jsonl(path, merge_records([raw_record_from_dict(item) for item in RAW_ITEMS]))
        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["id"] for line in lines] == ["chord:C:maj", "chord:A:min"]
        assert lines[0].startswith('{"aliases":')
        assert ", " not in lines[0]
        assert path.read_text(encoding="utf-8").endswith("}\n")

    def test_roundtrip_models(self, tmp_path):
        chords = merge_records([raw_record_from_dict(item) for item in RAW_ITEMS])
        path = tmp_path / "chords.jsonl"
        write_chords_jsonl(path, chords)
        assert read_chords_jsonl(path) == chords

    def test_non_ascii_kept(self, make_raw):
        [chord] = merge_records([make_raw(quality_raw="Δ", aliases=("CΔ",))])
        assert "CΔ" in dumps_chord(chord)


class TestSourceRegistry:
    def test_registry_ids(self):
        assert [entry.id for entry in SOURCE_REGISTRY] == ["guitar-chord-org", "all-guitar-chords"]

    def test_orders_by_registry_position(self, make_raw):
        records = [
            make_raw("A", source="all-guitar-chords"),
            make_raw("C", source="guitar-chord-org"),
            make_raw("B", source="all-guitar-chords"),
        ]
        ordered = order_by_registry(records)
        assert [(r.source, r.root) for r in ordered] == [
            ("guitar-chord-org", "C"),
            ("all-guitar-chords", "A"),
            ("all-guitar-chords", "B"),
        ]

    def test_unknown_source_raises(self, make_raw):
        with pytest.raises(UnknownSourceError, match="No source registry entry found for mystery") as exc_info:
            order_by_registry([make_raw(source="mystery")])
        assert exc_info.value.code is ErrorCode.UNKNOWN_SOURCE
        assert exc_info.value.source == "mystery"

    def test_custom_registry(self):
        registry = (SourceEntry(id="b", display_name="B", base_url="https://b.test"),
                    SourceEntry(id="a", display_name="A", base_url="https://a.test"))
        records = [RawRecord(source="a", url="u", root="C", quality_raw=""),
                   RawRecord(source="b", url="u", root="C", quality_raw="")]
        assert [r.source for r in order_by_registry(records, registry)] == ["b", "a"]


class TestScrapedVoicingFields:
    def test_tags_difficulty_and_confidence_survive_jsonl(self, tmp_path):
        item = dict(
            RAW_ITEMS[0],
            voicings=[{"frets": [None, 3, 2, 0, 1, 0], "tags": ["beginner"], "difficulty": "easy"}],
            parser_confidence={"source": "guitar-chord-org", "level": "high", "checks": ["has_root"]},
        )
        raw_path = tmp_path / "raw.jsonl"
        raw_path.write_text(json.dumps(item) + "\n", encoding="utf-8")
        chords = merge_records(read_raw_records(raw_path), include_parser_confidence=True)

        [record] = [chord.to_dict() for chord in chords]
        assert record["voicings"][0]["tags"] == ["beginner"]
        assert record["voicings"][0]["difficulty"] == "easy"
        assert record["parser_confidence"] == [{"source": "guitar-chord-org", "level": "high", "checks": ["has_root"]}]
        validate_chords([record])

        path = tmp_path / "chords.jsonl"
        write_chords_jsonl(path, chords)
        assert read_chords_jsonl(path) == chords
