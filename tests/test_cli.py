import json

import pytest

from chord_catalog.cli import main

RAW_ITEMS = [
    {
        "source": "all-guitar-chords",
        "url": "https://all-guitar-chords.com/chords/index/c-sharp/major",
        "root": "C#",
        "quality_raw": "major",
        "voicings": [{"frets": [None, 4, 6, 6, 6, 4], "base_fret": 4}],
    },
    {
        "source": "guitar-chord-org",
        "url": "https://www.guitar-chord.org/c-maj.html",
        "root": "C",
        "quality_raw": "M",
        "voicings": [{"frets": [None, 3, 2, 0, 1, 0]}],
    },
]


@pytest.fixture
def catalog(tmp_path, capsys):
    raw_path = tmp_path / "raw.json"
    raw_path.write_text(json.dumps(RAW_ITEMS), encoding="utf-8")
    output = tmp_path / "out" / "chords.jsonl"
    assert main(["merge", str(raw_path), "-o", str(output)]) == 0
    return output


class TestCli:
    def test_merge_writes_catalog(self, catalog, capsys):
        assert "Wrote 2 chord records" in capsys.readouterr().out
        ids = [json.loads(line)["id"] for line in catalog.read_text(encoding="utf-8").splitlines()]
        assert ids == ["chord:C:maj", "chord:C#:maj"]

    def test_validate_passes(self, catalog, capsys):
        assert main(["validate", str(catalog)]) == 0
        assert "Validated 2 chord records" in capsys.readouterr().out

    def test_validate_reports_error_code(self, catalog, capsys):
        lines = catalog.read_text(encoding="utf-8").splitlines()
        broken = json.loads(lines[0])
        broken["voicings"][0]["frets"] = [None, 25, 2, 0, 1, 0]
        catalog.write_text("\n".join([json.dumps(broken), lines[1]]) + "\n", encoding="utf-8")
        assert main(["validate", str(catalog), "--collect"]) == 1
        err = capsys.readouterr().err
        assert "Error [VoicingFretOutOfRange]" in err
        assert "1 chord record(s) failed validation" in err

    def test_validate_fail_fast_names_voicing_error(self, catalog, capsys):
        lines = catalog.read_text(encoding="utf-8").splitlines()
        broken = json.loads(lines[0])
        broken["voicings"][0]["frets"] = [None] * 6
        catalog.write_text(json.dumps(broken) + "\n", encoding="utf-8")
        assert main(["validate", str(catalog)]) == 1
        assert "Error [VoicingAllStringsMuted]" in capsys.readouterr().err

    def test_report_markdown(self, catalog, capsys):
        assert main(["report", str(catalog)]) == 0
        out = capsys.readouterr().out
        assert "# Root x Quality Coverage" in out
        assert "| chord:C#:maj | chord:Db:maj | missing_target |" in out

    def test_report_json(self, catalog, capsys):
        capsys.readouterr()
        assert main(["report", str(catalog), "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["coverage"]["observed_combinations"] == 2
        assert report["enharmonic"]["asymmetries"][0]["kind"] == "missing_target"

    def test_report_strict_fails_on_gaps(self, catalog):
        assert main(["report", str(catalog), "--strict"]) == 1

    def test_unsupported_quality_exits_nonzero(self, tmp_path, capsys):
        raw_path = tmp_path / "raw.jsonl"
        item = dict(RAW_ITEMS[1], quality_raw="add13#11")
        raw_path.write_text(json.dumps(item) + "\n", encoding="utf-8")
        assert main(["merge", str(raw_path), "-o", str(tmp_path / "chords.jsonl")]) == 1
        assert "Error [UnsupportedQuality]" in capsys.readouterr().err

    def test_unregistered_source_exits_nonzero(self, tmp_path, capsys):
        raw_path = tmp_path / "raw.jsonl"
        item = dict(RAW_ITEMS[1], source="new-site")
        raw_path.write_text(json.dumps(item) + "\n", encoding="utf-8")
        assert main(["merge", str(raw_path), "-o", str(tmp_path / "chords.jsonl")]) == 1
        err = capsys.readouterr().err
        assert "Error [UnknownSource]" in err
        assert "new-site" in err

    def test_merge_keeps_parser_confidence_on_request(self, tmp_path):
        raw_path = tmp_path / "raw.jsonl"
        item = dict(RAW_ITEMS[1], parser_confidence={"source": "guitar-chord-org", "level": "high", "checks": []})
        raw_path.write_text(json.dumps(item) + "\n", encoding="utf-8")
        output = tmp_path / "chords.jsonl"
        assert main(["merge", str(raw_path), "-o", str(output), "--parser-confidence"]) == 0
        [record] = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
        assert record["parser_confidence"] == [{"source": "guitar-chord-org", "level": "high", "checks": []}]
        assert main(["validate", str(output)]) == 0
