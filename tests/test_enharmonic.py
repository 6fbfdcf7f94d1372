from chord_catalog import merge_records
from chord_catalog.validate import EnharmonicPair, build_enharmonic_report, format_enharmonic_report


def _record(chord_id, *equivalents):
    return {"id": chord_id, "enharmonic_equivalents": list(equivalents)}


class TestEnharmonicReport:
    def test_mutual_pair_recorded_once(self):
        report = build_enharmonic_report(
            [_record("chord:Db:maj", "chord:C#:maj"), _record("chord:C#:maj", "chord:Db:maj")]
        )
        assert report.pairs == (EnharmonicPair(a="chord:C#:maj", b="chord:Db:maj"),)
        assert report.asymmetries == ()
        assert report.total_records == 2
        assert report.records_with_enharmonics == 2

    def test_self_reference(self):
        report = build_enharmonic_report([_record("chord:C:maj", "chord:C:maj")])
        [asymmetry] = report.asymmetries
        assert asymmetry.kind == "self_reference"
        assert report.errors == (asymmetry,)
        assert report.pairs == ()

    def test_missing_target(self):
        report = build_enharmonic_report([_record("chord:C#:maj", "chord:Db:maj")])
        [asymmetry] = report.asymmetries
        assert (asymmetry.source, asymmetry.target, asymmetry.kind) == ("chord:C#:maj", "chord:Db:maj", "missing_target")
        assert "does not exist" in asymmetry.reason

    def test_not_reciprocated(self):
        report = build_enharmonic_report([_record("chord:C#:maj", "chord:Db:maj"), _record("chord:Db:maj")])
        [asymmetry] = report.asymmetries
        assert asymmetry.kind == "not_reciprocated"
        assert report.errors == ()
        assert report.records_with_enharmonics == 1

    def test_asymmetries_sorted(self):
        report = build_enharmonic_report(
            [_record("chord:Gb:maj", "chord:F#:maj"), _record("chord:A#:min", "chord:Bb:min")]
        )
        assert [a.source for a in report.asymmetries] == ["chord:A#:min", "chord:Gb:maj"]

    def test_missing_equivalents_field(self):
        report = build_enharmonic_report([{"id": "chord:C:maj"}])
        assert report.pairs == ()
        assert report.records_with_enharmonics == 0

    def test_merged_sharp_without_flat_is_missing_target(self, make_raw):
        chords = merge_records([make_raw("C#", "major")])
        report = build_enharmonic_report(chords)
        assert [(a.source, a.target, a.kind) for a in report.asymmetries] == [
            ("chord:C#:maj", "chord:Db:maj", "missing_target")
        ]

    def test_merged_spellings_pair_up(self, make_raw):
        chords = merge_records([make_raw("C#", "major"), make_raw("Db", "major")])
        report = build_enharmonic_report(chords)
        assert report.pairs == (EnharmonicPair(a="chord:C#:maj", b="chord:Db:maj"),)

    def test_to_dict_uses_from_and_to(self):
        report = build_enharmonic_report([_record("chord:C#:maj", "chord:Db:maj")])
        [entry] = report.to_dict()["asymmetries"]
        assert entry["from"] == "chord:C#:maj"
        assert entry["to"] == "chord:Db:maj"


class TestEnharmonicMarkdown:
    def test_renders_pairs_and_asymmetries(self):
        report = build_enharmonic_report(
            [
                _record("chord:C#:maj", "chord:Db:maj"),
                _record("chord:Db:maj", "chord:C#:maj"),
                _record("chord:F#:min", "chord:Gb:min"),
            ]
        )
        text = format_enharmonic_report(report)
        assert "Examined 3 chord records; 3 declare at least one enharmonic equivalent." in text
        assert "| chord:C#:maj | chord:Db:maj |" in text
        assert "| chord:F#:min | chord:Gb:min | missing_target |" in text

    def test_empty_report(self):
        text = format_enharmonic_report(build_enharmonic_report([]))
        assert "_No symmetric pairs found._" in text
        assert "_No asymmetries detected._" in text

    def test_deterministic(self):
        records = [_record("chord:Gb:maj", "chord:F#:maj"), _record("chord:F#:maj", "chord:Gb:maj")]
        first = format_enharmonic_report(build_enharmonic_report(records))
        second = format_enharmonic_report(build_enharmonic_report(list(reversed(records))))
        assert first == second
