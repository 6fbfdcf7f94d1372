import pytest

from chord_catalog import merge_records
from chord_catalog.errors import ErrorCode, ProvenanceMissingError
from chord_catalog.validate import check_provenance, find_provenance_gaps


class TestProvenance:
    def test_clean_record_has_no_gaps(self, valid_record):
        assert find_provenance_gaps([valid_record]) == []
        check_provenance([valid_record])

    def test_merged_catalog_has_full_provenance(self, make_raw):
        chords = merge_records([make_raw(), make_raw("G", "7", source="all-guitar-chords")])
        assert find_provenance_gaps(chords) == []

    def test_empty_chord_source_refs(self, valid_record):
        valid_record["source_refs"] = []
        with pytest.raises(ProvenanceMissingError) as exc_info:
            check_provenance([valid_record])
        assert exc_info.value.code is ErrorCode.PROVENANCE_MISSING
        assert exc_info.value.path == "chord:C:maj › source_refs is empty"

    def test_missing_chord_source_refs(self, valid_record):
        del valid_record["source_refs"]
        assert find_provenance_gaps([valid_record]) == ["chord:C:maj › source_refs is empty"]

    def test_blank_voicing_url(self, valid_record):
        valid_record["voicings"][0]["source_refs"][0]["url"] = "   "
        with pytest.raises(ProvenanceMissingError, match="voicing chord:C:maj:v1:unit") as exc_info:
            check_provenance([valid_record])
        assert exc_info.value.path == "chord:C:maj › voicing chord:C:maj:v1:unit › source_refs[0].url is empty"

    def test_blank_source_name(self, valid_record):
        valid_record["source_refs"].append({"source": "", "url": "https://example.com/x"})
        assert find_provenance_gaps([valid_record]) == ["chord:C:maj › source_refs[1].source is empty"]

    def test_all_gaps_listed_in_record_order(self, make_record):
        first = make_record("chord:C:maj", source_refs=[])
        second = make_record("chord:D:maj")
        second["voicings"][0]["source_refs"] = []
        assert find_provenance_gaps([first, second]) == [
            "chord:C:maj › source_refs is empty",
            "chord:D:maj › voicing chord:D:maj:v1:unit › source_refs is empty",
        ]

    def test_fails_on_first_gap(self, make_record):
        first = make_record("chord:C:maj", source_refs=[])
        second = make_record("chord:D:maj", source_refs=[])
        with pytest.raises(ProvenanceMissingError) as exc_info:
            check_provenance([first, second])
        assert exc_info.value.record_id == "chord:C:maj"
