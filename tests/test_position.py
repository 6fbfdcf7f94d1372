import pytest

from chord_catalog import derive_position


class TestDerivePosition:
    def test_open_c_shape(self):
        assert derive_position([None, 3, 2, 0, 1, 0]) == "open"

    def test_full_barre(self):
        assert derive_position([3, 3, 5, 5, 3, 3]) == "barre"

    def test_upper_neck(self):
        assert derive_position([None, 7, 9, 9, 8, None]) == "upper"

    def test_all_muted_is_unknown(self):
        assert derive_position([None] * 6) == "unknown"

    def test_all_open_is_open(self):
        assert derive_position([0, 0, 0, 0, 0, 0]) == "open"

    def test_open_string_under_high_shape_is_unknown(self):
        # 7th-fret shape ringing an open string: too high for open, and the
        # open string keeps it out of upper
        assert derive_position([0, 7, 9, 9, 8, None]) == "unknown"

    def test_open_beats_barre(self):
        assert derive_position([1, 1, 1, 1, 0, 0]) == "open"

    def test_barre_beats_upper(self):
        assert derive_position([5, 5, 5, 5, 7, None]) == "barre"

    def test_open_strings_do_not_count_towards_barre(self):
        # Lowest fretted value 7 appears on only three strings; the open
        # strings are not part of the run and block upper
        assert derive_position([0, 7, 7, 7, 0, 9]) == "unknown"

    def test_muted_strings_ignored_for_barre(self):
        assert derive_position([None, 2, 2, 2, 2, None]) == "barre"

    def test_three_string_run_at_low_fret_is_unknown(self):
        assert derive_position([None, 2, 2, 2, 4, None]) == "unknown"

    def test_low_fret_without_open_string_is_unknown(self):
        assert derive_position([None, None, 3, 2, 3, 1]) == "unknown"

    @pytest.mark.parametrize(
        ("frets", "expected"),
        [
            ((None, 0, 2, 2, 1, 0), "open"),
            ((3, 2, 0, 0, 0, 3), "open"),
            ((1, 3, 3, 1, 1, 1), "barre"),
            ((None, 5, 7, 7, 6, 5), "upper"),
        ],
    )
    def test_common_shapes(self, frets, expected):
        assert derive_position(frets) == expected

    def test_barre_ignores_open_strings(self):
        assert derive_position([0, 7, 7, 7, 7, 9]) == "barre"
