"""Category C: Round Selection Tests

Tests for parse_rounds() and filter_rounds().
"""

import pytest

from pipeline.constants import DEFAULT_ROUNDS
from pipeline.filtering import filter_rounds, missing_rounds, parse_rounds


class TestC1_ParseRounds:

    @pytest.mark.parametrize("spec,expected", [
        ("4-8", [4, 5, 6, 7, 8]),
        ("4,5,6", [4, 5, 6]),
        ("4-6,12-13", [4, 5, 6, 12, 13]),
        ("4-5,17,18", [4, 5, 17, 18]),
        (" 4 - 5 , 9 ", [4, 5, 9]),
        ("7", [7]),
        ("3-3", [3]),
    ])
    def test_formats(self, spec, expected):
        assert parse_rounds(spec) == expected

    @pytest.mark.parametrize("spec", ["", "   ", None])
    def test_empty_means_default(self, spec):
        assert parse_rounds(spec) == DEFAULT_ROUNDS

    def test_default_is_copy(self):
        rounds = parse_rounds("")
        rounds.append(99)
        assert 99 not in DEFAULT_ROUNDS

    def test_duplicates_removed_first_wins(self):
        assert parse_rounds("5,4-6,5") == [5, 4, 6]

    @pytest.mark.parametrize("spec", ["8-4", "a", "4-b", "1-2-3", "4,,5", "-3"])
    def test_invalid(self, spec):
        with pytest.raises(ValueError):
            parse_rounds(spec)


class TestC2_FilterRounds:

    def test_string_keys(self):
        data = {"3": ["m3"], "4": ["m4"], "5": ["m5"]}
        assert filter_rounds(data, [4, 5]) == {"4": ["m4"], "5": ["m5"]}

    def test_int_keys(self):
        assert filter_rounds({4: ["m4"], 9: ["m9"]}, [4]) == {4: ["m4"]}

    def test_missing_round_ignored(self):
        assert filter_rounds({"4": ["m4"]}, [4, 5]) == {"4": ["m4"]}

    def test_zero_padded_keys(self):
        data = {"04": ["m4"], " 5 ": ["m5"], "6": ["m6"]}
        assert filter_rounds(data, [4, 5]) == {"04": ["m4"], " 5 ": ["m5"]}

    def test_non_numeric_keys_never_selected(self):
        assert filter_rounds({"final": ["m"], "4": ["m4"]}, [4]) == {"4": ["m4"]}


class TestC3_MissingRounds:

    def test_reports_in_request_order(self):
        assert missing_rounds({"04": [], 6: []}, [7, 4, 5, 6]) == [7, 5]

    def test_none_missing(self):
        assert missing_rounds({"4": [], "5": []}, [4, 5]) == []
