"""Tests for canonical field extraction over raw rows (field_extractor.py).

Covers:
- Ordered alias precedence (first present alias wins)
- Empty / whitespace / N/A values treated as absent
- Header matching that ignores case and surrounding whitespace
- Numeric zero counts as present
"""
import pytest

from offshore_logistics.modules.field_extractor import extract, extract_text, is_absent


class TestAliasPrecedence:
    def test_first_alias_wins(self):
        row = {"Rig Location": "Mad Dog", "Location Reference": "Argos"}
        assert extract(row, "rig_location") == "Mad Dog"

    def test_falls_through_empty_alias(self):
        row = {"Rig Location": "   ", "Location Reference": "Argos", "Rig Reference": "Atlantis"}
        assert extract(row, "rig_location") == "Argos"

    def test_falls_through_na_alias(self):
        row = {"Rig Location": "N/A", "Rig Reference": "Atlantis"}
        assert extract(row, "rig_location") == "Atlantis"

    def test_absent_when_no_alias_present(self):
        assert extract({"Other": "x"}, "rig_location") is None

    def test_explicit_alias_list(self):
        row = {"Custom": "value"}
        assert extract(row, "anything", aliases=("Missing", "Custom")) == "value"

    def test_unknown_field_raises(self):
        with pytest.raises(KeyError):
            extract({}, "not_a_field")

    def test_days_aliases_in_order(self):
        row = {"Days": "3", "Total Allocated Days": "5"}
        assert extract(row, "allocated_days") == "5"


class TestAbsentValues:
    @pytest.mark.parametrize("value", [None, "", "   ", "N/A", "n/a", "#N/A", float("nan")])
    def test_absent_markers(self, value):
        assert is_absent(value)

    @pytest.mark.parametrize("value", [0, 0.0, "0", "Diesel", False])
    def test_present_values(self, value):
        assert not is_absent(value)

    def test_zero_is_returned(self):
        assert extract({"Hours": 0}, "hours") == 0

    def test_strings_are_stripped(self):
        assert extract({"Event": "  Cargo Ops  "}, "event") == "Cargo Ops"


class TestHeaderMatching:
    def test_case_insensitive_header(self):
        assert extract({"lc number": "9358"}, "lc_number") == "9358"

    def test_header_with_padding(self):
        assert extract({" LC Number ": "9358"}, "lc_number") == "9358"

    def test_extract_text_drops_float_suffix(self):
        assert extract_text({"LC Number": 10140.0}, "lc_number") == "10140"
        assert extract_text({"Qty": 1.5}, "qty") == "1.5"
