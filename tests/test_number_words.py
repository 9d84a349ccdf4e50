"""Tests for amount-in-words conversion."""

import pytest

from gst_invoice.domain.services.number_words import number_to_words


class TestNumberToWords:

    @pytest.mark.parametrize("num,words", [
        (1, "One Only"),
        (15, "Fifteen Only"),
        (20, "Twenty Only"),
        (99, "Ninety Nine Only"),
        (115, "One Hundred Fifteen Only"),
        (1000, "One Thousand Only"),
        (43660, "Forty Three Thousand Six Hundred Sixty Only"),
        (150000, "One Lakh Fifty Thousand Only"),
        (118000, "One Lakh Eighteen Thousand Only"),
        (10_000_000, "One Crore Only"),
        (
            12345678,
            "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight Only",
        ),
    ])
    def test_indian_numbering(self, num, words):
        assert number_to_words(num) == words

    def test_zero_has_no_suffix(self):
        assert number_to_words(0) == "Zero"

    def test_thousand_crore_and_above(self):
        assert number_to_words(10_000_000_000) == "One Thousand Crore Only"
        assert number_to_words(1_234_00_00_000) == "One Thousand Two Hundred Thirty Four Crore Only"

    def test_teens_take_no_trailing_unit(self):
        assert number_to_words(11_000) == "Eleven Thousand Only"
        assert number_to_words(219) == "Two Hundred Nineteen Only"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            number_to_words(-1)
