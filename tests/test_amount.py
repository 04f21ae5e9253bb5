"""Tests for the amount locator."""

import pytest

from beancount_editor.amount import DecimalToken, locate_decimal


class TestLocateDecimal:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("100.00 USD", DecimalToken("100.", 0)),
            ("-20,002.00 USD", DecimalToken("-20,002.", 0)),
            ("+5.5 EUR", DecimalToken("+5.", 0)),
            ("100. USD", DecimalToken("100.", 0)),
            ("0.001 BTC @ 40000 USD", DecimalToken("0.", 0)),
        ],
    )
    def test_decimal_amounts(self, text, expected):
        assert locate_decimal(text) == expected

    def test_integer_amount(self):
        assert locate_decimal("100 USD") is None

    def test_only_leading_amount_is_considered(self):
        """A decimal price or cost after an integer amount is not the amount."""
        assert locate_decimal("10 AAPL {150.00 USD}") is None

    def test_text_before_number(self):
        assert locate_decimal("(12.50) USD") == DecimalToken("12.", 1)

    def test_no_number(self):
        assert locate_decimal("USD") is None
        assert locate_decimal("") is None
