"""
Unit Tests for Amount Parsing

Covers both decimal conventions and the currency symbol table.
"""

from decimal import Decimal

import pytest

from dealsplit.amounts import SYMBOL_TO_CODE, currency_code_for, parse_amount


class TestParseAmount:
    """Test locale-tolerant amount parsing."""

    def test_plain_integer(self):
        assert parse_amount("25") == Decimal("25")

    def test_dot_decimal(self):
        assert parse_amount("25.6") == Decimal("25.6")

    def test_comma_decimal(self):
        assert parse_amount("25,60") == Decimal("25.60")

    def test_comma_thousands_dot_decimal(self):
        assert parse_amount("1,234.56") == Decimal("1234.56")

    def test_dot_thousands_comma_decimal(self):
        assert parse_amount("1.234,56") == Decimal("1234.56")

    def test_repeated_separator_is_grouping(self):
        assert parse_amount("1,234,567") == Decimal("1234567")
        assert parse_amount("1.234.567") == Decimal("1234567")

    def test_three_digit_tail_is_grouping(self):
        """A single separator followed by exactly three digits groups thousands."""
        assert parse_amount("1,500") == Decimal("1500")
        assert parse_amount("61.750") == Decimal("61750")

    def test_symbols_and_spaces_are_ignored(self):
        assert parse_amount(" $ 18.75 ") == Decimal("18.75")
        assert parse_amount("€4,50") == Decimal("4.50")

    def test_no_digits_raises(self):
        with pytest.raises(ValueError):
            parse_amount("$")

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            parse_amount("")


class TestCurrencyCodeFor:
    """Test symbol / ISO prefix mapping."""

    @pytest.mark.parametrize("symbol,code", [
        ("$", "USD"),
        ("US$", "USD"),
        ("R$", "BRL"),
        ("€", "EUR"),
        ("£", "GBP"),
        ("¥", "CNY"),
        ("C$", "CAD"),
    ])
    def test_known_symbols(self, symbol, code):
        assert currency_code_for(symbol) == code

    def test_missing_prefix_means_dollars(self):
        assert currency_code_for(None) == "USD"
        assert currency_code_for("") == "USD"

    def test_iso_prefix_passes_through(self):
        assert currency_code_for("EUR") == "EUR"
        assert currency_code_for("jpy") == "JPY"

    def test_symbol_table_is_read_only(self):
        with pytest.raises(TypeError):
            SYMBOL_TO_CODE["$"] = "CAD"
