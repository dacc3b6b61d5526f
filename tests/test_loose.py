"""
Unit tests for the loose fallback parser.
"""

import pytest

from invoice_lines.parsing.loose import LooseLineParser, looks_like_line_item


class TestLooksLikeLineItem:
    """Test cases for the loose candidate check."""

    def test_priced_line(self):
        assert looks_like_line_item("Raw Cacao Powder 250g .... 2 $9.00")

    def test_too_short(self):
        assert not looks_like_line_item("Oat $9.00")

    def test_needs_decimal_amount(self):
        assert not looks_like_line_item("Raw Cacao Powder 250g x 2")

    def test_needs_a_word(self):
        assert not looks_like_line_item("12 x 44 = 9.00 ..")

    def test_non_item_lines_are_excluded(self):
        assert not looks_like_line_item("Freight $12.00 flat rate")


class TestLooseLineParser:
    """Test cases for LooseLineParser."""

    def setup_method(self):
        self.parser = LooseLineParser()

    def test_name_quantity_and_last_price(self):
        match = self.parser.try_match("Raw Cacao Powder 250g .... 2 $9.00")
        assert match.description == "Raw Cacao Powder 250g"
        assert match.quantity == 2
        assert match.unit_price == pytest.approx(9.00)
        assert match.layout == "loose"

    def test_last_amount_is_the_price(self):
        match = self.parser.try_match("Spelt Flour 3 bags 4.20 then 5.10")
        assert match.unit_price == pytest.approx(5.10)

    def test_quantity_defaults_to_one(self):
        match = self.parser.try_match("Dried Mango Slices $7.80")
        assert match.description == "Dried Mango Slices"
        assert match.quantity == 1

    def test_decimal_quantity(self):
        match = self.parser.try_match("Dates Medjool .. 2.00 ea $9.00")
        assert match.description == "Dates Medjool"
        assert match.quantity == 2.0
        assert match.unit_price == pytest.approx(9.00)

    def test_price_is_never_the_quantity(self):
        match = self.parser.try_match("Cashews Raw 18.00")
        assert match.quantity == 1
        assert match.unit_price == pytest.approx(18.00)

    def test_leading_quantity(self):
        match = self.parser.try_match("4 Medjool Dates ... $11.00")
        assert match.description == "Medjool Dates"
        assert match.quantity == 4

    def test_no_usable_name(self):
        assert self.parser.try_match("$9.00 .... $4.50 abc") is None

    def test_default_tax(self):
        match = self.parser.try_match("Raw Cacao Powder 250g .... 2 $9.00")
        tax = self.parser.tax_policy(match)
        assert tax.rate == 10.0
        assert tax.amount == pytest.approx(1.8)
        assert tax.has_tax is True

    def test_confidence(self):
        assert self.parser.confidence == 0.5
