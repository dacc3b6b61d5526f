"""
Unit tests for amount, date and name normalization.
"""

from datetime import date

import pytest

from invoice_lines.parsing.normalizers import (
    AmountNormalizer,
    DateNormalizer,
    clean_product_name,
    clean_vendor_name,
)


class TestAmountNormalizer:
    """Test cases for AmountNormalizer."""

    def setup_method(self):
        self.normalizer = AmountNormalizer()

    @pytest.mark.parametrize("raw, expected", [
        ("12.50", 12.5),
        ("$1,234.56", 1234.56),
        ("AUD 99.00", 99.0),
        ("€7.25", 7.25),
    ])
    def test_to_float(self, raw, expected):
        """Currency markers and separators are stripped."""
        assert self.normalizer.to_float(raw) == pytest.approx(expected)

    def test_to_float_rejects_garbage(self):
        """Strings without a usable number give None."""
        assert self.normalizer.to_float("n/a") is None
        assert self.normalizer.to_float("1.2.3") is None
        assert self.normalizer.to_float(None) is None

    def test_normalize_formats_two_decimals(self):
        assert self.normalizer.normalize("$5") == "5.00"


class TestDateNormalizer:
    """Test cases for DateNormalizer."""

    def setup_method(self):
        self.normalizer = DateNormalizer()

    def test_day_first(self):
        """D/M/YYYY is read day first."""
        assert self.normalizer.extract_date("Date: 05/03/2025") == date(2025, 3, 5)

    def test_day_first_with_dashes(self):
        assert self.normalizer.extract_date("Invoice Date 7-11-2024") == date(2024, 11, 7)

    def test_year_first(self):
        assert self.normalizer.extract_date("Issued 2025/02/14") == date(2025, 2, 14)

    def test_month_name(self):
        assert self.normalizer.extract_date("12 Mar 2025") == date(2025, 3, 12)
        assert self.normalizer.extract_date("3 September 2024") == date(2024, 9, 3)

    def test_invalid_date_is_skipped(self):
        """An impossible date falls through to the next shape or None."""
        assert self.normalizer.extract_date("31/02/2025") is None

    def test_no_date(self):
        assert self.normalizer.extract_date("Invoice No. : 448812") is None


class TestCleanProductName:
    """Test cases for clean_product_name."""

    def test_strips_dashed_letter_code(self):
        assert clean_product_name("BOK-CCGF-001 Organic Kale") == "Organic Kale"

    def test_strips_short_alnum_code(self):
        assert clean_product_name("ABC123 Tahini Hulled 1kg") == "Tahini Hulled 1kg"

    def test_strips_numeric_code(self):
        assert clean_product_name("001 Spelt Flour") == "Spelt Flour"

    def test_strips_labelled_code(self):
        assert clean_product_name("ITEM-456: Maple Syrup") == "Maple Syrup"

    def test_leaves_plain_names_alone(self):
        assert clean_product_name("Organic Honey 500g") == "Organic Honey 500g"

    def test_keeps_original_when_too_short(self):
        """Stripping to fewer than three characters keeps the raw text."""
        assert clean_product_name("CODE-12 Ab") == "CODE-12 Ab"


class TestCleanVendorName:
    """Test cases for clean_vendor_name."""

    def test_removes_symbols_and_collapses_whitespace(self):
        assert clean_vendor_name("**Harvest   Wholefoods (Pty)**") == "Harvest Wholefoods Pty"

    def test_keeps_ampersand_dot_dash(self):
        assert clean_vendor_name("Smith & Co. Fine-Foods") == "Smith & Co. Fine-Foods"

    def test_truncates_to_fifty(self):
        assert len(clean_vendor_name("A" * 80)) == 50
