"""
Unit tests for HeaderExtractor.
"""

from datetime import date

from invoice_lines.parsing.header import HeaderExtractor
from invoice_lines.parsing.invoice import UNKNOWN_VENDOR
from invoice_lines.parsing.segmenter import split_lines


class TestExtractVendor:
    """Test cases for vendor identification."""

    def setup_method(self):
        self.extractor = HeaderExtractor()

    def test_known_vendor(self):
        """A known substring wins with high confidence."""
        vendor = self.extractor.extract_vendor(["TAX INVOICE", "little valley distribution pty"])
        assert vendor.name == "Little Valley Distribution"
        assert vendor.confidence == 0.9

    def test_company_like_line(self):
        vendor = self.extractor.extract_vendor(["TAX INVOICE", "Harvest Wholefoods"])
        assert vendor.name == "Harvest Wholefoods"
        assert vendor.confidence == 0.8

    def test_non_vendor_lines_are_skipped(self):
        vendor = self.extractor.extract_vendor(["12345", "Page 1", "$4.00", "Green Pantry Co"])
        assert vendor.name == "Green Pantry Co"

    def test_first_substantial_line_fallback(self):
        """Lower-case lines are not company-like but can still be used."""
        vendor = self.extractor.extract_vendor(["invoice", "fresh market stall"])
        assert vendor.name == "fresh market stall"
        assert vendor.confidence == 0.5

    def test_unknown_vendor(self):
        vendor = self.extractor.extract_vendor(["invoice", "1234"])
        assert vendor.name == UNKNOWN_VENDOR
        assert vendor.confidence == 0.1
        assert vendor.is_unknown

    def test_empty_lines(self):
        assert self.extractor.extract_vendor([]).name == UNKNOWN_VENDOR

    def test_company_name_rules(self):
        assert HeaderExtractor.looks_like_company_name("Harvest Wholefoods")
        assert not HeaderExtractor.looks_like_company_name("Abc")
        assert not HeaderExtractor.looks_like_company_name("Invoice Date")
        assert not HeaderExtractor.looks_like_company_name("2 Bags $4")
        assert not HeaderExtractor.looks_like_company_name("lowercase only")


class TestExtractInvoiceNumber:
    """Test cases for invoice number extraction."""

    def setup_method(self):
        self.extractor = HeaderExtractor()

    def test_label_variants(self):
        assert self.extractor.extract_invoice_number(["Invoice No. : 448812"]) == "448812"
        assert self.extractor.extract_invoice_number(["Invoice Number: 20931"]) == "20931"
        assert self.extractor.extract_invoice_number(["Inv No 5521"]) == "5521"
        assert self.extractor.extract_invoice_number(["Invoice # 55120"]) == "55120"
        assert self.extractor.extract_invoice_number(["Invoice 3301"]) == "3301"
        assert self.extractor.extract_invoice_number(["TAX INVOICE 7781234"]) == "7781234"

    def test_bare_number_fallback(self):
        assert self.extractor.extract_invoice_number(["Acme", "00448812"]) == "00448812"

    def test_bare_number_fallback_can_be_disabled(self):
        self.extractor.allow_bare_invoice_number = False
        assert self.extractor.extract_invoice_number(["Acme", "00448812"]) is None

    def test_bare_number_length_limits(self):
        assert self.extractor.extract_invoice_number(["12345"]) is None
        assert self.extractor.extract_invoice_number(["123456789"]) is None

    def test_first_matching_line_wins(self):
        lines = ["Invoice No: 111", "Invoice No: 222"]
        assert self.extractor.extract_invoice_number(lines) == "111"

    def test_missing(self):
        assert self.extractor.extract_invoice_number(["Acme", "Thanks"]) is None

    def test_scan_window(self):
        lines = [f"line {n}" for n in range(20)] + ["Invoice No: 9"]
        assert self.extractor.extract_invoice_number(lines) is None


class TestExtractInvoiceDate:
    """Test cases for invoice date extraction."""

    def setup_method(self):
        self.extractor = HeaderExtractor()

    def test_first_valid_date(self, little_valley_text):
        lines = split_lines(little_valley_text)
        assert self.extractor.extract_invoice_date(lines) == date(2025, 3, 12)

    def test_invalid_date_is_passed_over(self):
        lines = ["Date: 31/02/2025", "Delivered 04/03/2025"]
        assert self.extractor.find_invoice_date(lines) == date(2025, 3, 4)

    def test_defaults_to_today(self):
        assert self.extractor.find_invoice_date(["No date here"]) is None
        assert self.extractor.extract_invoice_date(["No date here"]) == date.today()
