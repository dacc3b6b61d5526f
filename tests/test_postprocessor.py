"""
Unit tests for invoice review and validators.
"""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from invoice_lines.parsing import InvoiceTextParser
from invoice_lines.parsing.invoice import Invoice, LineItem, Vendor
from invoice_lines.postprocessor import (
    DateValidator,
    InvoiceReviewer,
    LineItemValidator,
    ReviewThresholds,
    ValidationResult,
)


def make_item(**overrides):
    fields = dict(
        name="Coconut Water 12pk",
        quantity=1,
        unit_cost_ex_tax=24.0,
        effective_unit_cost_ex_tax=2.0,
        category="Drinks Fridge",
        confidence=0.7,
        raw_text="TR3003 Coconut Water 12pk 1 1 CTN $24.00 10 $2.40 $26.40",
        detected_pack_size=12,
        tax_rate=10.0,
        tax_amount=2.4,
        has_tax=True,
    )
    fields.update(overrides)
    return LineItem(**fields)


class TestDateValidator:
    """Test cases for DateValidator."""

    def setup_method(self):
        self.validator = DateValidator()

    def test_valid(self):
        assert self.validator.validate(date(2025, 3, 5)) == (True, "Valid date")

    def test_year_range(self):
        assert self.validator.validate(date(1999, 12, 31))[0] is False
        assert self.validator.validate(date(2101, 1, 1))[0] is False

    def test_empty(self):
        assert self.validator.validate(None) == (False, "Date is empty")

    def test_future_window(self):
        today = date(2025, 3, 1)
        assert not self.validator.is_future_date(today + timedelta(days=31), today)
        assert self.validator.is_future_date(today + timedelta(days=32), today)


class TestLineItemValidator:
    """Test cases for LineItemValidator."""

    def setup_method(self):
        self.validator = LineItemValidator()

    def test_consistent_item(self):
        assert self.validator.validate(make_item()) == []

    def test_effective_cost_mismatch(self):
        errors = self.validator.validate(make_item(effective_unit_cost_ex_tax=24.0))
        assert len(errors) == 1
        assert "effective unit cost" in errors[0]

    def test_single_unit_keeps_unit_cost(self):
        item = make_item(detected_pack_size=1, effective_unit_cost_ex_tax=24.0)
        assert self.validator.validate(item) == []

    def test_tax_flag_disagreement(self):
        errors = self.validator.validate(make_item(has_tax=False))
        assert errors == ["has_tax=False disagrees with tax amount 2.4"]

    def test_multiple_violations(self):
        item = make_item(quantity=0, detected_pack_size=0, confidence=1.5, tax_amount=-1.0, has_tax=None)
        errors = self.validator.validate(item)
        assert len(errors) == 4


class TestReviewThresholds:
    """Test cases for ReviewThresholds."""

    def setup_method(self):
        self.thresholds = ReviewThresholds()

    def test_confident_invoice(self, trumps_text):
        invoice = InvoiceTextParser().parse(trumps_text)
        assert self.thresholds.review_reasons(invoice) == []

    @pytest.mark.parametrize("item_count", [3, 4, 5, 6, 7])
    def test_known_vendor_with_layout_items_passes(self, item_count):
        """(0.9 + mean of 0.7s) / 2 lands on the 0.8 threshold and must pass."""
        rows = "\n".join(
            f"TR{1000 + n} Organic Kale Bunch 6 6 EA $3.20 10 $1.92 $21.12"
            for n in range(item_count)
        )
        text = (
            "Trumps Pty Ltd\n"
            "Invoice No. : 448812\n"
            "Date: 05/03/2025\n"
            "Code Description Ord Sup Unit Price Tax Rate Tax Total\n"
            f"{rows}\n"
        )
        invoice = InvoiceTextParser().parse(text)
        assert invoice.item_count == item_count
        assert invoice.confidence == pytest.approx(0.8)
        assert self.thresholds.review_reasons(invoice) == []

    def test_reason_order(self, mixed_text):
        invoice = InvoiceTextParser().parse(mixed_text)
        reasons = self.thresholds.review_reasons(invoice)
        assert reasons[0].startswith("Low document confidence")
        assert reasons[1] == "Only 2 line item(s) extracted (expected at least 3)"
        assert reasons[2] == "1 low-confidence line item(s): Raw Cacao Powder 250g"

    def test_non_invoice(self, roster_text):
        invoice = InvoiceTextParser().parse(roster_text)
        reasons = self.thresholds.review_reasons(invoice)
        assert reasons[0] == "Document does not look like an invoice"

    def test_unknown_vendor(self):
        invoice = Invoice(vendor=Vendor("Unknown Vendor", 0.1), invoice_date=date(2025, 1, 1))
        assert "Vendor not identified" in self.thresholds.review_reasons(invoice)


class TestInvoiceReviewer:
    """Test cases for InvoiceReviewer."""

    def setup_method(self):
        self.reviewer = InvoiceReviewer()

    def test_clean_invoice(self, trumps_text):
        result = self.reviewer.review(InvoiceTextParser().parse(trumps_text))
        assert result.is_valid
        assert not result.requires_review
        assert result.errors == []

    def test_parser_warnings_are_carried(self, failed_text):
        invoice = InvoiceTextParser().parse(failed_text)
        result = self.reviewer.review(invoice)
        assert result.is_valid
        assert result.requires_review
        for warning in invoice.warnings:
            assert warning in result.warnings

    def test_item_errors_are_numbered(self, trumps_text):
        invoice = InvoiceTextParser().parse(trumps_text)
        broken = replace(invoice.line_items[2], effective_unit_cost_ex_tax=24.0)
        invoice = replace(invoice, line_items=invoice.line_items[:2] + (broken,))

        result = self.reviewer.review(invoice)
        assert not result.is_valid
        assert list(result.item_results) == [2]
        assert result.errors[0].startswith("line item 3: ")

    def test_future_date_warning(self, trumps_text):
        invoice = InvoiceTextParser().parse(trumps_text)
        invoice = replace(invoice, invoice_date=date.today() + timedelta(days=90))
        result = self.reviewer.review(invoice)
        assert any("is in the future" in warning for warning in result.warnings)
        assert result.is_valid

    def test_out_of_range_confidence(self, trumps_text):
        invoice = replace(InvoiceTextParser().parse(trumps_text), confidence=1.2)
        result = self.reviewer.review(invoice)
        assert not result.is_valid

    def test_summarize(self, trumps_text, mixed_text):
        parser = InvoiceTextParser()
        results = self.reviewer.review_batch([parser.parse(trumps_text), parser.parse(mixed_text)])
        assert self.reviewer.summarize(results) == {
            'total': 2,
            'valid': 2,
            'invalid': 0,
            'needs_review': 1,
        }


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_to_dict(self):
        result = ValidationResult()
        result.add_warning("Invoice number not found")
        result.add_review_reason("Vendor not identified")
        result.add_item_result(0, ["quantity 0 is not positive"])
        result.add_item_result(1, [])

        data = result.to_dict()
        assert data['is_valid'] is False
        assert data['requires_review'] is True
        assert data['errors'] == ["line item 1: quantity 0 is not positive"]
        assert data['item_results'] == {"0": ["quantity 0 is not positive"]}

    def test_warnings_do_not_invalidate(self):
        result = ValidationResult()
        result.add_warning("something odd")
        assert result.is_valid
        assert not result.requires_review
