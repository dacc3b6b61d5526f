"""
Data Validators Module.

This module provides validation functions for:
    - Invoice dates
    - Line item invariants (unit economics, tax flags)
    - Review thresholds on confidence scores

Author: ML Engineering Team
"""

from datetime import date
from typing import List, Dict, Any, Tuple

from config import get_config
from invoice_lines.parsing.invoice import (
    Invoice,
    LineItem,
    DOCUMENT_TYPE_NON_INVOICE,
)
from invoice_lines.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


FLOAT_TOLERANCE = 1e-6


class DateValidator:
    """
    Validates invoice dates.

    Checks for:
        - Reasonable year range
        - Dates too far in the future (usually an OCR misread)

    Example:
        >>> validator = DateValidator()
        >>> validator.validate(date(2025, 3, 5))
        (True, 'Valid date')
        >>> validator.validate(date(1999, 1, 1))
        (False, 'Year 1999 is too old')
    """

    # Reasonable date range for invoices
    MIN_YEAR = 2000
    MAX_YEAR = 2100

    def __init__(self) -> None:
        """Initialize the date validator."""
        self.max_future_days = get_config("review.max_future_days", 31)
        logger.debug("DateValidator initialized")

    def is_valid(self, value: date) -> bool:
        valid, _ = self.validate(value)
        return valid

    def validate(self, value: date) -> Tuple[bool, str]:
        """
        Validate a date with detailed feedback.

        Args:
            value: Date to validate.

        Returns:
            Tuple of (is_valid, message).
        """
        if value is None:
            return False, "Date is empty"

        if value.year < self.MIN_YEAR:
            return False, f"Year {value.year} is too old"
        if value.year > self.MAX_YEAR:
            return False, f"Year {value.year} is too far in future"

        return True, "Valid date"

    def is_future_date(self, value: date, today: date = None) -> bool:
        """Check if the date lies beyond the allowed look-ahead window."""
        today = today or date.today()
        return (value - today).days > self.max_future_days


class LineItemValidator:
    """
    Checks the invariants every parsed line item must satisfy.

    Checks for:
        - Positive quantity and non-negative costs
        - Pack size of at least 1
        - Effective unit cost equal to unit cost / pack size
        - has_tax agreeing with tax_amount > 0
        - Confidence within [0, 1]

    Example:
        >>> validator = LineItemValidator()
        >>> validator.validate(item)
        []
    """

    def validate(self, item: LineItem) -> List[str]:
        """
        Validate one item.

        Args:
            item: LineItem to check.

        Returns:
            List of violation messages, empty when the item is consistent.
        """
        errors = []

        if item.quantity <= 0:
            errors.append(f"quantity {item.quantity} is not positive")

        if item.unit_cost_ex_tax < 0:
            errors.append(f"unit cost {item.unit_cost_ex_tax} is negative")

        if item.detected_pack_size < 1:
            errors.append(f"pack size {item.detected_pack_size} is below 1")
        else:
            expected = item.unit_cost_ex_tax
            if item.detected_pack_size > 1:
                expected = item.unit_cost_ex_tax / item.detected_pack_size
            if abs(item.effective_unit_cost_ex_tax - expected) > FLOAT_TOLERANCE:
                errors.append(
                    f"effective unit cost {item.effective_unit_cost_ex_tax} does not "
                    f"match unit cost {item.unit_cost_ex_tax} / pack size "
                    f"{item.detected_pack_size}"
                )

        if item.tax_amount is not None:
            if item.tax_amount < 0:
                errors.append(f"tax amount {item.tax_amount} is negative")
            if item.has_tax is not None and item.has_tax != (item.tax_amount > 0):
                errors.append(
                    f"has_tax={item.has_tax} disagrees with tax amount {item.tax_amount}"
                )

        if not 0.0 <= item.confidence <= 1.0:
            errors.append(f"confidence {item.confidence} outside [0, 1]")

        return errors


class ReviewThresholds:
    """
    Confidence thresholds below which a human should check the invoice.

    Attributes:
        document_confidence: Minimum document confidence
        item_confidence: Minimum confidence for every item
        min_line_items: Minimum item count
        unknown_vendor_confidence: Vendor confidence at or below which the
            vendor counts as unidentified
    """

    def __init__(self) -> None:
        self.document_confidence = get_config("review.document_confidence_threshold", 0.8)
        self.item_confidence = get_config("review.item_confidence_threshold", 0.7)
        self.min_line_items = get_config("review.min_line_items", 3)
        self.unknown_vendor_confidence = get_config("review.unknown_vendor_confidence", 0.1)

    def review_reasons(self, invoice: Invoice) -> List[str]:
        """
        List why an invoice needs review.

        Args:
            invoice: Parsed invoice.

        Returns:
            Reasons in a fixed order, empty when no review is needed.
        """
        reasons = []

        if invoice.document_type == DOCUMENT_TYPE_NON_INVOICE:
            reasons.append("Document does not look like an invoice")

        if invoice.confidence < self.document_confidence - FLOAT_TOLERANCE:
            reasons.append(
                f"Low document confidence ({invoice.confidence:.2f} < "
                f"{self.document_confidence})"
            )

        if invoice.vendor.confidence <= self.unknown_vendor_confidence:
            reasons.append("Vendor not identified")

        if invoice.item_count < self.min_line_items:
            reasons.append(
                f"Only {invoice.item_count} line item(s) extracted "
                f"(expected at least {self.min_line_items})"
            )

        low_items = [
            item for item in invoice.line_items
            if item.confidence < self.item_confidence - FLOAT_TOLERANCE
        ]
        if low_items:
            reasons.append(
                f"{len(low_items)} low-confidence line item(s): "
                + ", ".join(item.name for item in low_items)
            )

        return reasons


class ValidationResult:
    """
    Contains the result of validation checks.

    Attributes:
        is_valid: False when any invariant is violated
        requires_review: True when a human should check the invoice
        errors: List of invariant violations
        warnings: List of warning messages
        review_reasons: Why review is required
        item_results: Per-item violation lists, keyed by item index
    """

    def __init__(self):
        self.is_valid = True
        self.requires_review = False
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.review_reasons: List[str] = []
        self.item_results: Dict[int, List[str]] = {}

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def add_review_reason(self, message: str) -> None:
        """Add a review reason and flag the invoice for review."""
        self.review_reasons.append(message)
        self.requires_review = True

    def add_item_result(self, index: int, errors: List[str]) -> None:
        """Add the violations found on one line item."""
        if not errors:
            return
        self.item_results[index] = list(errors)
        for error in errors:
            self.add_error(f"line item {index + 1}: {error}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'is_valid': self.is_valid,
            'requires_review': self.requires_review,
            'errors': list(self.errors),
            'warnings': list(self.warnings),
            'review_reasons': list(self.review_reasons),
            'item_results': {str(k): v for k, v in self.item_results.items()},
        }
