"""
Invoice Review Module.

This module provides the InvoiceReviewer class that checks a parsed
invoice before it is handed to a person or exported.

Operations:
    - Check line item invariants
    - Check the invoice date
    - Decide whether the invoice needs manual review
    - Log the outcome

The reviewer never modifies the invoice; corrections are made
downstream on copies.

Author: ML Engineering Team
"""

from typing import Dict, List

from invoice_lines.parsing.invoice import Invoice
from invoice_lines.utils.logger import get_logger
from .validators import DateValidator, LineItemValidator, ReviewThresholds, ValidationResult

# Initialize module logger
logger = get_logger(__name__)


class InvoiceReviewer:
    """
    Reviews parsed invoices.

    Attributes:
        item_validator: LineItemValidator instance
        date_validator: DateValidator instance
        thresholds: ReviewThresholds instance

    Example:
        >>> reviewer = InvoiceReviewer()
        >>> result = reviewer.review(invoice)
        >>> result.requires_review
        False
        >>> result.is_valid
        True
    """

    def __init__(self) -> None:
        """Initialize the reviewer with all sub-validators."""
        self.item_validator = LineItemValidator()
        self.date_validator = DateValidator()
        self.thresholds = ReviewThresholds()

        logger.debug("InvoiceReviewer initialized")

    def review(self, invoice: Invoice) -> ValidationResult:
        """
        Check one invoice.

        Args:
            invoice: Parsed invoice.

        Returns:
            ValidationResult. errors hold invariant violations,
            review_reasons explain requires_review, warnings carry the
            parser's own warnings plus date concerns.
        """
        result = ValidationResult()

        for warning in invoice.warnings:
            result.add_warning(warning)

        # Step 1: Item invariants
        for index, item in enumerate(invoice.line_items):
            result.add_item_result(index, self.item_validator.validate(item))

        # Step 2: Document invariants
        if not 0.0 <= invoice.confidence <= 1.0:
            result.add_error(f"document confidence {invoice.confidence} outside [0, 1]")

        # Step 3: Invoice date
        is_valid, message = self.date_validator.validate(invoice.invoice_date)
        if not is_valid:
            result.add_warning(f"invoice_date: {message}")
        elif self.date_validator.is_future_date(invoice.invoice_date):
            result.add_warning(
                f"invoice_date {invoice.invoice_date.isoformat()} is in the future"
            )

        # Step 4: Review thresholds
        for reason in self.thresholds.review_reasons(invoice):
            result.add_review_reason(reason)

        self._log_review_summary(invoice, result)
        return result

    def review_batch(self, invoices: List[Invoice]) -> List[ValidationResult]:
        """Review several invoices, keeping their order."""
        return [self.review(invoice) for invoice in invoices]

    def summarize(self, results: List[ValidationResult]) -> Dict[str, int]:
        """
        Count outcomes across a batch.

        Returns:
            Dictionary with total, valid, invalid and needs_review counts.
        """
        return {
            'total': len(results),
            'valid': sum(1 for r in results if r.is_valid),
            'invalid': sum(1 for r in results if not r.is_valid),
            'needs_review': sum(1 for r in results if r.requires_review),
        }

    def _log_review_summary(self, invoice: Invoice, result: ValidationResult) -> None:
        logger.info(
            f"Review of {invoice.vendor.name} #{invoice.invoice_number or '-'}: "
            f"{len(result.errors)} errors, "
            f"{len(result.review_reasons)} review reasons"
        )

        for error in result.errors:
            logger.warning(f"Validation error: {error}")

        for reason in result.review_reasons[:5]:  # Limit logging
            logger.debug(f"Review reason: {reason}")
