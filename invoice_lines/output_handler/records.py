"""
Output Records.

Pairs a parsed invoice with where it came from and how review judged
it, which is what the exporters write out.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from invoice_lines.parsing.invoice import Invoice
from invoice_lines.postprocessor.validators import ValidationResult


@dataclass
class InvoiceRecord:
    """
    One exported document.

    Attributes:
        invoice: Parsed invoice
        source_file: File the OCR text was read from
        review: Review outcome, if the invoice was reviewed
    """
    invoice: Invoice
    source_file: str = ""
    review: Optional[ValidationResult] = None

    @property
    def requires_review(self) -> bool:
        return bool(self.review and self.review.requires_review)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_file': self.source_file,
            'invoice': self.invoice.to_dict(),
            'review': self.review.to_dict() if self.review else None,
        }
