"""
Confidence Aggregator and Document-Type Guard.

Combines vendor and item confidence into a document score. When no
items were extracted the raw text is checked for staff-roster
vocabulary so that a roster fed in by mistake scores lower (0.05) than
an invoice that simply failed to parse (0.1).
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from config import get_config
from invoice_lines.utils.logger import get_logger
from .invoice import (
    LineItem,
    Vendor,
    DOCUMENT_TYPE_INVOICE,
    DOCUMENT_TYPE_NON_INVOICE,
)

# Initialize module logger
logger = get_logger(__name__)


NON_INVOICE_CONFIDENCE = 0.05
FAILED_EXTRACTION_CONFIDENCE = 0.1

DEFAULT_MIN_KEYWORD_HITS = 3
DEFAULT_NON_INVOICE_KEYWORDS: Tuple[str, ...] = (
    'roster', 'schedule', 'staff', 'shift', 'manager', 'barista',
    'kitchen', 'hours', '/hr',
    'monday', 'tuesday', 'wednesday', 'thursday', 'friday',
    'saturday', 'sunday',
)


@dataclass(frozen=True)
class ConfidenceAssessment:
    """
    Document-level verdict.

    Attributes:
        confidence: Document confidence (0-1)
        document_type: "invoice" or "non_invoice"
        keyword_hits: Non-invoice keywords found (only checked when no
            items were extracted)
    """
    confidence: float
    document_type: str = DOCUMENT_TYPE_INVOICE
    keyword_hits: Tuple[str, ...] = ()


class ConfidenceAggregator:
    """
    Scores a parsed document.

    The raw text is passed in on every call; the aggregator keeps no
    per-document state and is safe to share between threads.

    Example:
        >>> aggregator = ConfidenceAggregator()
        >>> aggregator.assess(Vendor("Unknown Vendor", 0.1), [], "").confidence
        0.1
    """

    def __init__(
        self,
        keywords: Sequence[str] = None,
        min_keyword_hits: int = None
    ):
        if keywords is None:
            keywords = get_config(
                "extraction.document_guard.keywords", DEFAULT_NON_INVOICE_KEYWORDS
            )
        if min_keyword_hits is None:
            min_keyword_hits = get_config(
                "extraction.document_guard.min_keyword_hits", DEFAULT_MIN_KEYWORD_HITS
            )
        self.keywords = tuple(dict.fromkeys(keyword.lower() for keyword in keywords))
        self.min_keyword_hits = min_keyword_hits

    def find_non_invoice_keywords(self, raw_text: str) -> List[str]:
        """Distinct guard keywords present anywhere in the text."""
        lowered = (raw_text or '').lower()
        return [keyword for keyword in self.keywords if keyword in lowered]

    def assess(
        self,
        vendor: Vendor,
        line_items: Sequence[LineItem],
        raw_text: str
    ) -> ConfidenceAssessment:
        """
        Compute document confidence.

        Args:
            vendor: Vendor from the header extractor.
            line_items: Items extracted from the table.
            raw_text: The full text that was parsed.

        Returns:
            ConfidenceAssessment. With items the confidence is the mean of
            vendor confidence and mean item confidence; without items it
            is 0.05 for a non-invoice document and 0.1 otherwise.
        """
        if line_items:
            item_confidence = sum(item.confidence for item in line_items) / len(line_items)
            return ConfidenceAssessment(
                confidence=(vendor.confidence + item_confidence) / 2
            )

        hits = self.find_non_invoice_keywords(raw_text)
        if len(hits) >= self.min_keyword_hits:
            logger.warning(
                f"No line items and {len(hits)} non-invoice keywords found "
                f"({', '.join(hits)}); document does not look like an invoice"
            )
            return ConfidenceAssessment(
                confidence=NON_INVOICE_CONFIDENCE,
                document_type=DOCUMENT_TYPE_NON_INVOICE,
                keyword_hits=tuple(hits),
            )

        return ConfidenceAssessment(
            confidence=FAILED_EXTRACTION_CONFIDENCE,
            keyword_hits=tuple(hits),
        )
