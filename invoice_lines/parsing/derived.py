"""
Derived-Field Calculator.

Turns a layout match into a LineItem: consults the pack-size detector,
computes the effective single-unit cost, and applies the layout's tax
assessment.
"""

from typing import Callable, Optional

from invoice_lines.pricing import detect_pack_size
from invoice_lines.utils.logger import get_logger
from .invoice import LineItem
from .layouts import LayoutMatch, TaxAssessment

# Initialize module logger
logger = get_logger(__name__)


PackSizeDetector = Callable[[str], int]


class DerivedFieldCalculator:
    """
    Computes pack size, effective unit cost and tax fields for an item.

    The pack-size detector is an injectable collaborator taking the
    cleaned product name. A detector that raises or returns something
    other than an integer >= 1 is treated as reporting a single unit.

    Example:
        >>> calculator = DerivedFieldCalculator(lambda name: 6)
        >>> calculator.resolve_pack_size("Coconut Water 6pk")
        6
    """

    def __init__(self, pack_size_detector: Optional[PackSizeDetector] = None):
        self.pack_size_detector = pack_size_detector or detect_pack_size

    def resolve_pack_size(self, name: str) -> int:
        """
        Ask the detector for a pack size, falling back to 1.

        Args:
            name: Cleaned product name.

        Returns:
            Pack size >= 1.
        """
        try:
            pack_size = self.pack_size_detector(name)
        except Exception as e:
            logger.warning(f"Pack size detection failed for {name!r}: {e}")
            return 1

        if isinstance(pack_size, bool) or not isinstance(pack_size, int):
            logger.warning(f"Pack size detector returned {pack_size!r} for {name!r}, using 1")
            return 1

        if pack_size < 1:
            logger.warning(f"Pack size detector returned {pack_size} for {name!r}, using 1")
            return 1

        return pack_size

    def build_item(
        self,
        match: LayoutMatch,
        name: str,
        tax: TaxAssessment,
        category: str,
        confidence: float,
        raw_text: str
    ) -> LineItem:
        """
        Assemble the final LineItem.

        Args:
            match: Fields recovered by a layout or the loose parser.
            name: Cleaned product name.
            tax: Tax assessment from the layout's policy.
            category: Guessed store category.
            confidence: Layout confidence.
            raw_text: The source line.

        Returns:
            LineItem whose effective cost is unit cost / pack size.
        """
        pack_size = self.resolve_pack_size(name)

        effective_cost = match.unit_price
        if pack_size > 1:
            effective_cost = match.unit_price / pack_size

        return LineItem(
            name=name,
            quantity=match.quantity,
            unit_cost_ex_tax=match.unit_price,
            effective_unit_cost_ex_tax=effective_cost,
            category=category,
            confidence=confidence,
            raw_text=raw_text,
            detected_pack_size=pack_size,
            tax_rate=tax.rate,
            tax_amount=tax.amount,
            has_tax=tax.has_tax,
            layout=match.layout,
            item_code=match.item_code,
            line_total=match.line_total,
        )
