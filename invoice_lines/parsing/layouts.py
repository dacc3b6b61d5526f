"""
Invoice Table Layouts.

Each supplier prints its item table differently and none of them label
the layout. A LayoutDescriptor pairs one column order (a regex with
named groups) with the tax policy that vendor format implies. The
descriptors are tried in declaration order and the first match wins,
so a line that fits several layouts always resolves the same way.

Layouts:
    explicit_tax_column  code, description, qty, qty, unit, $price,
                         tax rate, $tax, $total
    price_per_unit       code, description, qty, qty, unit, price/unit,
                         total (fresh produce, always tax free)
    indicator_suffix     qty, item no, description, $price, ..., $extended,
                         TAXED / TAX-FREE (or GST / FRE)
    generic              name, qty, price, total
    generic_currency     name, qty, $price, $total
    generic_pipe         name | qty | price | total

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from invoice_lines.utils.exceptions import LineParseError
from invoice_lines.utils.logger import get_logger
from .normalizers import AmountNormalizer

# Initialize module logger
logger = get_logger(__name__)


DEFAULT_TAX_RATE = 10.0
LAYOUT_CONFIDENCE = 0.7

INDICATOR_TAXED = "TAXED"
INDICATOR_TAX_FREE = "TAX-FREE"

# Vendor spellings of the indicator column.
INDICATOR_ALIASES = {
    'TAXED': INDICATOR_TAXED,
    'GST': INDICATOR_TAXED,
    'TAX-FREE': INDICATOR_TAX_FREE,
    'FRE': INDICATOR_TAX_FREE,
}

_amounts = AmountNormalizer()


@dataclass(frozen=True)
class LayoutMatch:
    """
    Typed fields recovered from one table line.

    Attributes:
        layout: Name of the layout that produced the match
        description: Raw description, product codes not yet stripped
        quantity: Ordered quantity
        unit_price: Printed unit price
        item_code: Vendor item code, if the layout has one
        line_total: Printed line or extended total, if present
        tax_rate_column: Printed tax rate, if present
        tax_amount_column: Printed tax amount, if present
        indicator: Normalized TAXED / TAX-FREE flag, if present
    """
    layout: str
    description: str
    quantity: float
    unit_price: float
    item_code: Optional[str] = None
    line_total: Optional[float] = None
    tax_rate_column: Optional[float] = None
    tax_amount_column: Optional[float] = None
    indicator: Optional[str] = None


@dataclass(frozen=True)
class TaxAssessment:
    """Tax rate (percent) and tax amount for a whole line."""
    rate: float
    amount: float

    @property
    def has_tax(self) -> bool:
        return self.amount > 0


TaxPolicy = Callable[[LayoutMatch], TaxAssessment]


# =============================================================================
# TAX POLICIES
# =============================================================================

def explicit_tax_column(default_rate: float = DEFAULT_TAX_RATE) -> TaxPolicy:
    """
    Tax comes from the printed tax-amount column.

    A positive amount means the line is taxed and the rate is derived
    from it (tax / (price * qty) * 100); an amount of zero means tax free.
    """
    def policy(match: LayoutMatch) -> TaxAssessment:
        amount = match.tax_amount_column or 0.0
        if amount <= 0:
            return TaxAssessment(rate=0.0, amount=0.0)

        subtotal = match.unit_price * match.quantity
        rate = (amount / subtotal) * 100 if subtotal > 0 else default_rate
        return TaxAssessment(rate=rate, amount=amount)

    return policy


def always_tax_free(match: LayoutMatch) -> TaxAssessment:
    """Price-per-unit invoices carry no tax column; fresh produce is tax free."""
    return TaxAssessment(rate=0.0, amount=0.0)


def indicator_suffix(default_rate: float = DEFAULT_TAX_RATE) -> TaxPolicy:
    """
    Tax is flagged by a trailing indicator.

    TAXED lines print a tax-inclusive extended total, so the tax is
    backed out of it: extended - extended / (1 + rate).
    """
    divisor = 1 + default_rate / 100

    def policy(match: LayoutMatch) -> TaxAssessment:
        if match.indicator != INDICATOR_TAXED:
            return TaxAssessment(rate=0.0, amount=0.0)

        extended = match.line_total
        if extended is None:
            extended = match.unit_price * match.quantity
        return TaxAssessment(rate=default_rate, amount=extended - extended / divisor)

    return policy


def assumed_rate(default_rate: float = DEFAULT_TAX_RATE) -> TaxPolicy:
    """No tax information printed; assume the standard rate on price * qty."""
    def policy(match: LayoutMatch) -> TaxAssessment:
        amount = match.unit_price * match.quantity * default_rate / 100
        return TaxAssessment(rate=default_rate, amount=amount)

    return policy


# =============================================================================
# DESCRIPTORS
# =============================================================================

@dataclass(frozen=True)
class LayoutDescriptor:
    """
    One vendor table layout.

    Attributes:
        name: Stable identifier recorded on each parsed item
        pattern: Anchored regex with named groups (description, quantity,
            unit_price, and optionally code, line_total, tax_rate,
            tax_amount, indicator)
        tax_policy: Turns a match into a TaxAssessment
        confidence: Confidence given to items parsed by this layout
    """
    name: str
    pattern: Pattern
    tax_policy: TaxPolicy
    confidence: float = LAYOUT_CONFIDENCE

    def try_match(self, line: str) -> Optional[LayoutMatch]:
        """
        Match a line against this layout.

        Returns:
            LayoutMatch, or None when the line does not have this shape.

        Raises:
            LineParseError: The shape matched but a field is unusable
                (empty description, non-positive quantity, bad number).
        """
        regex_match = self.pattern.match(line)
        if not regex_match:
            return None

        groups = regex_match.groupdict()

        description = (groups.get('description') or '').strip(' |\t')
        if not description:
            raise LineParseError(line, self.name, "empty description")

        quantity = self._number(line, groups, 'quantity')
        if quantity <= 0:
            raise LineParseError(line, self.name, f"quantity {quantity} is not positive")

        indicator = groups.get('indicator')

        return LayoutMatch(
            layout=self.name,
            description=description,
            quantity=quantity,
            unit_price=self._number(line, groups, 'unit_price'),
            item_code=groups.get('code'),
            line_total=self._optional_number(line, groups, 'line_total'),
            tax_rate_column=self._optional_number(line, groups, 'tax_rate'),
            tax_amount_column=self._optional_number(line, groups, 'tax_amount'),
            indicator=INDICATOR_ALIASES.get(indicator.upper()) if indicator else None,
        )

    def _number(self, line: str, groups: Dict[str, Optional[str]], key: str) -> float:
        value = _amounts.to_float(groups.get(key))
        if value is None:
            raise LineParseError(line, self.name, f"{key} is not a number: {groups.get(key)!r}")
        return value

    def _optional_number(
        self,
        line: str,
        groups: Dict[str, Optional[str]],
        key: str
    ) -> Optional[float]:
        if groups.get(key) is None:
            return None
        return self._number(line, groups, key)


_QTY = r'\d+(?:\.\d+)?'
_AMOUNT = r'\d+\.\d{2}'


def build_default_layouts(default_tax_rate: float = DEFAULT_TAX_RATE) -> List[LayoutDescriptor]:
    """
    Build the ordered layout cascade.

    Args:
        default_tax_rate: Standard tax rate in percent.

    Returns:
        Descriptors in match-priority order.
    """
    return [
        LayoutDescriptor(
            name="explicit_tax_column",
            pattern=re.compile(
                rf'^(?P<code>\w+)\s+(?P<description>.*?)\s+'
                rf'(?P<quantity>{_QTY})\s+(?P<quantity_supplied>{_QTY})\s+(?P<unit>\w+)\s+'
                rf'\$(?P<unit_price>{_AMOUNT})\s+(?P<tax_rate>[\d.]+)\s+'
                rf'\$(?P<tax_amount>[\d.]+)\s+\$(?P<line_total>{_AMOUNT})$'
            ),
            tax_policy=explicit_tax_column(default_tax_rate),
        ),
        LayoutDescriptor(
            name="price_per_unit",
            pattern=re.compile(
                rf'^(?P<code>\d+)\s+(?P<description>.*?)\s+'
                rf'(?P<quantity>{_QTY})\s+(?P<quantity_supplied>{_QTY})\s+(?P<unit>\w+)\s+'
                rf'(?P<unit_price>{_AMOUNT})/(?P<price_unit>\w+)\s+(?P<line_total>{_AMOUNT})$'
            ),
            tax_policy=always_tax_free,
        ),
        LayoutDescriptor(
            name="indicator_suffix",
            pattern=re.compile(
                rf'^(?P<quantity>{_QTY})\s+(?P<code>\w+)\s+(?P<description>.*?)\s+'
                rf'\$(?P<unit_price>{_AMOUNT})\s+(?:.*?\s+)?\$(?P<line_total>{_AMOUNT})\s+'
                rf'(?P<indicator>TAXED|TAX-FREE|GST|FRE)\s*$'
            ),
            tax_policy=indicator_suffix(default_tax_rate),
        ),
        LayoutDescriptor(
            name="generic",
            pattern=re.compile(
                rf'^(?P<description>.+?)\s+(?P<quantity>{_QTY})\s+'
                rf'\$?(?P<unit_price>{_AMOUNT})\s+\$?(?P<line_total>{_AMOUNT})$'
            ),
            tax_policy=assumed_rate(default_tax_rate),
        ),
        LayoutDescriptor(
            name="generic_currency",
            pattern=re.compile(
                rf'^(?P<description>.+?)\s+(?P<quantity>{_QTY})\s+'
                rf'\$(?P<unit_price>{_AMOUNT})\s+\$(?P<line_total>{_AMOUNT})$'
            ),
            tax_policy=assumed_rate(default_tax_rate),
        ),
        LayoutDescriptor(
            name="generic_pipe",
            pattern=re.compile(
                rf'^(?P<description>.+?)\|\s*(?P<quantity>{_QTY})\s*\|\s*'
                rf'\$?(?P<unit_price>{_AMOUNT})\s*\|\s*\$?(?P<line_total>{_AMOUNT})$'
            ),
            tax_policy=assumed_rate(default_tax_rate),
        ),
    ]


DEFAULT_LAYOUTS = build_default_layouts()


def match_layout(
    line: str,
    layouts: List[LayoutDescriptor] = DEFAULT_LAYOUTS
) -> Optional[Tuple[LayoutDescriptor, LayoutMatch]]:
    """
    Run a line through the cascade.

    A layout whose shape matches but whose fields cannot be used is
    skipped and the next layout is tried.

    Returns:
        (descriptor, match) for the first usable layout, or None.
    """
    for descriptor in layouts:
        try:
            found = descriptor.try_match(line)
        except LineParseError as e:
            logger.debug(f"Layout {descriptor.name} rejected line: {e}")
            continue

        if found is not None:
            logger.debug(f"Layout {descriptor.name} matched: {line!r}")
            return descriptor, found

    return None
