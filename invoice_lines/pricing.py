"""
Pricing Helpers.

Pack-size detection and cent rounding used when turning printed prices
into single-unit costs.

Author: ML Engineering Team
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple, Pattern

from invoice_lines.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


MAX_PACK_SIZE = 100
DOZEN = 12

# (pattern, multiplier). Multiplier 1000 marks gram / millilitre
# patterns that only count in whole kilos or litres.
PACK_SIZE_PATTERNS: List[Tuple[Pattern, int]] = [
    (re.compile(r'(?<![\d.])(\d+)\s*pk|pack\s*of\s*(\d+)|x(\d+)(?!\d)'), 1),
    (re.compile(r'(?<![\d.])(\d+)\s*doz|dozen'), DOZEN),
    (re.compile(r'/(\d+)'), 1),
    (re.compile(r'(?<![\d.])(\d+)kg'), 1),
    (re.compile(r'(?<![\d.])(\d+)g'), 1000),
    (re.compile(r'(?<![\d.])(\d+)l'), 1),
    (re.compile(r'(?<![\d.])(\d+)ml'), 1000),
]


def detect_pack_size(item_name: str, unit_description: Optional[str] = None) -> int:
    """
    Detect how many single units a printed price covers.

    Patterns are tried in order; the first that yields a count between
    2 and 100 wins. Grams and millilitres only count in whole
    thousands (2000g is 2).

    Args:
        item_name: Product name.
        unit_description: Optional unit column text (e.g. "CTN", "6PK").

    Returns:
        Pack size, 1 when nothing is detected.

    Example:
        >>> detect_pack_size("Coconut Water 12pk")
        12
        >>> detect_pack_size("Free Range Eggs dozen")
        12
        >>> detect_pack_size("Organic Honey 500g")
        1
    """
    text = f"{item_name or ''} {unit_description or ''}".lower()

    for pattern, multiplier in PACK_SIZE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        captured = next((group for group in match.groups() if group), None)
        number = int(captured) if captured else 1

        if multiplier == 1000:
            if number >= 1000:
                return number // 1000
            continue

        if multiplier == DOZEN and number == 1:
            return DOZEN

        if 1 < number <= MAX_PACK_SIZE:
            return number

    return 1


def round_to_cents(amount: float) -> float:
    """
    Round to two decimals, halves away from zero.

    Example:
        >>> round_to_cents(2.675)
        2.68
    """
    return float(Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
