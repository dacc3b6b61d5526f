"""
Line Splitting and Table Segmentation.

Turns raw OCR text into trimmed lines, finds where the item table
starts, and recognises rows that can never be line items (totals,
separators, delivery notes).
"""

import re
from typing import List, Optional

from invoice_lines.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


DEFAULT_HEADER_SCAN_LINES = 30
DEFAULT_FALLBACK_START_INDEX = 10

ITEM_HEADER_PATTERNS = [
    re.compile(keyword, re.IGNORECASE)
    for keyword in (
        r'description',
        r'item',
        r'product',
        r'qty',
        r'quantity',
        r'unit',
        r'price',
        r'amount',
        r'extended',
    )
]

# Column titles of the multi-column header row printed by indicator-suffix
# vendors; all four must be present.
MULTI_COLUMN_HEADER = ('QTY', 'ITEM NO', 'DESCRIPTION', 'PRICE')

NON_ITEM_PATTERNS = [
    re.compile(r'^total', re.IGNORECASE),
    re.compile(r'^subtotal', re.IGNORECASE),
    re.compile(r'^gst', re.IGNORECASE),
    re.compile(r'^tax', re.IGNORECASE),
    re.compile(r'^freight', re.IGNORECASE),
    re.compile(r'^shipping', re.IGNORECASE),
    re.compile(r'^delivery', re.IGNORECASE),
    re.compile(r'^thank you', re.IGNORECASE),
    re.compile(r'^payment', re.IGNORECASE),
    re.compile(r'^remittance', re.IGNORECASE),
    re.compile(r'^page \d+', re.IGNORECASE),
    re.compile(r'^\s*$'),
    re.compile(r'^-+$'),
    re.compile(r'^=+$'),
    re.compile(r'discount', re.IGNORECASE),
    # delivery instructions
    re.compile(r'pls call', re.IGNORECASE),
    re.compile(r'gates opened', re.IGNORECASE),
]

MIN_ITEM_LINE_LENGTH = 3


def split_lines(text: Optional[str]) -> List[str]:
    """
    Split raw text into trimmed, non-empty lines, keeping their order.

    Example:
        >>> split_lines("  TAX INVOICE \\n\\n  Qty Description\\r\\n")
        ['TAX INVOICE', 'Qty Description']
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def find_line_items_start_index(
    lines: List[str],
    header_scan_lines: int = DEFAULT_HEADER_SCAN_LINES,
    fallback_start_index: int = DEFAULT_FALLBACK_START_INDEX
) -> int:
    """
    Locate the first row of the item table.

    Scans the first ``header_scan_lines`` lines for a column header
    (any item-table keyword, or the full QTY / ITEM NO / DESCRIPTION /
    PRICE row) and returns the index just after it.

    Args:
        lines: Output of split_lines().
        header_scan_lines: How many leading lines to inspect.
        fallback_start_index: Start index when no header is found.

    Returns:
        Index of the first candidate item line.
    """
    for index, line in enumerate(lines[:header_scan_lines]):
        if any(pattern.search(line) for pattern in ITEM_HEADER_PATTERNS):
            logger.debug(f"Item table header at line {index}: {line!r}")
            return index + 1

        if all(column in line for column in MULTI_COLUMN_HEADER):
            logger.debug(f"Multi-column header at line {index}: {line!r}")
            return index + 1

    start = min(fallback_start_index, len(lines))
    logger.debug(f"No item table header found, starting at line {start}")
    return start


def is_non_item_line(line: str) -> bool:
    """
    Check whether a line can be ruled out as a line item.

    Example:
        >>> is_non_item_line("Subtotal $120.00")
        True
        >>> is_non_item_line("Rolled Oats 1kg 2 $4.50 $9.00")
        False
    """
    if len(line) < MIN_ITEM_LINE_LENGTH:
        return True
    return any(pattern.search(line) for pattern in NON_ITEM_PATTERNS)
