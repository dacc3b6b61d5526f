"""
Data Normalizers Module.

This module provides normalization functions for:
    - Currency/amount strings captured by the layout patterns
    - Invoice dates in the shapes Australian suppliers print
    - Product and vendor names

Author: ML Engineering Team
"""

import re
from datetime import date
from typing import Optional, List, Pattern

from invoice_lines.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class AmountNormalizer:
    """
    Converts captured currency strings into floats.

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.to_float("$1,234.56")
        1234.56
        >>> normalizer.to_float("n/a") is None
        True
    """

    CURRENCY_SYMBOLS = ['$', '€', '£', '¥', '₹']
    CURRENCY_CODES = ['AUD', 'NZD', 'USD', 'EUR', 'GBP']

    def normalize(self, amount_str: str) -> Optional[str]:
        """
        Normalize an amount string to a plain two-decimal string.

        Args:
            amount_str: Input amount string (e.g., "$1,234.56").

        Returns:
            Normalized amount string (e.g., "1234.56") or None.
        """
        value = self.to_float(amount_str)
        if value is None:
            return None
        return f"{value:.2f}"

    def to_float(self, amount_str: Optional[str]) -> Optional[float]:
        """
        Convert an amount string to float.

        Args:
            amount_str: Amount string, possibly with currency and separators.

        Returns:
            Float value or None if the string holds no number.
        """
        if amount_str is None:
            return None

        cleaned = self._clean_amount_string(str(amount_str))
        if not cleaned:
            return None

        try:
            return float(cleaned)
        except ValueError:
            logger.debug(f"Could not parse amount: {amount_str!r}")
            return None

    def _clean_amount_string(self, amount_str: str) -> str:
        """Strip currency markers and thousands separators."""
        amount_str = amount_str.strip()

        for symbol in self.CURRENCY_SYMBOLS:
            amount_str = amount_str.replace(symbol, '')

        for code in self.CURRENCY_CODES:
            amount_str = re.sub(rf'\b{code}\b', '', amount_str, flags=re.IGNORECASE)

        amount_str = amount_str.replace(',', '')

        return re.sub(r'[^\d.\-]', '', amount_str)


class DateNormalizer:
    """
    Builds invoice dates from the three shapes found on supplier invoices.

    Shapes, tried in order on each line:
        - D/M/YYYY (day first, Australian convention; '-' also accepted)
        - YYYY/M/D
        - D Mon YYYY (three-letter month, longer spellings tolerated)

    A shape that matches but names an impossible date (31/02/2025) is
    skipped and the next shape is tried.

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.extract_date("Date: 05/03/2025")
        datetime.date(2025, 3, 5)
        >>> normalizer.extract_date("14 Feb 2025")
        datetime.date(2025, 2, 14)
    """

    MONTHS = {
        'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
        'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12
    }

    DAY_FIRST = re.compile(r'(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})')
    YEAR_FIRST = re.compile(r'(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})')
    DAY_MONTH_NAME = re.compile(
        r'(\d{1,2})\s+(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?\s+(\d{4})',
        re.IGNORECASE
    )

    def extract_date(self, text: str) -> Optional[date]:
        """
        Find and construct the first valid date in a line of text.

        Args:
            text: One line of invoice text.

        Returns:
            The date, or None when no shape yields a valid date.
        """
        for pattern in (self.DAY_FIRST, self.YEAR_FIRST, self.DAY_MONTH_NAME):
            match = pattern.search(text)
            if not match:
                continue

            try:
                return self._build_date(pattern, match)
            except ValueError as e:
                logger.debug(f"Rejected date {match.group(0)!r}: {e}")
                continue

        return None

    def _build_date(self, pattern: Pattern, match: re.Match) -> date:
        if pattern is self.DAY_FIRST:
            day, month, year = (int(g) for g in match.groups())
        elif pattern is self.YEAR_FIRST:
            year, month, day = (int(g) for g in match.groups())
        else:
            day = int(match.group(1))
            month = self.MONTHS[match.group(2).lower()]
            year = int(match.group(3))

        return date(year, month, day)


# Leading vendor product codes, stripped in this order.
PRODUCT_CODE_PREFIXES: List[Pattern] = [
    # "BOK-CCGF-001 ", "WEL-123 ", "ABC-456-XYZ "
    re.compile(r'^[A-Z]{2,6}(?:-[A-Z0-9]{1,6})+\s+'),
    # "001 ", "ABC123 "
    re.compile(r'^[A-Z]{0,3}\d{1,6}\s+', re.IGNORECASE),
    # "CODE123: ", "ITEM-456: "
    re.compile(r'^[A-Z]+[-\s]?\d+:\s*', re.IGNORECASE),
    # any other upper-case code containing a digit: "X12_", "4WD-"
    re.compile(r'^(?=[A-Z]*\d)[A-Z0-9]{2,10}[-_\s]+'),
]

MIN_PRODUCT_NAME_LENGTH = 3
MAX_VENDOR_NAME_LENGTH = 50


def clean_product_name(raw_name: str) -> str:
    """
    Strip leading vendor product codes from an item description.

    If stripping would leave fewer than three characters the original
    description is returned unchanged.

    Example:
        >>> clean_product_name("BOK-CCGF-001 Organic Kale")
        'Organic Kale'
        >>> clean_product_name("ABC123 Tahini Hulled 1kg")
        'Tahini Hulled 1kg'
        >>> clean_product_name("CODE-12 Ab")
        'CODE-12 Ab'
    """
    cleaned = raw_name.strip()
    for pattern in PRODUCT_CODE_PREFIXES:
        cleaned = pattern.sub('', cleaned, count=1)
    cleaned = cleaned.strip()

    return cleaned if len(cleaned) >= MIN_PRODUCT_NAME_LENGTH else raw_name.strip()


def clean_vendor_name(line: str) -> str:
    """
    Tidy a header line for use as a vendor name.

    Drops characters other than letters, digits, whitespace and '&.-',
    collapses whitespace and truncates to 50 characters.

    Example:
        >>> clean_vendor_name("**Harvest   Wholefoods (Pty)**")
        'Harvest Wholefoods Pty'
    """
    name = re.sub(r'[^\w\s&.\-]', '', line)
    name = re.sub(r'\s+', ' ', name).strip()
    return name[:MAX_VENDOR_NAME_LENGTH]
