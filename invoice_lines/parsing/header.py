"""
Header Extractor Module.

Recovers vendor, invoice number and invoice date from the top of an
invoice. Each lookup scans a bounded number of leading lines and falls
back to a default instead of failing.

Author: ML Engineering Team
"""

import re
from datetime import date
from typing import List, Optional, Dict, Any

from config import get_config
from invoice_lines.utils.logger import get_logger
from .invoice import Vendor, UNKNOWN_VENDOR
from .normalizers import DateNormalizer, clean_vendor_name

# Initialize module logger
logger = get_logger(__name__)


class HeaderExtractor:
    """
    Extracts header fields from the first lines of an invoice.

    Vendor confidence reflects how the name was found:
        - 0.9: a known vendor substring
        - 0.8: a line that looks like a company name
        - 0.5: the first substantial line
        - 0.1: nothing usable ("Unknown Vendor")

    Example:
        >>> extractor = HeaderExtractor()
        >>> extractor.extract_vendor(["TAX INVOICE", "Harvest Wholefoods"])
        Vendor(name='Harvest Wholefoods', confidence=0.8)
        >>> extractor.extract_invoice_number(["Invoice No. : 448812"])
        '448812'
    """

    KNOWN_VENDOR_CONFIDENCE = 0.9
    COMPANY_LINE_CONFIDENCE = 0.8
    FIRST_LINE_CONFIDENCE = 0.5
    UNKNOWN_VENDOR_CONFIDENCE = 0.1

    DEFAULT_KNOWN_VENDORS = [
        {'match': 'little valley', 'name': 'Little Valley Distribution'},
        {'match': 'trumps pty', 'name': 'Trumps Pty Ltd'},
    ]

    # Most specific label first; bare numbers last.
    INVOICE_NUMBER_PATTERNS = [
        re.compile(r'invoice\s+no\.\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'invoice\s+no\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'invoice\s+number\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'inv\s+no\.?\s*:?\s*(\d+)', re.IGNORECASE),
        re.compile(r'invoice\s+#\s*(\d+)', re.IGNORECASE),
        re.compile(r'^invoice\s+(\d+)$', re.IGNORECASE),
        re.compile(r'tax\s+invoice\s+(\d+)', re.IGNORECASE),
    ]
    BARE_INVOICE_NUMBER_PATTERN = re.compile(r'^\s*(\d{6,8})\s*$')

    NON_VENDOR_PATTERNS = [
        re.compile(r'^\d+$'),
        re.compile(r'^page \d+', re.IGNORECASE),
        re.compile(r'^total', re.IGNORECASE),
        re.compile(r'^subtotal', re.IGNORECASE),
        re.compile(r'^gst', re.IGNORECASE),
        re.compile(r'^tax', re.IGNORECASE),
        re.compile(r'^\$\d'),
    ]

    def __init__(self) -> None:
        """Initialize the header extractor from configuration."""
        self.vendor_scan_lines = get_config("extraction.header.vendor_scan_lines", 10)
        self.invoice_number_scan_lines = get_config(
            "extraction.header.invoice_number_scan_lines", 15
        )
        self.date_scan_lines = get_config("extraction.header.date_scan_lines", 20)
        self.allow_bare_invoice_number = get_config(
            "extraction.header.allow_bare_invoice_number", True
        )
        self.known_vendors = self._load_known_vendors()
        self.date_normalizer = DateNormalizer()

        logger.debug(f"HeaderExtractor initialized ({len(self.known_vendors)} known vendors)")

    def _load_known_vendors(self) -> List[Dict[str, Any]]:
        configured = get_config("extraction.header.known_vendors", self.DEFAULT_KNOWN_VENDORS)
        return [
            {'match': entry['match'].lower(), 'name': entry['name']}
            for entry in configured
            if entry.get('match') and entry.get('name')
        ]

    # -------------------------------------------------------------------------
    # Vendor
    # -------------------------------------------------------------------------

    def extract_vendor(self, lines: List[str]) -> Vendor:
        """
        Identify the supplier from the header lines.

        Args:
            lines: Trimmed, non-empty invoice lines.

        Returns:
            Vendor with a confidence reflecting how it was found.
        """
        header_lines = lines[:self.vendor_scan_lines]

        for line in header_lines:
            lowered = line.lower()
            for known in self.known_vendors:
                if known['match'] in lowered:
                    return Vendor(name=known['name'], confidence=self.KNOWN_VENDOR_CONFIDENCE)

        for line in header_lines:
            if self.is_non_vendor_line(line):
                continue
            if self.looks_like_company_name(line):
                return Vendor(
                    name=clean_vendor_name(line),
                    confidence=self.COMPANY_LINE_CONFIDENCE
                )

        for line in header_lines:
            if len(line) > 5 and 'invoice' not in line.lower():
                return Vendor(
                    name=clean_vendor_name(line),
                    confidence=self.FIRST_LINE_CONFIDENCE
                )

        return Vendor(name=UNKNOWN_VENDOR, confidence=self.UNKNOWN_VENDOR_CONFIDENCE)

    def is_non_vendor_line(self, line: str) -> bool:
        """Lines that are numbers, page markers, totals or tax labels."""
        return any(pattern.search(line) for pattern in self.NON_VENDOR_PATTERNS)

    @staticmethod
    def looks_like_company_name(line: str) -> bool:
        """Check whether a header line is shaped like a business name."""
        lowered = line.lower()
        return (
            3 < len(line) < 50
            and re.search(r'[A-Z]', line) is not None
            and '$' not in line
            and not re.match(r'^\d', line)
            and 'invoice' not in lowered
            and 'date' not in lowered
        )

    # -------------------------------------------------------------------------
    # Invoice number
    # -------------------------------------------------------------------------

    def extract_invoice_number(self, lines: List[str]) -> Optional[str]:
        """
        Find the invoice number in the header lines.

        Each line is tried against every label pattern before moving on
        to the next line. When enabled, a standalone 6-8 digit number
        is accepted as a last resort; this can pick up phone numbers or
        ABNs printed alone on a line.

        Returns:
            The number as printed, or None.
        """
        patterns = list(self.INVOICE_NUMBER_PATTERNS)
        if self.allow_bare_invoice_number:
            patterns.append(self.BARE_INVOICE_NUMBER_PATTERN)

        for line in lines[:self.invoice_number_scan_lines]:
            for pattern in patterns:
                match = pattern.search(line)
                if match and match.group(1):
                    logger.debug(f"Invoice number {match.group(1)!r} via {pattern.pattern!r}")
                    return match.group(1)

        logger.debug("No invoice number found")
        return None

    # -------------------------------------------------------------------------
    # Invoice date
    # -------------------------------------------------------------------------

    def find_invoice_date(self, lines: List[str]) -> Optional[date]:
        """Return the first valid date in the header lines, or None."""
        for line in lines[:self.date_scan_lines]:
            found = self.date_normalizer.extract_date(line)
            if found is not None:
                return found
        return None

    def extract_invoice_date(self, lines: List[str]) -> date:
        """
        Find the invoice date, defaulting to today.

        Returns:
            The first date constructed from the header lines, or
            date.today() when none parses.
        """
        found = self.find_invoice_date(lines)
        if found is None:
            logger.debug("No invoice date found, defaulting to today")
            return date.today()
        return found
