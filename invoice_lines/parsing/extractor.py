"""
Invoice Text Parser.

Single-pass pipeline from OCR text to an Invoice:

    text -> lines -> header fields
                  -> item table -> layout cascade / loose fallback
                                -> derived fields + category
         -> document confidence

The parser holds only configuration. Every document is parsed from
its own arguments, so one instance can serve several threads.

Author: ML Engineering Team
"""

from datetime import date
from typing import List, Optional, Sequence, Tuple

from config import get_config
from invoice_lines.utils.logger import get_logger
from .categories import CategoryClassifier
from .confidence import ConfidenceAggregator
from .derived import DerivedFieldCalculator, PackSizeDetector
from .header import HeaderExtractor
from .invoice import Invoice, LineItem, DOCUMENT_TYPE_NON_INVOICE
from .layouts import LayoutDescriptor, build_default_layouts, match_layout, DEFAULT_TAX_RATE
from .loose import LooseLineParser
from .normalizers import clean_product_name
from .segmenter import (
    split_lines,
    find_line_items_start_index,
    is_non_item_line,
    DEFAULT_HEADER_SCAN_LINES,
    DEFAULT_FALLBACK_START_INDEX,
)

# Initialize module logger
logger = get_logger(__name__)


class InvoiceTextParser:
    """
    Extracts vendor, invoice number, date and line items from OCR text.

    Unmatched lines are skipped and every missing field falls back to a
    default, so parse() never raises for text input. Parse quality is
    reported through Invoice.confidence and Invoice.warnings.

    Example:
        >>> parser = InvoiceTextParser()
        >>> invoice = parser.parse(text)
        >>> invoice.vendor.name, invoice.item_count
        ('Little Valley Distribution', 2)

    Args:
        pack_size_detector: Callable taking a product name and returning
            its pack size. Defaults to invoice_lines.pricing.detect_pack_size.
        layouts: Ordered layout descriptors. Defaults to the built-in
            cascade using the configured tax rate.
    """

    def __init__(
        self,
        pack_size_detector: Optional[PackSizeDetector] = None,
        layouts: Optional[Sequence[LayoutDescriptor]] = None
    ):
        default_tax_rate = get_config("extraction.tax.default_rate", DEFAULT_TAX_RATE)

        self.header_extractor = HeaderExtractor()
        self.layouts = list(layouts) if layouts is not None else build_default_layouts(default_tax_rate)
        self.loose_parser = LooseLineParser(default_tax_rate)
        self.calculator = DerivedFieldCalculator(pack_size_detector)
        self.classifier = CategoryClassifier()
        self.aggregator = ConfidenceAggregator()

        self.header_scan_lines = get_config(
            "extraction.table.header_scan_lines", DEFAULT_HEADER_SCAN_LINES
        )
        self.fallback_start_index = get_config(
            "extraction.table.fallback_start_index", DEFAULT_FALLBACK_START_INDEX
        )

        logger.debug(f"InvoiceTextParser initialized with {len(self.layouts)} layouts")

    def parse(self, text: Optional[str]) -> Invoice:
        """
        Parse one document.

        Args:
            text: Newline-delimited OCR text. None is treated as empty.

        Returns:
            Invoice record.
        """
        raw_text = text if isinstance(text, str) else ("" if text is None else str(text))
        lines = split_lines(raw_text)

        vendor = self.header_extractor.extract_vendor(lines)
        invoice_number = self.header_extractor.extract_invoice_number(lines)
        found_date = self.header_extractor.find_invoice_date(lines)
        invoice_date = found_date if found_date is not None else date.today()

        line_items, unparsed_count = self.extract_line_items(lines)
        assessment = self.aggregator.assess(vendor, line_items, raw_text)

        warnings = []
        if vendor.is_unknown:
            warnings.append("Vendor could not be identified")
        if invoice_number is None:
            warnings.append("Invoice number not found")
        if found_date is None:
            warnings.append(f"Invoice date not found, defaulted to {invoice_date.isoformat()}")
        if not line_items:
            warnings.append("No line items extracted")
        if assessment.document_type == DOCUMENT_TYPE_NON_INVOICE:
            warnings.append(
                f"Document does not look like an invoice "
                f"(keywords: {', '.join(assessment.keyword_hits)})"
            )
        if unparsed_count:
            warnings.append(f"{unparsed_count} table line(s) could not be parsed")

        invoice = Invoice(
            vendor=vendor,
            invoice_date=invoice_date,
            line_items=tuple(line_items),
            invoice_number=invoice_number,
            confidence=assessment.confidence,
            raw_text=raw_text,
            document_type=assessment.document_type,
            warnings=tuple(warnings),
        )

        logger.info(
            f"Parsed invoice from {vendor.name}: {invoice.item_count} items, "
            f"confidence {invoice.confidence:.2f}"
        )
        return invoice

    def extract_line_items(self, lines: List[str]) -> Tuple[List[LineItem], int]:
        """
        Parse every line of the item table.

        Args:
            lines: Output of split_lines().

        Returns:
            (items in document order, number of table lines that were
            neither items nor recognisable non-item rows)
        """
        start = find_line_items_start_index(
            lines, self.header_scan_lines, self.fallback_start_index
        )

        items: List[LineItem] = []
        unparsed = 0
        for line in lines[start:]:
            if is_non_item_line(line):
                logger.debug(f"Skipping non-item line: {line!r}")
                continue

            item = self.parse_line(line)
            if item is None:
                logger.debug(f"Dropped unparseable line: {line!r}")
                unparsed += 1
                continue
            items.append(item)

        return items, unparsed

    def parse_line(self, line: str) -> Optional[LineItem]:
        """
        Parse a single table line.

        The layout cascade is tried first; the loose parser only sees
        lines that no layout matched.

        Returns:
            LineItem, or None for non-item and unparseable lines.
        """
        line = (line or '').strip()
        if is_non_item_line(line):
            return None

        matched = match_layout(line, self.layouts)
        if matched is not None:
            source, fields = matched
        else:
            fields = self.loose_parser.try_match(line)
            if fields is None:
                return None
            source = self.loose_parser
            logger.debug(f"Loose fallback used for: {line!r}")

        name = clean_product_name(fields.description)
        return self.calculator.build_item(
            match=fields,
            name=name,
            tax=source.tax_policy(fields),
            category=self.classifier.guess_category(name),
            confidence=source.confidence,
            raw_text=line,
        )


def parse_invoice_text(
    text: Optional[str],
    pack_size_detector: Optional[PackSizeDetector] = None
) -> Invoice:
    """
    Parse OCR text into an Invoice with a freshly configured parser.

    Args:
        text: Newline-delimited OCR text.
        pack_size_detector: Optional replacement pack-size detector.

    Returns:
        Invoice record.
    """
    return InvoiceTextParser(pack_size_detector=pack_size_detector).parse(text)
