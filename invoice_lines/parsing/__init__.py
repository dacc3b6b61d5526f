"""
Parsing Module.

Turns OCR text of a supplier invoice into an Invoice record: header
fields, line items with derived unit costs and tax, and a document
confidence.
"""

from .invoice import (
    Vendor,
    LineItem,
    Invoice,
    UNKNOWN_VENDOR,
    DOCUMENT_TYPE_INVOICE,
    DOCUMENT_TYPE_NON_INVOICE,
)
from .normalizers import AmountNormalizer, DateNormalizer, clean_product_name, clean_vendor_name
from .segmenter import split_lines, find_line_items_start_index, is_non_item_line
from .header import HeaderExtractor
from .layouts import (
    LayoutDescriptor,
    LayoutMatch,
    TaxAssessment,
    DEFAULT_LAYOUTS,
    build_default_layouts,
    match_layout,
)
from .loose import LooseLineParser, looks_like_line_item
from .derived import DerivedFieldCalculator
from .categories import CategoryClassifier
from .confidence import ConfidenceAggregator, ConfidenceAssessment
from .extractor import InvoiceTextParser, parse_invoice_text

__all__ = [
    'Vendor',
    'LineItem',
    'Invoice',
    'UNKNOWN_VENDOR',
    'DOCUMENT_TYPE_INVOICE',
    'DOCUMENT_TYPE_NON_INVOICE',
    'AmountNormalizer',
    'DateNormalizer',
    'clean_product_name',
    'clean_vendor_name',
    'split_lines',
    'find_line_items_start_index',
    'is_non_item_line',
    'HeaderExtractor',
    'LayoutDescriptor',
    'LayoutMatch',
    'TaxAssessment',
    'DEFAULT_LAYOUTS',
    'build_default_layouts',
    'match_layout',
    'LooseLineParser',
    'looks_like_line_item',
    'DerivedFieldCalculator',
    'CategoryClassifier',
    'ConfidenceAggregator',
    'ConfidenceAssessment',
    'InvoiceTextParser',
    'parse_invoice_text',
]
