"""
Output Handler Module for Invoice Line-Item Extraction.

This module provides functionality for:
    - JSON export of parsed invoices
    - Excel workbook generation (invoices, line items, review)
    - Output file naming

Author: ML Engineering Team
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter
from .json_exporter import JsonExporter
from .records import InvoiceRecord

__all__ = ['OutputHandler', 'ExcelExporter', 'JsonExporter', 'InvoiceRecord']
