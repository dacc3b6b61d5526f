"""
Excel Exporter Module.

This module provides Excel file generation for parsed invoices.
Uses openpyxl for modern Excel format support.

Features:
    - Formatted headers
    - Auto-column width
    - Invoices sheet (one row per document)
    - Line Items sheet (one row per item)
    - Review sheet (flags and reasons)

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from config import get_config
from invoice_lines.utils.logger import get_logger
from invoice_lines.utils.helpers import ensure_directory, generate_timestamp
from invoice_lines.utils.exceptions import ExcelExportError
from invoice_lines.pricing import round_to_cents
from .records import InvoiceRecord

# Initialize module logger
logger = get_logger(__name__)


Column = Tuple[str, Callable[..., Any]]

MAX_COLUMN_WIDTH = 50


class ExcelExporter:
    """
    Exports invoice records to Excel format.

    Attributes:
        output_dir: Directory for output files
        include_review: Whether to add the Review sheet

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(records, "invoices.xlsx")
        >>> print(f"Saved to: {filepath}")
    """

    INVOICE_COLUMNS: List[Column] = [
        ('Source File', lambda r: r.source_file),
        ('Vendor', lambda r: r.invoice.vendor.name),
        ('Vendor Confidence', lambda r: r.invoice.vendor.confidence),
        ('Invoice Number', lambda r: r.invoice.invoice_number or ''),
        ('Invoice Date', lambda r: r.invoice.invoice_date.isoformat()),
        ('Document Type', lambda r: r.invoice.document_type),
        ('Items', lambda r: r.invoice.item_count),
        ('Subtotal Ex Tax', lambda r: round_to_cents(r.invoice.subtotal_ex_tax)),
        ('Tax', lambda r: round_to_cents(r.invoice.tax_total)),
        ('Total Inc Tax', lambda r: round_to_cents(r.invoice.total_inc_tax)),
        ('Confidence', lambda r: round(r.invoice.confidence, 4)),
        ('Needs Review', lambda r: 'Yes' if r.requires_review else 'No'),
        ('Warnings', lambda r: '; '.join(r.invoice.warnings)),
    ]

    # Called with (record, line number, item)
    LINE_ITEM_COLUMNS: List[Column] = [
        ('Source File', lambda r, n, i: r.source_file),
        ('Invoice Number', lambda r, n, i: r.invoice.invoice_number or ''),
        ('Vendor', lambda r, n, i: r.invoice.vendor.name),
        ('Line', lambda r, n, i: n),
        ('Name', lambda r, n, i: i.name),
        ('Quantity', lambda r, n, i: i.quantity),
        ('Unit Cost Ex Tax', lambda r, n, i: i.unit_cost_ex_tax),
        ('Pack Size', lambda r, n, i: i.detected_pack_size),
        ('Effective Unit Cost', lambda r, n, i: round(i.effective_unit_cost_ex_tax, 4)),
        ('Tax Rate (%)', lambda r, n, i: round(i.tax_rate, 2) if i.tax_rate is not None else ''),
        ('Tax Amount', lambda r, n, i: round_to_cents(i.tax_amount) if i.tax_amount is not None else ''),
        ('Has Tax', lambda r, n, i: 'Yes' if i.has_tax else 'No'),
        ('Category', lambda r, n, i: i.category),
        ('Layout', lambda r, n, i: i.layout or ''),
        ('Confidence', lambda r, n, i: i.confidence),
        ('Raw Text', lambda r, n, i: i.raw_text),
    ]

    REVIEW_COLUMNS: List[Column] = [
        ('Source File', lambda r: r.source_file),
        ('Invoice Number', lambda r: r.invoice.invoice_number or ''),
        ('Vendor', lambda r: r.invoice.vendor.name),
        ('Needs Review', lambda r: 'Yes' if r.requires_review else 'No'),
        ('Valid', lambda r: 'Yes' if (r.review is None or r.review.is_valid) else 'No'),
        ('Reasons', lambda r: '; '.join(r.review.review_reasons) if r.review else ''),
        ('Errors', lambda r: '; '.join(r.review.errors) if r.review else ''),
    ]

    HEADER_COLOURS = {
        'Invoices': "4472C4",
        'Line Items': "548235",
        'Review': "C65911",
    }

    def __init__(self) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.include_review = get_config("output.excel.include_review", True)

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def export(
        self,
        records: Union[InvoiceRecord, List[InvoiceRecord]],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Export invoice records to an Excel file.

        Args:
            records: Single record or list of records to export.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If export fails.

        Example:
            >>> path = exporter.export(records, "march_invoices.xlsx")
        """
        if isinstance(records, InvoiceRecord):
            records = [records]

        out_dir = Path(output_dir) if output_dir else self.output_dir
        filepath = out_dir / (filename or self.get_default_filename())

        if not records:
            raise ExcelExportError(str(filepath), "No records to export")

        try:
            ensure_directory(out_dir)
            workbook = self.build_workbook(records)
            workbook.save(filepath)
        except OSError as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(records)} records)")
        return str(filepath)

    def build_workbook(self, records: List[InvoiceRecord]) -> Workbook:
        """Build the workbook in memory."""
        workbook = Workbook()

        invoices_sheet = workbook.active
        invoices_sheet.title = "Invoices"
        self._write_sheet(
            invoices_sheet,
            self.INVOICE_COLUMNS,
            [[getter(record) for _, getter in self.INVOICE_COLUMNS] for record in records]
        )

        item_rows = []
        for record in records:
            for number, item in enumerate(record.invoice.line_items, 1):
                item_rows.append(
                    [getter(record, number, item) for _, getter in self.LINE_ITEM_COLUMNS]
                )
        self._write_sheet(
            workbook.create_sheet(title="Line Items"),
            self.LINE_ITEM_COLUMNS,
            item_rows
        )

        if self.include_review:
            self._write_sheet(
                workbook.create_sheet(title="Review"),
                self.REVIEW_COLUMNS,
                [[getter(record) for _, getter in self.REVIEW_COLUMNS] for record in records]
            )

        return workbook

    def _write_sheet(self, sheet, columns: List[Column], rows: List[List[Any]]) -> None:
        """
        Write a header row and data rows with the standard styling.

        Args:
            sheet: openpyxl Worksheet instance.
            columns: Column definitions (header, getter).
            rows: Cell values, one list per row.
        """
        colour = self.HEADER_COLOURS.get(sheet.title, "4472C4")
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=colour, end_color=colour, fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        # Write headers
        for col, (header_name, _) in enumerate(columns, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

        # Write data rows
        for row_num, values in enumerate(rows, 2):
            for col, value in enumerate(values, 1):
                cell = sheet.cell(row=row_num, column=col, value=value)
                cell.border = thin_border

        # Adjust column widths
        for col, (header_name, _) in enumerate(columns, 1):
            max_length = len(header_name)
            for values in rows:
                if values[col - 1] not in (None, ''):
                    max_length = max(max_length, len(str(values[col - 1])))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, MAX_COLUMN_WIDTH)

        # Freeze header row
        sheet.freeze_panes = 'A2'

    def get_default_filename(self) -> str:
        """
        Generate a default filename with timestamp.

        Returns:
            Default filename string.
        """
        pattern = get_config("output.excel.filename_pattern", "invoice_lines_{timestamp}.xlsx")
        return pattern.format(timestamp=generate_timestamp())
