"""
Main Output Handler Module.

This module provides the unified OutputHandler class that coordinates
all output operations (JSON and Excel).

Author: ML Engineering Team
"""

from pathlib import Path
from typing import List, Optional, Dict, Union

from config import get_config
from invoice_lines.utils.logger import get_logger
from .excel_exporter import ExcelExporter
from .json_exporter import JsonExporter
from .records import InvoiceRecord

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for parsed invoices.

    Coordinates output to JSON and Excel files. Can be configured to use
    one or both output formats.

    Attributes:
        json_enabled: Whether JSON export is enabled
        excel_enabled: Whether Excel export is enabled
        json_exporter: JsonExporter instance
        excel_exporter: ExcelExporter instance

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(records)  # Saves JSON and Excel to outputs/
        >>>
        >>> # Or name the file; the other format is written beside it
        >>> handler.save(records, "outputs/march.xlsx")
    """

    def __init__(
        self,
        json_enabled: Optional[bool] = None,
        excel_enabled: Optional[bool] = None
    ) -> None:
        """
        Initialize the output handler.

        Args:
            json_enabled: Override config for JSON output.
            excel_enabled: Override config for Excel output.
        """
        self.json_enabled = json_enabled if json_enabled is not None else \
            get_config("output.json.enabled", True)
        self.excel_enabled = excel_enabled if excel_enabled is not None else \
            get_config("output.excel.enabled", True)

        # Initialize exporters (lazy loading)
        self._json_exporter = None
        self._excel_exporter = None

        logger.info(
            f"OutputHandler initialized "
            f"(json={self.json_enabled}, excel={self.excel_enabled})"
        )

    @property
    def json_exporter(self) -> JsonExporter:
        """Get or create the JSON exporter."""
        if self._json_exporter is None:
            self._json_exporter = JsonExporter()
        return self._json_exporter

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    def save(
        self,
        records: Union[InvoiceRecord, List[InvoiceRecord]],
        output_path: Optional[Union[str, Path]] = None
    ) -> Dict[str, Optional[str]]:
        """
        Save records to all enabled outputs.

        Args:
            records: Single record or list of records.
            output_path: A .json or .xlsx file (the other format gets the
                same stem), a directory, or None for the configured
                output directory with timestamped names.

        Returns:
            Dictionary with output details:
            {
                'json_path': 'path/to/file.json',
                'excel_path': 'path/to/file.xlsx'
            }

        Raises:
            JsonExportError: If the JSON file cannot be written.
            ExcelExportError: If the workbook cannot be written.
        """
        if isinstance(records, InvoiceRecord):
            records = [records]

        output_dir, json_name, excel_name = self._resolve_targets(output_path)

        output_info: Dict[str, Optional[str]] = {
            'json_path': None,
            'excel_path': None
        }

        if self.json_enabled:
            output_info['json_path'] = self.json_exporter.export(records, json_name, output_dir)

        if self.excel_enabled:
            output_info['excel_path'] = self.excel_exporter.export(records, excel_name, output_dir)

        return output_info

    @staticmethod
    def _resolve_targets(output_path: Optional[Union[str, Path]]):
        if output_path is None:
            return None, None, None

        path = Path(output_path)
        suffix = path.suffix.lower()
        if suffix in ('.json', '.xlsx'):
            return str(path.parent), f"{path.stem}.json", f"{path.stem}.xlsx"

        return str(path), None, None
