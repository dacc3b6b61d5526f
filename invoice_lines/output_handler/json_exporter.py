"""
JSON Exporter Module.

Writes invoice records as one JSON document: a list of records with
fixed key order, so the same input always produces the same file.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from invoice_lines.utils.logger import get_logger
from invoice_lines.utils.helpers import ensure_directory, generate_timestamp
from invoice_lines.utils.exceptions import JsonExportError
from .records import InvoiceRecord

# Initialize module logger
logger = get_logger(__name__)


class JsonExporter:
    """
    Exports invoice records to a JSON file.

    Example:
        >>> exporter = JsonExporter()
        >>> path = exporter.export(records, "invoices.json")
    """

    def __init__(self) -> None:
        """Initialize the JSON exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.indent = get_config("output.json.indent", 2)

        logger.debug(f"JsonExporter initialized (output_dir: {self.output_dir})")

    def render(self, records: List[InvoiceRecord]) -> str:
        """Serialize records to JSON text."""
        return json.dumps(
            [record.to_dict() for record in records],
            indent=self.indent,
            ensure_ascii=False
        )

    def export(
        self,
        records: Union[InvoiceRecord, List[InvoiceRecord]],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Export records to a JSON file.

        Args:
            records: Single record or list of records.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.

        Returns:
            Path to the created JSON file.

        Raises:
            JsonExportError: If export fails.
        """
        if isinstance(records, InvoiceRecord):
            records = [records]

        out_dir = Path(output_dir) if output_dir else self.output_dir
        filepath = out_dir / (filename or self.get_default_filename())

        try:
            ensure_directory(out_dir)
            filepath.write_text(self.render(records), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"JSON export failed: {e}")
            raise JsonExportError(str(filepath), str(e))

        logger.info(f"JSON file saved: {filepath} ({len(records)} records)")
        return str(filepath)

    def get_default_filename(self) -> str:
        pattern = get_config("output.json.filename_pattern", "invoice_lines_{timestamp}.json")
        return pattern.format(timestamp=generate_timestamp())
