"""
Unit tests for text input loading and JSON / Excel export.
"""

import json

import pytest
from openpyxl import load_workbook

from invoice_lines.input_handler import TextInputHandler
from invoice_lines.output_handler import ExcelExporter, InvoiceRecord, JsonExporter, OutputHandler
from invoice_lines.parsing import InvoiceTextParser
from invoice_lines.postprocessor import InvoiceReviewer
from invoice_lines.utils.exceptions import (
    ExcelExportError,
    InputError,
    InputFileNotFoundError,
    UnreadableFileError,
    UnsupportedFileTypeError,
)


@pytest.fixture
def records(trumps_text, mixed_text):
    parser = InvoiceTextParser()
    reviewer = InvoiceReviewer()
    result = []
    for source, text in (("trumps.txt", trumps_text), ("mixed.txt", mixed_text)):
        invoice = parser.parse(text)
        result.append(InvoiceRecord(invoice=invoice, source_file=source, review=reviewer.review(invoice)))
    return result


class TestTextInputHandler:
    """Test cases for TextInputHandler."""

    def setup_method(self):
        self.handler = TextInputHandler()

    def test_load_utf8(self, tmp_path, trumps_text):
        path = tmp_path / "trumps.txt"
        path.write_text(trumps_text, encoding="utf-8")

        result = self.handler.load(path)
        assert result.success
        assert result.filename == "trumps.txt"
        assert result.encoding == "utf-8"
        assert result.text == trumps_text
        assert result.line_count == len(trumps_text.splitlines())

    def test_latin1_fallback(self, tmp_path):
        path = tmp_path / "cafe.txt"
        path.write_bytes("Caf\xe9 Supplies\nCr\xe8me 2 $4.00 $8.00\n".encode("latin-1"))

        result = self.handler.load(path)
        assert result.success
        assert result.encoding == "latin-1"
        assert result.text.startswith("Café Supplies")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileNotFoundError):
            self.handler.validate_file(tmp_path / "nope.txt")

        result = self.handler.load(tmp_path / "nope.txt")
        assert not result.success
        assert "File not found" in result.error

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "scan.pdf"
        path.write_bytes(b"%PDF-1.4")
        with pytest.raises(UnsupportedFileTypeError):
            self.handler.validate_file(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(UnreadableFileError):
            self.handler.validate_file(path)

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(InputError):
            self.handler.validate_file(tmp_path)

    def test_batch_is_sorted_and_filtered(self, tmp_path, trumps_text, harvest_text):
        (tmp_path / "b.txt").write_text(harvest_text)
        (tmp_path / "a.txt").write_text(trumps_text)
        (tmp_path / "notes.md").write_text("skip me")
        (tmp_path / "c.txt").write_text("")

        results = self.handler.load_batch(tmp_path)
        assert [r.filename for r in results] == ["a.txt", "b.txt", "c.txt"]
        assert [r.success for r in results] == [True, True, False]

    def test_batch_recursive(self, tmp_path, trumps_text):
        nested = tmp_path / "march"
        nested.mkdir()
        (nested / "trumps.txt").write_text(trumps_text)

        assert self.handler.load_batch(tmp_path) == []
        assert len(self.handler.load_batch(tmp_path, recursive=True)) == 1

    def test_batch_missing_directory(self, tmp_path):
        with pytest.raises(InputFileNotFoundError):
            self.handler.load_batch(tmp_path / "missing")


class TestJsonExporter:
    """Test cases for JsonExporter."""

    def test_export(self, tmp_path, records):
        path = JsonExporter().export(records, "out.json", str(tmp_path))

        data = json.loads((tmp_path / "out.json").read_text(encoding="utf-8"))
        assert path == str(tmp_path / "out.json")
        assert [entry['source_file'] for entry in data] == ["trumps.txt", "mixed.txt"]
        assert data[0]['invoice']['vendor']['name'] == "Trumps Pty Ltd"
        assert data[0]['review']['requires_review'] is False
        assert data[1]['review']['requires_review'] is True

    def test_render_is_stable(self, records):
        exporter = JsonExporter()
        assert exporter.render(records) == exporter.render(records)

    def test_single_record(self, tmp_path, records):
        JsonExporter().export(records[0], "one.json", str(tmp_path))
        data = json.loads((tmp_path / "one.json").read_text(encoding="utf-8"))
        assert len(data) == 1


class TestExcelExporter:
    """Test cases for ExcelExporter."""

    def test_sheets_and_rows(self, tmp_path, records):
        ExcelExporter().export(records, "out.xlsx", str(tmp_path))
        workbook = load_workbook(tmp_path / "out.xlsx")

        assert workbook.sheetnames == ["Invoices", "Line Items", "Review"]

        invoices = list(workbook["Invoices"].iter_rows(values_only=True))
        assert invoices[0][:2] == ("Source File", "Vendor")
        assert [row[1] for row in invoices[1:]] == ["Trumps Pty Ltd", "Green Pantry Co"]

        items = list(workbook["Line Items"].iter_rows(values_only=True))
        assert len(items) == 1 + 3 + 2
        assert items[1][4] == "Organic Kale Bunch"

        review = list(workbook["Review"].iter_rows(values_only=True))
        assert [row[3] for row in review[1:]] == ["No", "Yes"]

    def test_money_is_rounded_to_cents(self, records):
        workbook = ExcelExporter().build_workbook(records)

        invoices = list(workbook["Invoices"].iter_rows(values_only=True))
        assert invoices[1][7:10] == (53.2, 4.32, 57.52)

        items = list(workbook["Line Items"].iter_rows(values_only=True))
        assert items[4][4] == "Raw Cacao Powder 250g"
        assert items[4][10] == 1.8

    def test_header_row_is_frozen(self, records):
        workbook = ExcelExporter().build_workbook(records)
        assert workbook["Invoices"].freeze_panes == "A2"

    def test_no_records(self, tmp_path):
        with pytest.raises(ExcelExportError):
            ExcelExporter().export([], "out.xlsx", str(tmp_path))


class TestOutputHandler:
    """Test cases for OutputHandler."""

    def test_named_file_writes_both_formats(self, tmp_path, records):
        info = OutputHandler().save(records, tmp_path / "march.xlsx")
        assert info['json_path'] == str(tmp_path / "march.json")
        assert info['excel_path'] == str(tmp_path / "march.xlsx")
        assert (tmp_path / "march.json").exists()
        assert (tmp_path / "march.xlsx").exists()

    def test_directory_target(self, tmp_path, records):
        info = OutputHandler(excel_enabled=False).save(records, tmp_path / "results")
        assert info['excel_path'] is None
        assert info['json_path'].startswith(str(tmp_path / "results"))
        assert info['json_path'].endswith(".json")

    def test_json_disabled(self, tmp_path, records):
        info = OutputHandler(json_enabled=False).save(records[0], tmp_path / "one.json")
        assert info['json_path'] is None
        assert (tmp_path / "one.xlsx").exists()
