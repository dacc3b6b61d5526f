"""
Invoice Value Objects.

Immutable records produced by one parse call. Corrections are applied
downstream on copies; nothing here mutates after construction.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Any, Optional, Tuple
import json

from invoice_lines.pricing import round_to_cents


UNKNOWN_VENDOR = "Unknown Vendor"

DOCUMENT_TYPE_INVOICE = "invoice"
DOCUMENT_TYPE_NON_INVOICE = "non_invoice"


@dataclass(frozen=True)
class Vendor:
    """
    Supplier recovered from the invoice header.

    Attributes:
        name: Canonical or cleaned vendor name
        confidence: How sure the header extractor is (0-1)
    """
    name: str
    confidence: float

    @property
    def is_unknown(self) -> bool:
        return self.name == UNKNOWN_VENDOR

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'confidence': self.confidence}


@dataclass(frozen=True)
class LineItem:
    """
    One priced row of the invoice item table.

    Attributes:
        name: Product description with vendor codes stripped
        quantity: Ordered quantity (> 0)
        unit_cost_ex_tax: Printed unit price, tax exclusive
        effective_unit_cost_ex_tax: unit_cost_ex_tax / detected_pack_size
            when the pack size is above 1, otherwise unit_cost_ex_tax
        category: Store category guessed from the name
        confidence: 0.7 for a layout match, 0.5 for the loose fallback
        raw_text: The source line, untouched
        detected_pack_size: Pack multiplier found in the name (1 if none)
        tax_rate: Tax rate in percent
        tax_amount: Tax for the whole line
        has_tax: True exactly when tax_amount > 0
        layout: Name of the layout descriptor that produced the item
        item_code: Vendor product code, when the layout captures one
        line_total: Printed line total, when the layout captures one
    """
    name: str
    quantity: float
    unit_cost_ex_tax: float
    effective_unit_cost_ex_tax: float
    category: str
    confidence: float
    raw_text: str
    detected_pack_size: int = 1
    tax_rate: Optional[float] = None
    tax_amount: Optional[float] = None
    has_tax: Optional[bool] = None
    layout: Optional[str] = None
    item_code: Optional[str] = None
    line_total: Optional[float] = None

    @property
    def line_total_ex_tax(self) -> float:
        """Unit cost times quantity."""
        return self.unit_cost_ex_tax * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'quantity': self.quantity,
            'unit_cost_ex_tax': self.unit_cost_ex_tax,
            'detected_pack_size': self.detected_pack_size,
            'effective_unit_cost_ex_tax': self.effective_unit_cost_ex_tax,
            'category': self.category,
            'confidence': self.confidence,
            'raw_text': self.raw_text,
            'tax_rate': self.tax_rate,
            'tax_amount': self.tax_amount,
            'has_tax': self.has_tax,
            'layout': self.layout,
            'item_code': self.item_code,
            'line_total': self.line_total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        return cls(
            name=data['name'],
            quantity=data['quantity'],
            unit_cost_ex_tax=data['unit_cost_ex_tax'],
            effective_unit_cost_ex_tax=data.get(
                'effective_unit_cost_ex_tax', data['unit_cost_ex_tax']
            ),
            category=data.get('category', ''),
            confidence=data.get('confidence', 0.0),
            raw_text=data.get('raw_text', ''),
            detected_pack_size=data.get('detected_pack_size') or 1,
            tax_rate=data.get('tax_rate'),
            tax_amount=data.get('tax_amount'),
            has_tax=data.get('has_tax'),
            layout=data.get('layout'),
            item_code=data.get('item_code'),
            line_total=data.get('line_total'),
        )


@dataclass(frozen=True)
class Invoice:
    """
    Result of parsing one OCR'd supplier invoice.

    Attributes:
        vendor: Supplier and its confidence
        invoice_date: Issue date; today when the header has none
        line_items: Parsed rows, in document order
        invoice_number: Invoice number, None when not found
        confidence: Document confidence (0-1). 0.05 flags a document
            that is not an invoice, 0.1 an invoice nothing could be
            extracted from
        raw_text: The OCR text that was parsed
        document_type: "invoice" or "non_invoice"
        warnings: Non-fatal degradations noticed while parsing

    Example:
        >>> invoice = parse_invoice_text(text)
        >>> invoice.vendor.name
        'Little Valley Distribution'
        >>> [item.name for item in invoice.line_items]
        ['Organic Honey 500g', 'Rolled Oats 1kg']
    """
    vendor: Vendor
    invoice_date: date
    line_items: Tuple[LineItem, ...] = ()
    invoice_number: Optional[str] = None
    confidence: float = 0.0
    raw_text: str = ""
    document_type: str = DOCUMENT_TYPE_INVOICE
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def item_count(self) -> int:
        return len(self.line_items)

    @property
    def is_invoice(self) -> bool:
        return self.document_type == DOCUMENT_TYPE_INVOICE

    @property
    def subtotal_ex_tax(self) -> float:
        return sum(item.line_total_ex_tax for item in self.line_items)

    @property
    def tax_total(self) -> float:
        return sum(item.tax_amount or 0.0 for item in self.line_items)

    @property
    def total_inc_tax(self) -> float:
        return self.subtotal_ex_tax + self.tax_total

    @property
    def average_item_confidence(self) -> float:
        if not self.line_items:
            return 0.0
        return sum(item.confidence for item in self.line_items) / len(self.line_items)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-ready dictionary.

        Dates are rendered as ISO strings; key order is fixed so that
        equal invoices serialize to identical text.
        """
        return {
            'vendor': self.vendor.to_dict(),
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date.isoformat(),
            'confidence': self.confidence,
            'document_type': self.document_type,
            'line_items': [item.to_dict() for item in self.line_items],
            'subtotal_ex_tax': self.subtotal_ex_tax,
            'tax_total': self.tax_total,
            'total_inc_tax': self.total_inc_tax,
            'warnings': list(self.warnings),
            'raw_text': self.raw_text,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_flat_dict(self) -> Dict[str, Any]:
        """One spreadsheet row summarising the document."""
        return {
            'vendor_name': self.vendor.name,
            'vendor_confidence': self.vendor.confidence,
            'invoice_number': self.invoice_number or '',
            'invoice_date': self.invoice_date.isoformat(),
            'document_type': self.document_type,
            'item_count': self.item_count,
            'subtotal_ex_tax': round_to_cents(self.subtotal_ex_tax),
            'tax_total': round_to_cents(self.tax_total),
            'total_inc_tax': round_to_cents(self.total_inc_tax),
            'confidence': round(self.confidence, 4),
            'warnings': '; '.join(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Invoice':
        vendor = data.get('vendor') or {}
        return cls(
            vendor=Vendor(
                name=vendor.get('name', UNKNOWN_VENDOR),
                confidence=vendor.get('confidence', 0.1)
            ),
            invoice_date=date.fromisoformat(data['invoice_date']),
            line_items=tuple(LineItem.from_dict(item) for item in data.get('line_items', [])),
            invoice_number=data.get('invoice_number'),
            confidence=data.get('confidence', 0.0),
            raw_text=data.get('raw_text', ''),
            document_type=data.get('document_type', DOCUMENT_TYPE_INVOICE),
            warnings=tuple(data.get('warnings', [])),
        )

    def __repr__(self) -> str:
        return (
            f"Invoice("
            f"vendor={self.vendor.name!r}, "
            f"number={self.invoice_number}, "
            f"items={self.item_count}, "
            f"confidence={self.confidence:.2f})"
        )
