"""
Invoice Line-Item Extraction - Source Package.

Turns OCR'd supplier invoice text into structured line items with
derived unit costs, tax flags and confidence scores. Each module has a
single responsibility.

Modules:
    - input_handler: Loading OCR text dumps
    - parsing: Header extraction, layout cascade, loose fallback,
      derived fields, categories and document confidence
    - pricing: Pack-size detection and cent rounding
    - postprocessor: Review checks on parsed invoices
    - output_handler: JSON and Excel export

Architecture:
    Text Input → Parsing → Review → Output
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'input_handler',
    'parsing',
    'pricing',
    'postprocessor',
    'output_handler',
    'utils'
]
