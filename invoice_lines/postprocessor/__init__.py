"""
Review Module for Invoice Line-Item Extraction.

This module provides functionality for:
    - Line item invariant checks
    - Invoice date sanity checks
    - Manual-review flagging on confidence thresholds

Author: ML Engineering Team
"""

from .processor import InvoiceReviewer
from .validators import DateValidator, LineItemValidator, ReviewThresholds, ValidationResult

__all__ = [
    'InvoiceReviewer',
    'DateValidator',
    'LineItemValidator',
    'ReviewThresholds',
    'ValidationResult',
]
