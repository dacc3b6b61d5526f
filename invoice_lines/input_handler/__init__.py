"""
Input Handler Module for Invoice Line-Item Extraction.

This module provides functionality for:
    - Validating input files
    - Decoding OCR text dumps (UTF-8, falling back to latin-1)
    - Loading whole directories in a stable order

Supported formats:
    - Plain text (.txt), one printed invoice row per line

Author: ML Engineering Team
"""

from .handler import TextInputHandler, InputResult

__all__ = ['TextInputHandler', 'InputResult']
