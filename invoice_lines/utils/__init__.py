"""
Utility Module for Invoice Line-Item Extraction.

Shared by every other module:
    - Logging configuration
    - Exception hierarchy
    - File helpers
"""

from .logger import setup_logger, setup_logger_from_config, get_logger
from .helpers import ensure_directory, get_file_extension, generate_timestamp

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp'
]
