"""
Helper Utilities Module.

Small filesystem and formatting helpers shared by the input and
output handlers.
"""

from datetime import datetime
from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it and its parents if necessary.

    Args:
        path: Directory path.

    Returns:
        Path object pointing to the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Return the lowercase extension of a path, including the dot.

    Example:
        >>> get_file_extension("invoice.TXT")
        '.txt'
        >>> get_file_extension("noextension")
        ''
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string for output filenames.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        '2026-10-19'
    """
    return datetime.now().strftime(format_str)
