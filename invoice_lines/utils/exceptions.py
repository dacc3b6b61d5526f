"""
Custom Exceptions Module.

The parsing engine expresses degradation through confidence scores and
never raises to its caller; these exceptions belong to the surfaces
around it (file input, export) and to internal control flow inside the
layout cascade.

Exception Hierarchy:
    LineExtractionError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── InputFileNotFoundError
    │   └── UnreadableFileError
    ├── ParsingError
    │   └── LineParseError
    └── OutputError
        ├── ExcelExportError
        └── JsonExportError
"""


class LineExtractionError(Exception):
    """
    Base exception for the invoice line-item extraction system.

    Attributes:
        message: Human-readable error message.
        details: Additional context.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(LineExtractionError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when a file with an unsupported extension is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".pdf", [".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class InputFileNotFoundError(InputError):
    """Raised when an input file or directory cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class UnreadableFileError(InputError):
    """Raised when a text file is empty or cannot be decoded."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# PARSING ERRORS
# =============================================================================

class ParsingError(LineExtractionError):
    """Base exception for parsing errors. Never propagated to callers."""
    pass


class LineParseError(ParsingError):
    """Raised when a layout matched a line but its fields cannot be converted."""

    def __init__(self, line: str, layout: str, reason: str = None):
        message = f"Could not convert fields of layout '{layout}'"
        details = {"line": line, "layout": layout, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(LineExtractionError):
    """Base exception for output handling errors."""
    pass


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class JsonExportError(OutputError):
    """Raised when JSON export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export JSON file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'LineExtractionError',
    'InputError',
    'UnsupportedFileTypeError',
    'InputFileNotFoundError',
    'UnreadableFileError',
    'ParsingError',
    'LineParseError',
    'OutputError',
    'ExcelExportError',
    'JsonExportError',
]
