"""
Main Input Handler Module.

This module provides the TextInputHandler class that loads OCR text
dumps of supplier invoices, one document per file.

Usage:
    from invoice_lines.input_handler import TextInputHandler

    handler = TextInputHandler()
    result = handler.load("little_valley_0412.txt")

    # Process batch
    results = handler.load_batch("./ocr_text/")

Classes:
    InputResult: Outcome of loading one file
    TextInputHandler: Main class for file input handling
"""

from pathlib import Path
from typing import Union, List, Optional, Tuple
from dataclasses import dataclass

from config import get_config
from invoice_lines.utils.logger import get_logger
from invoice_lines.utils.helpers import get_file_extension
from invoice_lines.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    InputFileNotFoundError,
    UnreadableFileError
)


# Initialize module logger
logger = get_logger(__name__)


@dataclass
class InputResult:
    """
    Data class representing the result of loading one file.

    Attributes:
        filepath: Original file path
        filename: Original filename
        text: Decoded file contents ("" on failure)
        encoding: Encoding the file was decoded with
        success: Whether loading was successful
        error: Error message if loading failed
    """
    filepath: str
    filename: str
    text: str = ""
    encoding: Optional[str] = None
    success: bool = True
    error: Optional[str] = None

    @property
    def line_count(self) -> int:
        return len(self.text.splitlines())

    def __repr__(self) -> str:
        return (
            f"InputResult(filename='{self.filename}', "
            f"lines={self.line_count}, "
            f"success={self.success})"
        )


class TextInputHandler:
    """
    Input handler for OCR text files.

    Files are decoded with each configured encoding in turn (UTF-8,
    then latin-1 by default). Single-file loads and batches report
    failures on the InputResult instead of raising.

    Attributes:
        supported_extensions: Set of supported file extensions
        encodings: Encodings tried in order

    Example:
        >>> handler = TextInputHandler()
        >>> result = handler.load("invoice.txt")
        >>> print(f"Loaded {result.line_count} lines")

        >>> # Batch processing
        >>> results = handler.load_batch("./ocr_text/")
        >>> texts = [r.text for r in results if r.success]
    """

    DEFAULT_EXTENSIONS = ['.txt']
    DEFAULT_ENCODINGS = ['utf-8', 'latin-1']

    def __init__(self) -> None:
        """Initialize the handler from configuration."""
        self.supported_extensions = {
            ext.lower() for ext in get_config("input.supported_extensions", self.DEFAULT_EXTENSIONS)
        }
        self.encodings = list(get_config("input.encodings", self.DEFAULT_ENCODINGS))

        logger.debug(f"TextInputHandler initialized with extensions: {sorted(self.supported_extensions)}")

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists, is supported and is not empty.

        Args:
            filepath: Path to the file to validate.

        Returns:
            Path object pointing to the validated file.

        Raises:
            InputFileNotFoundError: If the file doesn't exist.
            InputError: If the path is not a regular file.
            UnsupportedFileTypeError: If the extension is not supported.
            UnreadableFileError: If the file is empty.
        """
        path = Path(filepath)

        if not path.exists():
            raise InputFileNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        extension = get_file_extension(filepath)
        if extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

        if path.stat().st_size == 0:
            raise UnreadableFileError(str(filepath), "File is empty")

        logger.debug(f"File validated: {filepath}")
        return path

    def read_text(self, path: Path) -> Tuple[str, str]:
        """
        Decode a file with the first encoding that works.

        Returns:
            Tuple of (text, encoding).

        Raises:
            UnreadableFileError: If no configured encoding decodes the file.
        """
        raw = path.read_bytes()
        for encoding in self.encodings:
            try:
                return raw.decode(encoding), encoding
            except UnicodeDecodeError:
                logger.debug(f"{path.name} is not {encoding}")
                continue

        raise UnreadableFileError(str(path), f"Could not decode with {', '.join(self.encodings)}")

    def load(self, filepath: Union[str, Path]) -> InputResult:
        """
        Load one OCR text file.

        Args:
            filepath: Path to the text file.

        Returns:
            InputResult containing the text, or the error on failure.
        """
        filepath = str(filepath)
        logger.info(f"Loading file: {filepath}")

        try:
            validated_path = self.validate_file(filepath)
            text, encoding = self.read_text(validated_path)

            result = InputResult(
                filepath=filepath,
                filename=validated_path.name,
                text=text,
                encoding=encoding,
                success=True
            )

            logger.info(f"Successfully loaded: {result.filename} ({result.line_count} lines, {encoding})")
            return result

        except InputError as e:
            logger.error(f"Input error for {filepath}: {e}")
            return InputResult(
                filepath=filepath,
                filename=Path(filepath).name,
                success=False,
                error=str(e)
            )

        except OSError as e:
            logger.exception(f"Unexpected error loading {filepath}: {e}")
            return InputResult(
                filepath=filepath,
                filename=Path(filepath).name,
                success=False,
                error=f"Unexpected error: {str(e)}"
            )

    def load_batch(
        self,
        directory: Union[str, Path],
        recursive: bool = False
    ) -> List[InputResult]:
        """
        Load all supported files in a directory.

        Args:
            directory: Path to directory containing text files.
            recursive: Whether to search subdirectories.

        Returns:
            List of InputResult objects, sorted by path.

        Raises:
            InputFileNotFoundError: If the directory doesn't exist.
            InputError: If the path is not a directory.
        """
        directory = Path(directory)

        if not directory.exists():
            raise InputFileNotFoundError(str(directory))

        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        pattern = "**/*" if recursive else "*"
        files = sorted(
            path for path in directory.glob(pattern)
            if path.is_file() and get_file_extension(path) in self.supported_extensions
        )

        logger.info(f"Found {len(files)} files to process in {directory}")

        results = []
        for i, filepath in enumerate(files, 1):
            logger.info(f"Processing file {i}/{len(files)}: {filepath.name}")
            results.append(self.load(filepath))

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        logger.info(f"Batch loading complete: {successful} successful, {failed} failed")

        return results
