#!/usr/bin/env python3
"""
Invoice Line-Item Extraction - Main Entry Point.

This is the main entry point for the line-item extraction system.
It provides both a command-line interface and programmatic access
to the extraction pipeline.

Usage:
    Command Line:
        python main.py --input invoice.txt --output results.xlsx
        python main.py --input ./ocr_text/ --output ./results/

    Python:
        from main import run_extraction
        results = run_extraction("invoice.txt")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, List, Dict, Any

# Import project modules
from config import ConfigurationManager
from invoice_lines.utils.logger import setup_logger_from_config, get_logger
from invoice_lines.utils.exceptions import InputError, OutputError
from invoice_lines.input_handler import TextInputHandler, InputResult
from invoice_lines.parsing import InvoiceTextParser
from invoice_lines.postprocessor import InvoiceReviewer
from invoice_lines.output_handler import OutputHandler, InvoiceRecord


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list; defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice Line-Item Extraction from OCR text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process single invoice:
        python main.py --input invoice.txt --output results.xlsx

    Process directory:
        python main.py --input ./ocr_text/ --output ./results/

    JSON only:
        python main.py --input ./ocr_text/ --output results.json --no-excel
        """
    )

    # Input/Output arguments
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="OCR text file or directory of text files"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output .json / .xlsx file or directory (default: configured output dir)"
    )

    # Processing options
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="Disable Excel output"
    )

    parser.add_argument(
        "--no-json",
        action="store_true",
        help="Disable JSON output"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress console output"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the extraction system with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    if args.config:
        ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config(
        quiet=args.quiet,
        level="DEBUG" if args.debug else None
    )

    logger.info("=" * 60)
    logger.info("INVOICE LINE-ITEM EXTRACTION")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or config.get('paths.output_dir', 'outputs')}")

    return config


def load_inputs(input_path: str) -> List[InputResult]:
    """
    Load a single file or every supported file in a directory.

    Raises:
        InputError: If the path is missing, unsupported, or unreadable.
    """
    handler = TextInputHandler()
    path = Path(input_path)

    if path.is_dir():
        return handler.load_batch(path)

    handler.validate_file(path)
    result = handler.load(path)
    if not result.success:
        raise InputError(result.error or f"Could not load {input_path}")
    return [result]


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    enable_excel: bool = True,
    enable_json: bool = True
) -> List[Dict[str, Any]]:
    """
    Run the extraction pipeline programmatically.

    Args:
        input_path: OCR text file or directory.
        output_path: Output file or directory (None for the configured dir).
        config_path: Path to a configuration file.
        enable_excel: Whether to write the Excel workbook.
        enable_json: Whether to write the JSON file.

    Returns:
        One dictionary per document (source file, invoice, review).

    Raises:
        InputError: If the input cannot be loaded.
        OutputError: If an output file cannot be written.

    Example:
        >>> results = run_extraction("invoice.txt", enable_excel=False)
        >>> results[0]['invoice']['vendor']['name']
        'Little Valley Distribution'
    """
    if config_path:
        ConfigurationManager.reset()
        ConfigurationManager(config_path)

    logger = get_logger(__name__)

    # Initialize pipeline components
    parser = InvoiceTextParser()
    reviewer = InvoiceReviewer()
    output_handler = OutputHandler(json_enabled=enable_json, excel_enabled=enable_excel)

    # Phase 1: Input handling
    documents = load_inputs(input_path)
    logger.info(f"Processing {len(documents)} files...")

    records = []
    for document in documents:
        if not document.success:
            logger.error(f"Skipping {document.filename}: {document.error}")
            continue

        # Phase 2: Parsing
        invoice = parser.parse(document.text)

        # Phase 3: Review
        review = reviewer.review(invoice)

        records.append(InvoiceRecord(
            invoice=invoice,
            source_file=document.filepath,
            review=review
        ))

        logger.info(
            f"  {document.filename}: {invoice.vendor.name}, "
            f"invoice #{invoice.invoice_number or 'N/A'}, "
            f"{invoice.item_count} items, confidence {invoice.confidence:.2f}"
            + (" [REVIEW]" if review.requires_review else "")
        )

    # Phase 4: Output generation
    if records and (enable_json or enable_excel):
        logger.info("Generating outputs...")
        output_info = output_handler.save(records, output_path)

        if output_info.get('json_path'):
            logger.info(f"JSON output: {output_info['json_path']}")
        if output_info.get('excel_path'):
            logger.info(f"Excel output: {output_info['excel_path']}")
    elif not records:
        logger.warning("No documents were parsed; nothing written")

    return [record.to_dict() for record in records]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, 1 for input/output errors, 130 when
        interrupted).
    """
    try:
        args = parse_arguments(argv)

        initialize_system(args)
        logger = get_logger(__name__)

        results = run_extraction(
            input_path=args.input,
            output_path=args.output,
            enable_excel=not args.no_excel,
            enable_json=not args.no_json
        )

        needs_review = sum(1 for r in results if r['review'] and r['review']['requires_review'])

        logger.info("=" * 60)
        logger.info(
            f"Extraction complete. Parsed {len(results)} documents, "
            f"{needs_review} need review."
        )
        logger.info("=" * 60)

        return 0

    except (InputError, OutputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
