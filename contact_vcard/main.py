#!/usr/bin/env python3
"""
Main entry point for the mozContact to vCard 4.0 exporter.

This module provides the command-line interface, handling argument parsing
and workflow orchestration: load contacts, write the vCard file and
validate it.

Dependencies:
    - argparse: Standard library for command-line argument parsing
    - sys: Standard library for system-specific parameters
    - pathlib: Standard library for path handling
    - contact_vcard.contact_reader: Local module for loading contact records
    - contact_vcard.vcard_writer: Local module for vCard writing
    - contact_vcard.logger: Local module for logging configuration
"""
# pylint: disable=logging-fstring-interpolation, broad-except, wrong-import-position

import argparse
import sys
from pathlib import Path
from typing import List, Optional

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from contact_vcard.contact_reader import load_contacts
from contact_vcard.line_folding import (
    DEFAULT_MAX_LENGTH,
    MIN_MAX_LENGTH,
    InvalidConfiguration,
    check_max_length,
)
from contact_vcard.logger import log_statistics, setup_logger
from contact_vcard.vcard_writer import validate_vcard_file, write_vcard_file


def _validate_fold_width(fold_width: int, logger: any) -> None:
    """
    Validate fold width value.

    :param fold_width: Fold column width
    :param logger: Logger instance
    :raises SystemExit: If fold width is invalid
    """
    try:
        check_max_length(fold_width)
    except InvalidConfiguration as e:
        logger.error(f"Invalid fold width {fold_width}: {e}")
        sys.exit(1)


def _display_validation_report(
    validation_report: dict,
    output_path: Path
) -> None:
    """
    Display validation report to console.

    :param validation_report: Validation report dictionary
    :param output_path: Path to output file
    """
    print("\n" + "=" * 80)
    print("VALIDATION REPORT")
    print("=" * 80)
    print(f"Output file: {output_path}")
    print(f"Parse successful: {validation_report['parse_successful']}")
    print(
        f"Expected contacts: "
        f"{validation_report['expected_contact_count']}"
    )
    print(f"Actual contacts: {validation_report['output_contact_count']}")

    if validation_report['errors']:
        print(f"\nErrors ({len(validation_report['errors'])}):")
        for error in validation_report['errors']:
            print(f"  ✗ {error}")

    if validation_report['warnings']:
        print(f"\nWarnings ({len(validation_report['warnings'])}):")
        for warning in validation_report['warnings']:
            print(f"  ⚠ {warning}")

    if validation_report['valid']:
        print("\n✓ Validation PASSED: Output file is valid and all contacts "
              "are present")
    else:
        print("\n✗ Validation FAILED: Issues found in output file")
    print("=" * 80)


def _handle_validation(
    output_path: Path,
    contact_count: int,
    fold_width: int,
    skip_validation: bool,
    logger: any
) -> None:
    """
    Validate output file if requested.

    :param output_path: Path to output file
    :param contact_count: Number of contacts written
    :param fold_width: Fold column width used for writing
    :param skip_validation: Whether to skip validation
    :param logger: Logger instance
    :raises SystemExit: If validation fails
    """
    if skip_validation:
        logger.info("Output validation skipped (--no-validate flag used)")
        return

    logger.info("Validating output file...")
    is_valid, validation_report = validate_vcard_file(
        output_path=output_path,
        expected_contact_count=contact_count,
        fold_width=fold_width
    )

    _display_validation_report(validation_report, output_path)

    if not is_valid:
        logger.error("Validation failed - output file may have issues")
        sys.exit(1)


def _create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    :return: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description='Export mozContact JSON records to a vCard 4.0 file',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--input', '-i',
        type=str,
        required=True,
        help='Path to input contacts file (.json)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        required=True,
        help='Path to output vCard file (.vcf)'
    )

    parser.add_argument(
        '--fold-width',
        type=int,
        default=DEFAULT_MAX_LENGTH,
        help=f'Maximum physical line length, at least {MIN_MAX_LENGTH} '
             f'(default: {DEFAULT_MAX_LENGTH})'
    )

    parser.add_argument(
        '--no-validate',
        action='store_true',
        help='Skip output validation (not recommended)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Path to log file (default: timestamped file in logs/)'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main application entry point."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    logger = setup_logger(
        log_level=args.log_level,
        log_file=Path(args.log_file) if args.log_file else None
    )

    _validate_fold_width(args.fold_width, logger)

    try:
        input_path = Path(args.input)
        logger.info(f"Reading contacts from {input_path}")
        contacts = load_contacts(input_path)

        output_path = Path(args.output)
        logger.info(f"Writing {len(contacts)} contacts to {output_path}")
        write_stats = write_vcard_file(contacts, output_path, args.fold_width)

        _handle_validation(
            output_path,
            len(contacts),
            args.fold_width,
            args.no_validate,
            logger
        )

        stats = {
            'total_contacts': len(contacts),
            **write_stats
        }
        log_statistics(logger, stats)

        logger.info("vCard export completed successfully!")

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
