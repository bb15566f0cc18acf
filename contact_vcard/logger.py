"""
Logging configuration and utilities for the vCard exporter.

This module provides logging setup and utility functions for structured
logging throughout the application.

Dependencies:
    - logging: Standard library for logging functionality
    - sys: Standard library for system-specific parameters
    - pathlib: Standard library for path handling
    - datetime: Standard library for date/time operations
    - typing: Standard library for type hints
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from logging import Logger

LOGGER_NAME = "contact_vcard"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> Logger:
    """
    Set up and configure the application logger.

    :param log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    :param log_file: Optional path to log file. If None, creates timestamped
                     log in logs/
    :param console_output: Whether to output logs to console
    :return: Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    if log_file is None:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"vcard_export_{timestamp}.log"

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    logger.info("Logging initialized. Log file: %s", log_file)

    return logger


def log_contact_export(
    logger: Logger,
    contact_id: int,
    contact: Dict[str, Any],
    line_count: int
) -> None:
    """
    Log the export of a single contact.

    :param logger: Logger instance
    :param contact_id: Position of the contact in the input
    :param contact: Contact record that was exported
    :param line_count: Number of property lines written for it
    """
    name = (contact or {}).get('name') or ['Unknown']
    if isinstance(name, (list, tuple)):
        name = name[0] if name else 'Unknown'
    logger.debug(f"Contact #{contact_id}: {name} ({line_count} property lines)")


def log_statistics(logger: Logger, stats: Dict[str, Any]) -> None:
    """
    Log summary statistics.

    :param logger: Logger instance
    :param stats: Dictionary containing statistics
    """
    logger.info("=" * 60)
    logger.info("EXPORT SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Contacts read: {stats.get('total_contacts', 0)}")
    logger.info(f"vCards written: {stats.get('written_contacts', 0)}")
    logger.info(f"Property lines: {stats.get('property_lines', 0)}")
    logger.info(f"Folded lines: {stats.get('folded_lines', 0)}")
    logger.info("=" * 60)
