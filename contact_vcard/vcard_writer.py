"""
vCard file writing and output validation.

Dependencies:
    - vobject: Third-party library used to re-read the written file
    - pathlib: Standard library for path handling
    - typing: Standard library for type hints
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation, broad-except

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import vobject

from contact_vcard.contact_translator import MozContactTranslator, assemble_vcard
from contact_vcard.line_folding import CRLF, DEFAULT_MAX_LENGTH
from contact_vcard.logger import log_contact_export

logger = logging.getLogger("contact_vcard")


def write_vcard_file(
    contacts: List[Dict[str, Any]],
    output_path: Path,
    fold_width: int = DEFAULT_MAX_LENGTH
) -> Dict[str, int]:
    """
    Write contacts to a vCard 4.0 file.

    :param contacts: List of mozContact records
    :param output_path: Path where the vCard file should be written
    :param fold_width: Fold column width
    :return: Statistics about the written lines
    :raises InvalidConfiguration: If fold_width is below 20
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    stats = {
        'written_contacts': 0,
        'property_lines': 0,
        'folded_lines': 0
    }
    documents = []

    for contact_id, contact in enumerate(contacts, 1):
        translator = MozContactTranslator(contact, fold_width)
        lines = list(translator.property_lines())
        stats['property_lines'] += len(lines)
        stats['folded_lines'] += sum(1 for line in lines if CRLF in line)

        documents.append(assemble_vcard(lines))
        stats['written_contacts'] += 1
        log_contact_export(logger, contact_id, contact, len(lines))

    # newline='' keeps the CRLF terminators as they are
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(''.join(documents))

    logger.info(f"Successfully wrote {len(documents)} contacts to {output_path}")
    return stats


def _overlong_lines(content: str, fold_width: int) -> List[int]:
    """
    Find physical lines longer than the fold width.

    :param content: File content
    :param fold_width: Maximum physical line length
    :return: 1-based numbers of the offending lines
    """
    return [
        number
        for number, line in enumerate(content.split(CRLF), 1)
        if len(line) > fold_width
    ]


def validate_vcard_file(
    output_path: Path,
    expected_contact_count: int,
    fold_width: int = DEFAULT_MAX_LENGTH
) -> Tuple[bool, Dict[str, Any]]:
    """
    Validate the written vCard file.

    Re-reads the file with vobject to check that every contact is present,
    and checks that no physical line exceeds the fold width.

    :param output_path: Path to the output vCard file
    :param expected_contact_count: Number of contacts that were written
    :param fold_width: Fold column width used when writing
    :return: Tuple of (is_valid, validation_report_dict)
    """
    report = {
        'valid': False,
        'output_contact_count': 0,
        'expected_contact_count': expected_contact_count,
        'parse_successful': False,
        'errors': [],
        'warnings': []
    }

    if not output_path.exists():
        report['errors'].append(f"Output file does not exist: {output_path}")
        return False, report

    with open(output_path, 'r', encoding='utf-8', newline='') as f:
        content = f.read()

    try:
        cards = list(vobject.readComponents(content))
        report['parse_successful'] = True
        report['output_contact_count'] = len(cards)
    except Exception as e:
        report['errors'].append(f"Failed to parse output file: {e}")
        logger.error(f"Validation error: {e}")
        return False, report

    if len(cards) != expected_contact_count:
        report['errors'].append(
            f"Contact count mismatch: expected {expected_contact_count}, got {len(cards)}"
        )
    else:
        logger.info(f"Validation: Contact count matches expected ({expected_contact_count})")

    cards_without_fn = [
        index for index, card in enumerate(cards, 1)
        if not hasattr(card, 'fn')
    ]
    if cards_without_fn:
        report['warnings'].append(
            f"Found {len(cards_without_fn)} vCards without FN (indices: {cards_without_fn[:10]})"
        )

    overlong = _overlong_lines(content, fold_width)
    if overlong:
        report['errors'].append(
            f"Found {len(overlong)} lines longer than {fold_width} characters (lines: {overlong[:10]})"
        )

    report['valid'] = len(report['errors']) == 0 and report['parse_successful']

    if report['valid']:
        logger.info("Validation passed: Output file is valid and all contacts are present")
    else:
        logger.warning(f"Validation failed: {len(report['errors'])} errors found")

    return report['valid'], report
