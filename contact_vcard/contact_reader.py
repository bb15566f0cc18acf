"""
Contact record loading from JSON exports.

Dependencies:
    - json: Standard library for JSON decoding
    - pathlib: Standard library for path handling
    - typing: Standard library for type hints
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger("contact_vcard")


def _extract_records(data: Any) -> List[Any]:
    """
    Find the list of contact records in decoded JSON.

    Accepts a single contact object, a list of contacts, or an object with a
    'contacts' list.

    :param data: Decoded JSON document
    :return: List of candidate records
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if isinstance(data.get('contacts'), list):
            return data['contacts']
        return [data]
    return []


def load_contacts(file_path: Path) -> List[Dict[str, Any]]:
    """
    Load mozContact records from a JSON file.

    Args:
        file_path: Path to the .json file

    Returns:
        List of contact dictionaries

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or holds no contacts
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    contacts = []
    for index, record in enumerate(_extract_records(data), 1):
        if not isinstance(record, dict):
            logger.warning(f"Record {index} is not a contact object. Skipping.")
            continue
        contacts.append(record)

    if not contacts:
        raise ValueError(f"No valid contacts found in {file_path}")

    logger.info(f"Successfully loaded {len(contacts)} contacts from {file_path}")
    return contacts
