"""
mozContact to vCard 4.0 translation.

Each vCard property has one method that reads the contact record and returns
a list of PropertyLine builders (empty when the contact has no data for it).
The assembler renders them in FIELDS order and wraps the result in the
BEGIN/VERSION/END envelope.

Dependencies:
    - datetime: Standard library for date conversion
    - logging: Standard library for logging
    - typing: Standard library for type hints
    - contact_vcard.line_folding: Local module for folding and width checks
    - contact_vcard.property_line: Local module for building property lines
"""
# pylint: disable=logging-fstring-interpolation

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional

from contact_vcard.line_folding import CRLF, DEFAULT_MAX_LENGTH, check_max_length
from contact_vcard.property_line import PropertyLine

logger = logging.getLogger("contact_vcard")

FIELDS = [
    'FN',
    'N',
    'NICKNAME',
    'PHOTO',
    'BDAY',
    'ANNIVERSARY',
    'EMAIL',
    'GENDER',
    'ADR',
    'TEL',
    'IMPP',
    'TITLE',
    'ORG',
    'NOTE',
    'CATEGORIES',
    'REV',
    'UID',
    'URL',
    'KEY',
]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_list(value: Any) -> List[Any]:
    """Treat a missing field as empty and a lone value as a one-item list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _has_line_break(text: str) -> bool:
    return '\r' in text or '\n' in text


def _iso_timestamp(moment: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM:SS.sssZ in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def format_date(value: Any) -> Optional[str]:
    """
    Convert a mozContact date to vCard text.

    Contact stores hand back either an ISO date string or a date object
    (or its epoch-millisecond timestamp), so accept all of them.

    :param value: ISO string, datetime/date, or epoch milliseconds
    :return: Date text, or None if the value cannot be converted
    """
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return _iso_timestamp(value)
    if isinstance(value, date):
        return _iso_timestamp(datetime(value.year, value.month, value.day, tzinfo=timezone.utc))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return _iso_timestamp(_EPOCH + timedelta(milliseconds=value))
        except (OverflowError, ValueError) as e:
            logger.warning(f"Timestamp {value!r} out of range: {e}")
            return None

    logger.warning(f"Unsupported date value {value!r}, skipping")
    return None


def assemble_vcard(lines: Iterable[str]) -> str:
    """
    Wrap rendered property lines in the BEGIN/VERSION/END envelope.

    :param lines: Folded content lines, without terminators
    :return: vCard text, every line terminated by CRLF
    """
    body = CRLF.join(lines)
    return (
        'BEGIN:VCARD' + CRLF +
        'VERSION:4.0' + CRLF +
        (body + CRLF if body else '') +
        'END:VCARD' + CRLF
    )


class MozContactTranslator:
    """
    Translates one mozContact record into vCard 4.0 property lines.
    """

    def __init__(self, contact: Dict[str, Any], fold_width: int = DEFAULT_MAX_LENGTH) -> None:
        """
        Initialize the translator.

        :param contact: mozContact record
        :param fold_width: Fold column width for every rendered line
        :raises InvalidConfiguration: If fold_width is below 20
        """
        check_max_length(fold_width)
        self.contact = contact or {}
        self.fold_width = fold_width

    def _get(self, key: str) -> Any:
        return self.contact.get(key)

    def _lines_for(self, field: str) -> List[PropertyLine]:
        return getattr(self, field.lower())()

    def property_lines(self) -> Iterator[str]:
        """
        Render every non-empty property line in field order.

        :return: Iterator over folded content lines
        """
        for field in FIELDS:
            for line in self._lines_for(field):
                if _has_line_break(line.value):
                    logger.warning(
                        f"{line.name} value contains a line break; "
                        f"the written vCard will not parse"
                    )
                rendered = line.to_string(self.fold_width)
                if rendered:
                    yield rendered

    def to_vcard(self) -> str:
        """
        Assemble the complete vCard document.

        :return: vCard text, every line terminated by CRLF
        """
        return assemble_vcard(self.property_lines())

    # mozContact.name is the list of names identifying the contact, which is
    # what vCard FN holds.
    def fn(self) -> List[PropertyLine]:
        return [PropertyLine('FN').text_list(_as_list(self._get('name')))]

    def n(self) -> List[PropertyLine]:
        """
        Family names, given names, additional names, honorific prefixes and
        honorific suffixes, in that order. Each part may be a list.
        """
        parts = [
            self._get('familyName'),
            self._get('givenName'),
            self._get('additionalName'),
            self._get('honorificPrefix'),
            self._get('honorificSuffix'),
        ]
        if not any(parts):
            return []
        return [PropertyLine('N').list_components(parts)]

    def nickname(self) -> List[PropertyLine]:
        return [PropertyLine('NICKNAME').text_list(_as_list(self._get('nickname')))]

    def photo(self) -> List[PropertyLine]:
        """Photos given as URIs (including data: URIs); blobs are not exported."""
        lines = []
        for photo in _as_list(self._get('photo')):
            if not isinstance(photo, str):
                logger.debug(f"Skipping non-text photo of type {type(photo).__name__}")
                continue
            lines.append(PropertyLine('PHOTO').val(photo))
        return lines

    def _date_line(self, name: str, key: str) -> List[PropertyLine]:
        text = format_date(self._get(key))
        if not text:
            return []
        return [PropertyLine(name).val(text)]

    def bday(self) -> List[PropertyLine]:
        return self._date_line('BDAY', 'bday')

    def anniversary(self) -> List[PropertyLine]:
        return self._date_line('ANNIVERSARY', 'anniversary')

    def _typed_lines(self, name: str, key: str) -> List[PropertyLine]:
        lines = []
        for entry in _as_list(self._get(key)):
            if not isinstance(entry, dict):
                continue
            lines.append(
                PropertyLine(name)
                .type(entry.get('type'))
                .pref(entry.get('pref'))
                .val(entry.get('value'))
            )
        return lines

    def email(self) -> List[PropertyLine]:
        return self._typed_lines('EMAIL', 'email')

    # vCard GENDER is sex (M, F, O, N or U) followed by free-form gender
    # identity. Neither is checked against the allowed values.
    def gender(self) -> List[PropertyLine]:
        sex = self._get('sex')
        identity = self._get('genderIdentity')
        if not (sex or identity):
            return []
        return [PropertyLine('GENDER').list_components([sex or '', identity or ''])]

    def adr(self) -> List[PropertyLine]:
        """
        Post office box and extended address are always left empty, which
        RFC 6350 recommends for interoperability.
        """
        lines = []
        for entry in _as_list(self._get('adr')):
            if not isinstance(entry, dict):
                continue
            lines.append(
                PropertyLine('ADR')
                .type(entry.get('type'))
                .pref(entry.get('pref'))
                .list_components([
                    None,
                    None,
                    entry.get('streetAddress'),
                    entry.get('locality'),
                    entry.get('region'),
                    entry.get('postalCode'),
                    entry.get('countryName'),
                ])
            )
        return lines

    def tel(self) -> List[PropertyLine]:
        lines = []
        for entry in _as_list(self._get('tel')):
            if not isinstance(entry, dict):
                continue
            lines.append(
                PropertyLine('TEL')
                .type(entry.get('type'))
                .pref(entry.get('pref'))
                .param('CARRIER', entry.get('carrier'))
                .val(entry.get('value'))
            )
        return lines

    def impp(self) -> List[PropertyLine]:
        return self._typed_lines('IMPP', 'impp')

    def _value_lines(self, name: str, key: str) -> List[PropertyLine]:
        return [PropertyLine(name).val(item) for item in _as_list(self._get(key))]

    def title(self) -> List[PropertyLine]:
        return self._value_lines('TITLE', 'jobTitle')

    def org(self) -> List[PropertyLine]:
        return self._value_lines('ORG', 'org')

    def note(self) -> List[PropertyLine]:
        return self._value_lines('NOTE', 'note')

    def categories(self) -> List[PropertyLine]:
        categories = self._get('category')
        if categories is None:
            categories = self._get('categories')
        return [PropertyLine('CATEGORIES').text_list(_as_list(categories))]

    def rev(self) -> List[PropertyLine]:
        return self._date_line('REV', 'updated')

    def uid(self) -> List[PropertyLine]:
        if not self._get('id'):
            return []
        return [PropertyLine('UID').val(self._get('id'))]

    def url(self) -> List[PropertyLine]:
        return self._typed_lines('URL', 'url')

    def key(self) -> List[PropertyLine]:
        return self._value_lines('KEY', 'key')


def build_vcard(contact: Dict[str, Any], fold_width: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Build the vCard document for one contact.

    :param contact: mozContact record
    :param fold_width: Fold column width
    :return: vCard text
    """
    return MozContactTranslator(contact, fold_width).to_vcard()


def build_vcards(
    contacts: Iterable[Dict[str, Any]],
    fold_width: int = DEFAULT_MAX_LENGTH
) -> List[str]:
    """
    Build vCard documents for several contacts.

    :param contacts: mozContact records
    :param fold_width: Fold column width
    :return: One vCard text per contact
    """
    return [build_vcard(contact, fold_width) for contact in contacts]
