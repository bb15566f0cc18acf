"""
Line folding, unfolding and value escaping for vCard content lines.

A logical line MAY be continued on the next physical line anywhere between
two characters by inserting a CRLF immediately followed by a single white
space character (space or horizontal tab). Any sequence of CRLF followed
immediately by a single white space character is removed when the content
is processed. Lines SHOULD be limited to 78 characters, excluding the CRLF.

Dependencies:
    - re: Standard library for regular expressions
"""

import re

CRLF = '\r\n'

DEFAULT_MAX_LENGTH = 78
MIN_MAX_LENGTH = 20

# ASCII only, so fold points do not move for non-ASCII letters
_NON_WORD = re.compile(r'\W', re.ASCII)
_FOLD_BREAK = re.compile(r'\r\n[ \t]')


class InvalidConfiguration(ValueError):
    """Raised when the fold column width is below the usable minimum."""


def check_max_length(max_length: int) -> None:
    """
    Validate a fold column width.

    :param max_length: Maximum physical line length
    :raises InvalidConfiguration: If max_length is below MIN_MAX_LENGTH
    """
    if max_length < MIN_MAX_LENGTH:
        raise InvalidConfiguration(
            f"max_length should be at least {MIN_MAX_LENGTH}. "
            f"Suggested value is {DEFAULT_MAX_LENGTH}"
        )


def _find_cut(line: str, max_length: int) -> int:
    """
    Find where to cut the next segment, preferring just after punctuation.

    :param line: Remaining text to fold
    :param max_length: Current limit for the segment content
    :return: Number of characters to take from line
    """
    candidate = max_length
    while candidate > 1 and not _NON_WORD.match(line[candidate - 1]):
        candidate -= 1

    # No boundary in the window: cut mid-word
    if candidate == 1:
        candidate = max_length

    return candidate


def fold(line: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Fold a logical line into CRLF-joined physical lines.

    Continuation lines start with a single space, which counts against the
    limit, so their content is at most max_length - 1 characters.

    :param line: Logical line without embedded CRLF
    :param max_length: Maximum physical line length (at least 20)
    :return: Folded text, with no trailing CRLF
    :raises InvalidConfiguration: If max_length is below 20
    """
    check_max_length(max_length)

    if len(line) < max_length:
        return line

    segments = []
    use_prefix = False
    while len(line) > max_length:
        cut = _find_cut(line, max_length)
        segments.append(' ' + line[:cut] if use_prefix else line[:cut])
        line = line[cut:]

        if not use_prefix:
            use_prefix = True
            max_length -= 1

    if line:
        segments.append(' ' + line if use_prefix else line)

    return CRLF.join(segments)


def unfold(text: str) -> str:
    """
    Join folded physical lines back into one logical line.

    :param text: Folded text
    :return: Text with every CRLF + single space/tab removed
    """
    return _FOLD_BREAK.sub('', text)


def esc(value: str = '') -> str:
    """
    Escape commas in a text value.

    :param value: Raw text (None is treated as empty)
    :return: Text with every ',' replaced by '\\,'
    """
    if not value:
        return ''
    return value.replace(',', '\\,')
