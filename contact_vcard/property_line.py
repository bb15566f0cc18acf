"""
Property line builder for vCard content lines.

A PropertyLine collects one property's name, parameters and value, and
renders them as a single folded content line:

    NAME[;PARAM=VALUE...]:VALUE

Values are kept as one of three tagged shapes (Scalar, TextList,
Structured) and escaped only when rendered. A line without a value renders
to None so the caller can leave it out of the document.

Dependencies:
    - typing: Standard library for type hints
    - contact_vcard.line_folding: Local module for folding and escaping
"""

from typing import Any, List, Optional, Sequence, Union

from contact_vcard.line_folding import DEFAULT_MAX_LENGTH, esc, fold


def _text(value: Any) -> str:
    """Coerce a raw field value to text, treating None as empty."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return str(value)


class Scalar:
    """A single text value."""

    def __init__(self, text: Any = '') -> None:
        self.text = _text(text)


class TextList:
    """Independent text items joined by commas."""

    def __init__(self, items: Sequence[Any] = ()) -> None:
        self.items = [_text(item) for item in items]


class Structured:
    """
    Positional components joined by semicolons.

    Each component is a Scalar, a TextList, or None for an empty position.
    """

    def __init__(self, components: Sequence[Union[Scalar, TextList, None]] = ()) -> None:
        self.components = list(components)


Value = Union[Scalar, TextList, Structured]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def to_component(item: Any) -> Optional[Union[Scalar, TextList]]:
    """
    Convert one raw structured-value component to its tagged form.

    :param item: None/empty, a string, or a list of strings
    :return: Scalar, TextList, or None for an empty position
    """
    if not item:
        return None
    if _is_sequence(item):
        return TextList(item)
    return Scalar(item)


def render_value(value: Optional[Value]) -> str:
    """
    Render a tagged value to escaped vCard text.

    :param value: Scalar, TextList, Structured or None
    :return: Escaped value text, empty for None
    """
    if value is None:
        return ''
    if isinstance(value, Scalar):
        return esc(value.text)
    if isinstance(value, TextList):
        return ','.join(esc(item) for item in value.items)
    if isinstance(value, Structured):
        return ';'.join(render_value(component) for component in value.components)
    return ''


class PropertyLine:
    """
    Fluent builder for one vCard property line.

    Every setter returns the builder. None of them raise: missing or
    malformed input results in a skipped parameter or an empty value.
    """

    def __init__(self, name: str = '') -> None:
        self.name = name
        self.params: List[str] = []
        self._value: Optional[Value] = None

    @property
    def value(self) -> str:
        """Escaped value text, empty when no value was set."""
        return render_value(self._value)

    def set_name(self, name: str) -> 'PropertyLine':
        self.name = name
        return self

    def param(self, key: str, value: Any) -> 'PropertyLine':
        """Append KEY=VALUE, only when value is truthy."""
        if value:
            self.params.append(f"{key}={value}")
        return self

    def type(self, value: Any = None) -> 'PropertyLine':
        """
        Set the TYPE parameter.

        A string is used as is. A list with several entries is quoted and
        comma-joined (TYPE="HOME,WORK"); a single entry is used unquoted.
        """
        if isinstance(value, str):
            return self.param('TYPE', value)
        if not value or not _is_sequence(value):
            return self

        if len(value) > 1:
            return self.param('TYPE', '"' + ','.join(_text(v) for v in value) + '"')
        return self.param('TYPE', value[0])

    def pref(self, flag: Any) -> 'PropertyLine':
        if flag:
            self.param('PREF', '1')
        return self

    def val(self, value: Any) -> 'PropertyLine':
        """Set a single scalar value."""
        self._value = Scalar(value)
        return self

    def text_list(self, value: Any) -> 'PropertyLine':
        """Set a comma-separated list value (or a scalar when given a string)."""
        if _is_sequence(value):
            self._value = TextList(value)
        else:
            self._value = Scalar(value)
        return self

    def list_components(self, value: Any) -> 'PropertyLine':
        """
        Set a structured, semicolon-separated value.

        Empty components keep their position, so fixed-arity values such as
        N or ADR stay aligned when some parts are blank. A component that is
        itself a list becomes a comma-joined text list.
        """
        if _is_sequence(value):
            self._value = Structured([to_component(item) for item in value])
        else:
            self._value = Scalar(value)
        return self

    def to_string(self, max_length: int = DEFAULT_MAX_LENGTH) -> Optional[str]:
        """
        Render the folded content line.

        :param max_length: Fold column width
        :return: Folded line, or None when the value is empty
        """
        value = self.value
        if not value:
            return None

        params = (';' + ';'.join(self.params)) if self.params else ''
        return fold(f"{self.name}{params}:{value}", max_length)

    def __repr__(self) -> str:
        return f"PropertyLine(name={self.name!r}, params={self.params!r}, value={self.value!r})"
