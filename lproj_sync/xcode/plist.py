"""OpenStep ASCII property list codec (the ``project.pbxproj`` format).

Values are parsed into ``dict`` (insertion ordered), ``list`` and ``str``.
Numbers are not distinguished from strings, matching how Xcode treats
them.
"""

import re
from pathlib import Path
from typing import Any, Callable, Optional, Union

# Characters allowed in an unquoted string when reading
_BARE_CHARS = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$+/:.-')

# Strings Xcode writes without quotes
_BARE_PATTERN = re.compile(r"[A-Za-z0-9_$/:.]+")

_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'a': '\a',
    'b': '\b',
    'f': '\f',
    'v': '\v',
    '\\': '\\',
    '"': '"',
    "'": "'",
}

_WRITE_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\t': '\\t',
    '\r': '\\r',
}

Annotator = Callable[[str], Optional[str]]

# Keys whose values are object ids Xcode leaves uncommented
UNANNOTATED_KEYS = frozenset(('remoteGlobalIDString', 'TestTargetID'))


class PlistParseError(ValueError):
    """Raised for malformed property list text."""

    def __init__(self, message: str, line: int):
        self.line = line
        super().__init__(f"line {line}: {message}")


class _Parser:
    """Recursive descent parser over the raw text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> PlistParseError:
        return PlistParseError(message, self.text.count('\n', 0, self.pos) + 1)

    def parse(self) -> Any:
        self.skip()
        value = self.value()
        self.skip()
        if self.pos < len(self.text):
            raise self.error(f"unexpected content after top-level value: {self.text[self.pos]!r}")
        return value

    def skip(self) -> None:
        """Skip whitespace and comments."""
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif text.startswith('//', self.pos):
                end = text.find('\n', self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith('/*', self.pos):
                end = text.find('*/', self.pos + 2)
                if end == -1:
                    raise self.error("unterminated comment")
                self.pos = end + 2
            else:
                return

    def expect(self, ch: str) -> None:
        self.skip()
        if self.pos >= len(self.text) or self.text[self.pos] != ch:
            found = self.text[self.pos] if self.pos < len(self.text) else 'end of input'
            raise self.error(f"expected {ch!r}, found {found!r}")
        self.pos += 1

    def value(self) -> Any:
        if self.pos >= len(self.text):
            raise self.error("unexpected end of input")

        ch = self.text[self.pos]
        if ch == '{':
            return self.dictionary()
        if ch == '(':
            return self.array()
        if ch == '"' or ch == "'":
            return self.quoted()
        if ch in _BARE_CHARS:
            return self.bare()
        raise self.error(f"unexpected character {ch!r}")

    def dictionary(self) -> dict:
        self.pos += 1
        result = {}
        while True:
            self.skip()
            if self.pos >= len(self.text):
                raise self.error("unterminated dictionary")
            if self.text[self.pos] == '}':
                self.pos += 1
                return result

            key = self.value()
            if not isinstance(key, str):
                raise self.error("dictionary key must be a string")
            self.expect('=')
            self.skip()
            result[key] = self.value()
            self.expect(';')

    def array(self) -> list:
        self.pos += 1
        result = []
        while True:
            self.skip()
            if self.pos >= len(self.text):
                raise self.error("unterminated array")
            if self.text[self.pos] == ')':
                self.pos += 1
                return result

            result.append(self.value())
            self.skip()
            if self.pos < len(self.text) and self.text[self.pos] == ',':
                self.pos += 1
            elif self.pos < len(self.text) and self.text[self.pos] != ')':
                raise self.error(f"expected ',' or ')', found {self.text[self.pos]!r}")

    def quoted(self) -> str:
        quote_char = self.text[self.pos]
        self.pos += 1
        chunks = []
        text = self.text
        while True:
            if self.pos >= len(text):
                raise self.error("unterminated string")
            ch = text[self.pos]
            if ch == quote_char:
                self.pos += 1
                return ''.join(chunks)
            if ch == '\\':
                chunks.append(self.escape())
            else:
                chunks.append(ch)
                self.pos += 1

    def escape(self) -> str:
        self.pos += 1
        if self.pos >= len(self.text):
            raise self.error("unterminated escape sequence")

        ch = self.text[self.pos]
        if ch == 'U':
            digits = self.text[self.pos + 1:self.pos + 5]
            if len(digits) != 4 or any(c not in '0123456789abcdefABCDEF' for c in digits):
                raise self.error(f"invalid unicode escape: \\U{digits}")
            self.pos += 5
            return chr(int(digits, 16))
        if ch in '01234567':
            end = self.pos
            while end < len(self.text) and end - self.pos < 3 and self.text[end] in '01234567':
                end += 1
            value = int(self.text[self.pos:end], 8)
            self.pos = end
            return chr(value)

        self.pos += 1
        return _ESCAPES.get(ch, ch)

    def bare(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _BARE_CHARS:
            self.pos += 1
        return self.text[start:self.pos]


def loads(text: str) -> Any:
    """Parse property list text."""
    if text.startswith('\ufeff'):
        text = text[1:]
    return _Parser(text).parse()


def load(path: Union[str, Path]) -> Any:
    """Parse a property list file."""
    return loads(Path(path).read_text(encoding='utf-8'))


def quote(value: str) -> str:
    """Quote a string unless it can be written bare."""
    if _BARE_PATTERN.fullmatch(value) and '//' not in value and '___' not in value:
        return value
    escaped = ''.join(_WRITE_ESCAPES.get(ch, ch) for ch in value)
    return f'"{escaped}"'


def _annotator_for(key: str, annotate: Optional[Annotator]) -> Optional[Annotator]:
    return None if key in UNANNOTATED_KEYS else annotate


def format_value(
    value: Any,
    level: int = 0,
    annotate: Optional[Annotator] = None,
    inline: bool = False,
) -> str:
    """
    Format a value in Xcode's layout.

    Args:
        value: dict, list or str
        level: Tab depth of the line the value starts on
        annotate: Returns a ``/* comment */`` body for a string, or None
        inline: Write dicts and lists on a single line

    Returns:
        Formatted text (no trailing ``;``)
    """
    if isinstance(value, str):
        text = quote(value)
        comment = annotate(value) if annotate else None
        if comment:
            text += f" /* {comment} */"
        return text

    if isinstance(value, dict):
        if inline:
            body = ''.join(
                f"{quote(k)} = {format_value(v, annotate=_annotator_for(k, annotate), inline=True)}; "
                for k, v in value.items()
            )
            return '{' + body + '}'
        indent = '\t' * (level + 1)
        lines = ['{']
        for k, v in value.items():
            lines.append(f"{indent}{quote(k)} = {format_value(v, level + 1, _annotator_for(k, annotate))};")
        lines.append('\t' * level + '}')
        return '\n'.join(lines)

    if isinstance(value, list):
        if inline:
            return '(' + ''.join(f"{format_value(v, annotate=annotate, inline=True)}, " for v in value) + ')'
        indent = '\t' * (level + 1)
        lines = ['(']
        for v in value:
            lines.append(f"{indent}{format_value(v, level + 1, annotate)},")
        lines.append('\t' * level + ')')
        return '\n'.join(lines)

    raise TypeError(f"cannot write {type(value).__name__} to a property list")


def dumps(value: Any, annotate: Optional[Annotator] = None) -> str:
    """Serialize a value as a UTF-8 property list document."""
    return f"// !$*UTF8*$!\n{format_value(value, 0, annotate)}\n"
