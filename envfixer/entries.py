"""Line entries of an environment file and the helpers that classify them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Iterable, Sequence

LF = "\n"

_EXPORT_PREFIX = "export "
_QUOTE_CHARS = ("'", '"')
_CONTROL_COMMENT = re.compile(
    r"^#\s*dotenv-linter:(?P<mode>on|off)\s+(?P<checks>.*)$"
)
_IDENTIFIER = re.compile(r"[A-Za-z0-9_]*")


class LintKind(Enum):
    """The checks a warning can come from."""

    DUPLICATED_KEY = "DuplicatedKey"
    ENDING_BLANK_LINE = "EndingBlankLine"
    EXTRA_BLANK_LINE = "ExtraBlankLine"
    INCORRECT_DELIMITER = "IncorrectDelimiter"
    KEY_WITHOUT_VALUE = "KeyWithoutValue"
    LEADING_CHARACTER = "LeadingCharacter"
    LOWERCASE_KEY = "LowercaseKey"
    QUOTE_CHARACTER = "QuoteCharacter"
    SPACE_CHARACTER = "SpaceCharacter"
    SUBSTITUTION_KEY = "SubstitutionKey"
    TRAILING_WHITESPACE = "TrailingWhitespace"
    UNORDERED_KEY = "UnorderedKey"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Warning:
    """A problem found by a check on one line."""

    line_number: int
    check_name: LintKind
    message: str


@dataclass(frozen=True)
class ControlComment:
    """A comment that switches some checks on or off for the lines below it."""

    checks: tuple[LintKind, ...]
    mode: str

    def is_disabled(self) -> bool:
        return self.mode == "off"


def _parse_control_comment(text: str) -> ControlComment | None:
    match = _CONTROL_COMMENT.match(text.strip())
    if match is None:
        return None
    known = {kind.value: kind for kind in LintKind}
    names = (name for name in re.split(r"[,\s]+", match["checks"]) if name)
    checks = tuple(known[name] for name in names if name in known)
    return ControlComment(checks=checks, mode=match["mode"])


@dataclass
class LineEntry:
    """One logical line of an environment file."""

    number: int
    raw_string: str
    is_last_line: bool = False
    is_deleted: bool = False

    def is_empty(self) -> bool:
        return not self.raw_string.strip()

    def is_comment(self) -> bool:
        return self.raw_string.strip().startswith("#")

    def is_empty_or_comment(self) -> bool:
        return self.is_empty() or self.is_comment()

    def key(self) -> str | None:
        """The key of the line, or None for blank lines and comments."""
        if self.is_empty_or_comment():
            return None
        line = self.raw_string
        if line.startswith(_EXPORT_PREFIX):
            line = line[len(_EXPORT_PREFIX):]
        return line.partition("=")[0]

    def value(self) -> str | None:
        """Everything after the first equal sign, or None if there is none."""
        if self.is_empty_or_comment():
            return None
        _, sep, rest = self.raw_string.partition("=")
        return rest if sep else None

    def control_comment(self) -> ControlComment | None:
        if not self.is_comment():
            return None
        return _parse_control_comment(self.raw_string)

    def substitution_keys(self) -> list[str]:
        """Keys referenced with ``$KEY`` or ``${KEY}`` in the value, in order."""
        value = self.value()
        if value is None:
            return []
        value = value.strip()
        if value.startswith("'"):
            return []

        keys = []
        while "$" in value:
            prefix, _, raw_key = value.partition("$")
            initial_key, dollar, rest = raw_key.partition("$")
            value = dollar + rest
            if is_escaped(prefix):
                continue
            stripped = initial_key[1:] if initial_key.startswith("{") else initial_key
            key = _IDENTIFIER.match(stripped).group()
            if key:
                keys.append(key)
        return keys

    def mark_as_deleted(self) -> None:
        self.is_deleted = True


def is_escaped(prefix: str) -> bool:
    """True if the text ends with an odd number of backslashes."""
    trailing = len(prefix) - len(prefix.rstrip("\\"))
    return trailing % 2 == 1


def remove_invalid_leading_chars(key: str) -> str:
    """Drop everything before the first letter or underscore."""
    for index, char in enumerate(key):
        if char.isalpha() or char == "_":
            return key[index:]
    return ""


def is_multiline_start(value: str) -> str | None:
    """The quote character that opens a value continued on later lines, if any."""
    for quote in _QUOTE_CHARS:
        if not value.startswith(quote):
            continue
        if len(value) == 1 or not value.endswith(quote) or is_escaped(value[:-1]):
            return quote
    return None


def find_multiline_ranges(lines: Iterable[LineEntry]) -> list[tuple[int, int]]:
    """Line-number ranges (first, last) of quoted values spanning several lines."""
    ranges: list[tuple[int, int]] = []
    start: int | None = None
    quote: str | None = None

    for entry in lines:
        if start is not None:
            index = entry.raw_string.find(quote)
            if index != -1 and not is_escaped(entry.raw_string[:index]):
                ranges.append((start, entry.number))
                start = None
            continue
        value = entry.value()
        if value is None:
            continue
        opening = is_multiline_start(value.strip())
        if opening is not None:
            quote = opening
            start = entry.number

    return ranges


def parse_lines(lines: Iterable[str]) -> list[LineEntry]:
    """Number the lines and merge multi-line values into single entries."""
    raw_lines: Sequence[str] = list(lines)
    total = len(raw_lines)
    entries = [
        LineEntry(number, raw, number == total)
        for number, raw in enumerate(raw_lines, start=1)
    ]
    ends = dict(find_multiline_ranges(entries))

    result: list[LineEntry] = []
    remaining = iter(entries)
    for entry in remaining:
        end = ends.get(entry.number)
        if end is None:
            result.append(entry)
            continue
        parts = [entry.raw_string]
        parts.extend(e.raw_string for e in islice(remaining, end - entry.number))
        result.append(LineEntry(entry.number, LF.join(parts), end == total))
    return result