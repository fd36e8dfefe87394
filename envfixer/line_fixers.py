"""Fixers that repair one line entry at a time."""

from __future__ import annotations

import re
from typing import ClassVar, Iterable, MutableSequence

from envfixer.entries import (
    LineEntry,
    LintKind,
    is_escaped,
    remove_invalid_leading_chars,
)

_SUBSTITUTION_NAME = re.compile(r"[A-Za-z0-9_]*")


class Fixer:
    """Repairs the lines that a check reported.

    ``kind`` names the check whose warnings the fixer handles. A ``mandatory``
    fixer runs even without warnings of its own, because earlier fixers may
    have produced problems for it.
    """

    kind: ClassVar[LintKind]
    mandatory: ClassVar[bool] = False

    def fix_warnings(
        self, warning_lines: Iterable[int], lines: MutableSequence[LineEntry]
    ) -> int:
        """Fix every reported line and return how many were fixed.

        Raises LookupError if a reported line number has no entry.
        """
        count = 0
        for number in warning_lines:
            line = next((entry for entry in lines if entry.number == number), None)
            if line is None:
                raise LookupError(f"no line entry with number {number}")
            if self.fix_line(line):
                count += 1
        return count

    def fix_line(self, line: LineEntry) -> bool:
        """Fix a single entry in place; True if it was changed."""
        return False


class KeyWithoutValueFixer(Fixer):
    """Adds the missing equal sign after a bare key."""

    kind = LintKind.KEY_WITHOUT_VALUE

    def fix_line(self, line: LineEntry) -> bool:
        line.raw_string += "="
        return True


class LowercaseKeyFixer(Fixer):
    """Turns the key into upper case."""

    kind = LintKind.LOWERCASE_KEY

    def fix_line(self, line: LineEntry) -> bool:
        key = line.key()
        value = line.value()
        if key is None or value is None:
            return False
        line.raw_string = f"{key.upper()}={value}"
        return True


class SpaceCharacterFixer(Fixer):
    """Removes the spaces around the equal sign."""

    kind = LintKind.SPACE_CHARACTER

    def fix_line(self, line: LineEntry) -> bool:
        key = line.key()
        value = line.value()
        if key is None or value is None:
            return False
        line.raw_string = f"{key.rstrip()}={value.lstrip()}"
        return True


class TrailingWhitespaceFixer(Fixer):
    """Strips whitespace at the end of the line."""

    kind = LintKind.TRAILING_WHITESPACE

    def fix_line(self, line: LineEntry) -> bool:
        line.raw_string = line.raw_string.rstrip()
        return True


class LeadingCharacterFixer(Fixer):
    """Drops the characters before the first letter or underscore of the key."""

    kind = LintKind.LEADING_CHARACTER

    def fix_line(self, line: LineEntry) -> bool:
        key = line.key()
        value = line.value()
        if key is None or value is None:
            return False
        line.raw_string = f"{remove_invalid_leading_chars(key)}={value}"
        return True


class QuoteCharacterFixer(Fixer):
    """Removes every quote character from the value."""

    kind = LintKind.QUOTE_CHARACTER

    def fix_line(self, line: LineEntry) -> bool:
        value = line.value()
        key = line.key()
        if key is None or value is None:
            return False
        bare = value.replace("'", "").replace('"', "")
        line.raw_string = f"{key}={bare}"
        return True


class IncorrectDelimiterFixer(Fixer):
    """Replaces non-alphanumeric characters in the key with underscores."""

    kind = LintKind.INCORRECT_DELIMITER

    def fix_line(self, line: LineEntry) -> bool:
        key = line.key()
        value = line.value()
        if key is None or value is None:
            return False
        start = len(key) - len(remove_invalid_leading_chars(key))
        cleaned = "".join(c if c.isalnum() else "_" for c in key[start:])
        line.raw_string = f"{key[:start]}{cleaned}={value}"
        return True


class ExtraBlankLineFixer(Fixer):
    """Marks a superfluous blank line for removal."""

    kind = LintKind.EXTRA_BLANK_LINE

    def fix_line(self, line: LineEntry) -> bool:
        line.mark_as_deleted()
        return True


class SubstitutionKeyFixer(Fixer):
    """Wraps every substituted key in the value in ``${...}``."""

    kind = LintKind.SUBSTITUTION_KEY

    def fix_line(self, line: LineEntry) -> bool:
        value = line.value()
        if value is None:
            return False
        value = value.strip()
        if value.startswith("'"):
            return False

        parts: list[str] = []
        while "$" in value:
            prefix, _, raw_key = value.partition("$")
            parts.append(prefix)
            parts.append("$")

            cut = raw_key.find("$")
            if cut == -1:
                initial_key, value = raw_key, ""
            else:
                initial_key, value = raw_key[:cut], raw_key[cut:]

            stripped = initial_key[1:] if initial_key.startswith("{") else initial_key
            end = _SUBSTITUTION_NAME.match(stripped).end()

            if is_escaped(prefix) or end == 0:
                parts.append(stripped)
                continue

            parts.append("{")
            parts.append(stripped[:end])
            rest = stripped[end:]
            if not rest.startswith("}"):
                parts.append("}")
            parts.append(rest)

        key = line.key()
        if key is None:
            return False
        line.raw_string = f"{key}={''.join(parts)}"
        return True