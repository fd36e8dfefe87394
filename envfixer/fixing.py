"""Fixers that work on a whole file, and the pipeline that applies every fixer."""

from __future__ import annotations

from typing import Collection, Iterable, MutableSequence, Sequence

from envfixer.entries import LF, LineEntry, LintKind
from envfixer.entries import Warning as LintWarning
from envfixer.line_fixers import (
    ExtraBlankLineFixer,
    Fixer,
    IncorrectDelimiterFixer,
    KeyWithoutValueFixer,
    LeadingCharacterFixer,
    LowercaseKeyFixer,
    QuoteCharacterFixer,
    SpaceCharacterFixer,
    SubstitutionKeyFixer,
    TrailingWhitespaceFixer,
)
from envfixer.ordering import UnorderedKeyFixer


class DuplicatedKeyFixer(Fixer):
    """Comments out every repeated definition of a key after the first."""

    kind = LintKind.DUPLICATED_KEY
    mandatory = True

    def fix_warnings(
        self, warning_lines: Iterable[int], lines: MutableSequence[LineEntry]
    ) -> int:
        warning_lines = list(warning_lines)
        seen: set[str] = set()
        is_disabled = False

        for line in lines:
            comment = line.control_comment()
            if comment is not None and self.kind in comment.checks:
                is_disabled = comment.is_disabled()
            if is_disabled:
                continue

            key = line.key()
            if key is None:
                continue
            if key in seen:
                self.fix_line(line)
            else:
                seen.add(key)

        return len(warning_lines)

    def fix_line(self, line: LineEntry) -> bool:
        line.raw_string = f"# {line.raw_string}"
        return True


class EndingBlankLineFixer(Fixer):
    """Adds the final newline when the file lacks one."""

    kind = LintKind.ENDING_BLANK_LINE

    def fix_warnings(
        self, warning_lines: Iterable[int], lines: MutableSequence[LineEntry]
    ) -> int:
        if not lines:
            raise LookupError("no lines to end with a blank line")
        if lines[-1].raw_string.endswith(LF):
            return 0
        lines.append(LineEntry(len(lines) + 1, LF, True))
        return 1


def fix_list() -> list[Fixer]:
    """All fixers in the order they must run.

    Single-line fixers come first, then the ones that work on the file as a whole.
    """
    return [
        KeyWithoutValueFixer(),
        LowercaseKeyFixer(),
        SpaceCharacterFixer(),
        TrailingWhitespaceFixer(),
        LeadingCharacterFixer(),
        QuoteCharacterFixer(),
        IncorrectDelimiterFixer(),
        ExtraBlankLineFixer(),
        SubstitutionKeyFixer(),
        UnorderedKeyFixer(),
        DuplicatedKeyFixer(),
        EndingBlankLineFixer(),
    ]


def run(
    warnings: Sequence[LintWarning],
    lines: MutableSequence[LineEntry],
    skip_checks: Collection[LintKind] = (),
) -> int:
    """Apply the fixers to ``lines`` in place and return the number of fixes.

    Fixers for skipped checks do not run. If a fixer cannot find a line it
    was asked to fix, nothing more is done and 0 is returned.
    """
    if not warnings:
        return 0

    count = 0
    for fixer in fix_list():
        if fixer.kind in skip_checks:
            continue
        warning_lines = [w.line_number for w in warnings if w.check_name == fixer.kind]
        if not (fixer.mandatory or warning_lines):
            continue
        try:
            count += fixer.fix_warnings(warning_lines, lines)
        except LookupError:
            return 0

    lines[:] = [line for line in lines if not line.is_deleted]
    return count