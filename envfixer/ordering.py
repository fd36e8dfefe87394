"""Fixer that sorts keys alphabetically within groups of lines."""

from __future__ import annotations

from typing import Iterable, MutableSequence, Sequence

from envfixer.entries import LineEntry, LintKind
from envfixer.line_fixers import Fixer


def _sort_key(chunk: list[LineEntry]) -> tuple[bool, str]:
    key = chunk[-1].key()
    return (key is not None, key or "")


def sort_group(part: Sequence[LineEntry]) -> list[LineEntry]:
    """Sort the lines of one group by key, keeping comments with the line below them.

    Each significant line travels together with the comments directly above it.
    Comments after the last significant line are not part of any chunk.
    """
    chunks: list[list[LineEntry]] = []
    pending: list[LineEntry] = []
    for line in part:
        pending.append(line)
        if not line.is_comment():
            chunks.append(pending)
            pending = []

    chunks.sort(key=_sort_key)
    return [line for chunk in chunks for line in chunk]


class UnorderedKeyFixer(Fixer):
    """Sorts keys alphabetically.

    Groups are separated by blank lines and control comments; a line that uses
    a key defined earlier in its group also closes the group and is annotated
    with the reason it stays out of order.
    """

    kind = LintKind.UNORDERED_KEY
    mandatory = True

    def fix_warnings(
        self, warning_lines: Iterable[int], lines: MutableSequence[LineEntry]
    ) -> int:
        start = 0
        end: int | None = None
        is_disabled = False
        total = len(lines)

        for i, line in enumerate(list(lines)):
            comment = line.control_comment()
            is_control_comment = comment is not None
            controls_this_check = comment is not None and self.kind in comment.checks
            is_off = comment is not None and comment.is_disabled()

            if not is_disabled:
                earlier_keys = {
                    key for entry in lines[start:i] if (key := entry.key()) is not None
                }
                used = [key for key in line.substitution_keys() if key in earlier_keys]

                if not line.is_empty_or_comment() and not used:
                    end = i + 1

                if line.is_empty() or i + 1 == total or is_control_comment or used:
                    if used:
                        line.raw_string = (
                            f"{line.raw_string} # Unordered because "
                            f"{line.key()} uses {', '.join(used)}"
                        )
                    if end is not None:
                        lines[start:end] = sort_group(lines[start:end])
                        end = None
                    start = i + 1

            if controls_this_check:
                is_disabled = is_off
                start = i + 1

        return sum(1 for _ in warning_lines)