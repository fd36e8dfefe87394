"""Comparison of the keys defined in several environment files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from envfixer.entries import parse_lines


@dataclass(frozen=True)
class CompareWarning:
    """A file that lacks keys defined in the other compared files."""

    path: Path
    missing_keys: list[str] = field(default_factory=list)


def _read_raw_lines(path: Path) -> list[str]:
    text = path.read_text(encoding="utf-8")
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def read_keys(path: str | os.PathLike[str]) -> list[str]:
    """The keys defined in the file, in the order they appear."""
    entries = parse_lines(_read_raw_lines(Path(path)))
    return [key for entry in entries if (key := entry.key()) is not None]


def compare_files(paths: Iterable[str | os.PathLike[str]]) -> list[CompareWarning]:
    """Report every file that misses a key some other file defines.

    Paths that are not existing files are ignored, and a file named twice is
    read once. Missing keys are listed in the order they were first seen.
    """
    files: list[tuple[Path, list[str]]] = []
    seen: set[Path] = set()
    for raw_path in paths:
        path = Path(raw_path)
        if not path.is_file():
            continue
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        files.append((path, read_keys(path)))

    all_keys = list(dict.fromkeys(key for _, keys in files for key in keys))

    warnings = []
    for path, keys in files:
        present = set(keys)
        missing = [key for key in all_keys if key not in present]
        if missing:
            warnings.append(CompareWarning(path=path, missing_keys=missing))
    return warnings