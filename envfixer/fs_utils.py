"""File-system helpers: path resolution, writing entries and backups."""

from __future__ import annotations

import os
import shutil
import time
from itertools import takewhile
from pathlib import Path
from typing import Sequence

from envfixer.entries import LineEntry


def canonicalize(path: str | os.PathLike[str]) -> Path:
    """The absolute path with symbolic links resolved; the path must exist."""
    return Path(path).resolve(strict=True)


def get_relative_path(
    target_path: str | os.PathLike[str], base_path: str | os.PathLike[str]
) -> Path:
    """The path of ``target_path`` relative to ``base_path``."""
    target = Path(target_path).parts
    base = Path(base_path).parts
    common = sum(1 for _ in takewhile(lambda pair: pair[0] == pair[1], zip(base, target)))
    return Path(*([".."] * (len(base) - common)), *target[common:])


def write_file(path: str | os.PathLike[str], lines: Sequence[LineEntry]) -> None:
    """Write every entry but the last, which only stands for the final newline."""
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.writelines(f"{line.raw_string}\n" for line in lines[:-1])


def backup_file(path: str | os.PathLike[str]) -> Path:
    """Copy the file next to itself as ``<name>_<unix time>.bak`` and return the copy."""
    source = Path(path)
    timestamp = int(time.time())
    backup = source.with_name(f"{source.name}_{timestamp}.bak")
    shutil.copy(source, backup)
    return backup