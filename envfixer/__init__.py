"""Repairs for common problems in .env files: parsing, fixers, file helpers and key comparison."""

__version__ = "0.1.0"

__all__ = ["compare", "entries", "fixing", "fs_utils", "line_fixers", "ordering"]