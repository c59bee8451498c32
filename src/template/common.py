"""Post-processing shared by every template source."""

from __future__ import annotations

from pathlib import Path

from src.utils import count_files

from .errors import TemplateError

# npm never publishes ``.gitignore``; templates ship it under one of these names.
_IGNORE_FILE_ALIASES = ("gitignore", "_gitignore")


def restore_gitignore(destination: Path) -> bool:
    """Rename an npm-safe ignore file at *destination* back to ``.gitignore``."""
    target = destination / ".gitignore"
    for alias in _IGNORE_FILE_ALIASES:
        candidate = destination / alias
        if candidate.is_file():
            if target.exists():
                candidate.unlink()
            else:
                candidate.rename(target)
            return True
    return False


def finalize(destination: Path) -> int:
    """Tidy a freshly materialized template and return its file count.

    Raises:
        TemplateError: The template produced no files.
    """
    restore_gitignore(destination)
    total = count_files(destination) if destination.is_dir() else 0
    if total == 0:
        raise TemplateError(f"Template produced no files in {destination}")
    return total
