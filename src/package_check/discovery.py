"""Package root inspection utilities."""

from __future__ import annotations

import re
from pathlib import Path

from .errors import ManifestError

_README_PATTERN = re.compile(r"^readme\.?", re.IGNORECASE)


def list_root_files(root: Path) -> list[str]:
    """Return the sorted names of the entries directly under root.

    Raises:
        ManifestError: If root is missing, not a directory or unreadable.
    """
    root = root.resolve()
    try:
        return sorted(path.name for path in root.iterdir())
    except OSError as exc:
        raise ManifestError(f"Cannot list package directory {root}: {exc}") from exc


def find_readme(files: list[str]) -> str | None:
    """Return the first README-like name (README, readme.md, Readme.txt, ...)."""
    for name in files:
        if _README_PATTERN.match(name):
            return name
    return None
