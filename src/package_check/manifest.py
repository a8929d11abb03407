"""Load package.json and extract the fields the checks look at."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import ManifestError

MANIFEST_NAME = "package.json"


def load_manifest(root: Path) -> dict[str, Any]:
    """Return the parsed package.json found directly under ``root``.

    Raises:
        ManifestError: If the file is missing, unreadable, not valid JSON or
            not a JSON object.
    """
    path = root / MANIFEST_NAME
    if not path.is_file():
        raise ManifestError(f"{MANIFEST_NAME} not found in {root}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def repository_reference(manifest: dict[str, Any]) -> str | None:
    """Return the raw repository reference, or None when the manifest has none.

    npm accepts either a string (``"github:owner/repo"``) or a record such as
    ``{"type": "git", "url": "git+https://github.com/owner/repo.git"}``.
    """
    repository = manifest.get("repository")
    if isinstance(repository, str):
        return repository.strip() or None
    if isinstance(repository, dict):
        url = repository.get("url")
        if isinstance(url, str) and url.strip():
            return url.strip()
    return None


def repository_directory(manifest: dict[str, Any]) -> str:
    """Return the monorepo sub-directory declared by ``repository.directory``."""
    repository = manifest.get("repository")
    if isinstance(repository, dict):
        directory = repository.get("directory")
        if isinstance(directory, str):
            return directory.strip()
    return ""
