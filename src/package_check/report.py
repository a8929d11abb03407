"""Report aggregation and JSON-friendly output."""

from __future__ import annotations

import posixpath
from typing import Any

from .checks import CheckResult
from .errors import MalformedRepoURLError
from .manifest import MANIFEST_NAME, repository_directory, repository_reference
from .repo_url import UnrecognizedHost, normalize_repo_url, resolve_asset_url


def repository_links(manifest: dict[str, Any], ref: str | None = None) -> dict[str, Any] | None:
    """Describe where the manifest's repository and its package.json live.

    ``manifestUrl`` is the raw package.json URL at ``ref``; for hosts without a
    raw-content convention it falls back to the repository root and
    ``hostRecognized`` is False. Returns None when no repository is declared.
    """
    raw = repository_reference(manifest)
    if raw is None:
        return None

    file_path = posixpath.join(repository_directory(manifest), MANIFEST_NAME)
    try:
        url = normalize_repo_url(raw)
        asset = resolve_asset_url(raw, file_path, ref)
    except MalformedRepoURLError as exc:
        return {"raw": raw, "error": str(exc)}

    if isinstance(asset, UnrecognizedHost):
        return {"raw": raw, "url": url, "manifestUrl": asset.url, "hostRecognized": False}
    return {"raw": raw, "url": url, "manifestUrl": asset, "hostRecognized": True}


def aggregate(
    package: str,
    results: list[CheckResult],
    repository: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Aggregate check results into a single report.

    Computes totals and the top-level ``passed`` flag; skipped checks count
    neither as passed nor as failed.
    """
    passed = sum(1 for r in results if r.status == "passed")
    failed = sum(1 for r in results if r.status == "failed")

    report: dict[str, Any] = {
        "version": "1",
        "package": package,
        "passed": failed == 0,
        "results": [r.to_dict() for r in results],
        "totals": {
            "checks": len(results),
            "passed": passed,
            "failed": failed,
        },
        "repository": repository,
    }

    return report
