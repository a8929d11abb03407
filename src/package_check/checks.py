"""Quality checks run against a package root and its package.json.

Each check is a named predicate registered in ``CHECKS``; ``run_checks``
evaluates them in order and returns one ``CheckResult`` per check. The
repository check is the only one that calls into the URL core.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeAlias
from collections.abc import Callable, Iterable

from .discovery import find_readme, list_root_files
from .errors import MalformedRepoURLError
from .manifest import MANIFEST_NAME, load_manifest
from .repo_url import normalize_repo_url

logger = logging.getLogger(__name__)

DEFAULT_DOCS_BASE_URL = "https://docs.skypack.dev/package-authors/package-checks"

_VALID_STATUSES = {"passed", "failed", "skipped"}


@dataclass(slots=True, frozen=True)
class CheckContext:
    """Everything a predicate may inspect."""

    root: Path
    files: list[str]
    manifest: dict[str, Any] = field(default_factory=dict)


Predicate: TypeAlias = Callable[[CheckContext], bool]


@dataclass(slots=True, frozen=True)
class Check:
    """A registered check: identifier, display title, docs anchor and predicate."""

    id: str
    title: str
    anchor: str
    predicate: Predicate

    def docs_url(self, base_url: str = DEFAULT_DOCS_BASE_URL) -> str:
        return f"{base_url.rstrip('/')}#{self.anchor}"


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Outcome of a single check."""

    id: str
    title: str
    status: str
    url: str

    def __post_init__(self) -> None:
        if self.status not in _VALID_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "url": self.url,
        }


@dataclass(slots=True, frozen=True)
class CheckRun:
    """Results of a run plus the manifest they were computed from."""

    manifest: dict[str, Any]
    results: list[CheckResult]

    @property
    def passed(self) -> bool:
        return not any(result.failed for result in self.results)


def _present(value: Any) -> bool:
    """A manifest field is present unless it is null, false, 0 or an empty string.

    Empty arrays and objects count as present; ``keywords-empty`` tests
    emptiness separately.
    """
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _has_manifest(ctx: CheckContext) -> bool:
    return MANIFEST_NAME in ctx.files


def _has_esm_entrypoint(ctx: CheckContext) -> bool:
    pkg = ctx.manifest
    exports = pkg.get("exports")
    targets: list[Any] = []
    if isinstance(exports, dict):
        if exports.get("import"):
            return True
        targets = list(exports.values())
    elif isinstance(exports, list):
        targets = exports
    if any(isinstance(target, dict) and target.get("import") for target in targets):
        return True
    main = pkg.get("main")
    return (
        bool(pkg.get("module"))
        or pkg.get("type") == "module"
        or (isinstance(main, str) and main.endswith(".mjs"))
    )


def _has_export_map(ctx: CheckContext) -> bool:
    return _present(ctx.manifest.get("exports"))


def _has_files(ctx: CheckContext) -> bool:
    return _present(ctx.manifest.get("files"))


def _has_keywords(ctx: CheckContext) -> bool:
    return _present(ctx.manifest.get("keywords"))


def _has_non_empty_keywords(ctx: CheckContext) -> bool:
    keywords = ctx.manifest.get("keywords")
    return isinstance(keywords, list) and len(keywords) > 0


def _has_license(ctx: CheckContext) -> bool:
    return _present(ctx.manifest.get("license"))


def _has_repository_url(ctx: CheckContext) -> bool:
    repository = ctx.manifest.get("repository")
    if not repository:
        return False
    if isinstance(repository, str):
        return True
    if isinstance(repository, dict) and isinstance(repository.get("url"), str):
        try:
            normalize_repo_url(repository["url"])
        except MalformedRepoURLError as exc:
            logger.debug("Unusable repository url: %s", exc)
            return False
        return True
    return False


def _has_types(ctx: CheckContext) -> bool:
    pkg = ctx.manifest
    return any(_present(pkg.get(key)) for key in ("types", "typings", "typesVersions"))


def _has_readme(ctx: CheckContext) -> bool:
    return find_readme(ctx.files) is not None


# Registry of checks in evaluation order. The manifest check must stay first:
# every other predicate reads the parsed manifest.
CHECKS: tuple[Check, ...] = (
    Check("package-json", "package.json", "esm", _has_manifest),
    Check("esm", "ES Module Entrypoint", "esm", _has_esm_entrypoint),
    Check("export-map", "Export Map", "export-map", _has_export_map),
    Check("files", "No Unnecessary Files", "files", _has_files),
    Check("keywords", "Keywords", "keywords", _has_keywords),
    Check("keywords-empty", "Keywords (Empty)", "keywords", _has_non_empty_keywords),
    Check("license", "License", "license", _has_license),
    Check("repository", "Repository URL", "repository", _has_repository_url),
    Check("types", "TypeScript Types", "types", _has_types),
    Check("readme", "README", "readme", _has_readme),
)


def get_known_check_ids() -> list[str]:
    """Return the registered check IDs in evaluation order."""
    return [check.id for check in CHECKS]


def _evaluate(check: Check, ctx: CheckContext) -> bool:
    try:
        return bool(check.predicate(ctx))
    except Exception:
        logger.error("Check %r failed to run (internal tool error, please report this)", check.id)
        raise


def run_checks(
    root: Path,
    *,
    skip: Iterable[str] = (),
    docs_base_url: str = DEFAULT_DOCS_BASE_URL,
    fail_fast: bool = False,
) -> CheckRun:
    """Run every registered check against the package at ``root``.

    Params:
        root: package directory containing package.json
        skip: check IDs to report as skipped without evaluating them
        docs_base_url: prefix for each check's "how to fix" link
        fail_fast: stop after the first failing check

    When package.json is absent the remaining checks are not evaluated.

    Raises:
        ManifestError: If root cannot be listed, or package.json exists but
            cannot be parsed.
    """
    root = root.resolve()
    skipped = set(skip)
    ctx = CheckContext(root=root, files=list_root_files(root))
    results: list[CheckResult] = []

    for check in CHECKS:
        if check.id in skipped:
            status = "skipped"
        else:
            status = "passed" if _evaluate(check, ctx) else "failed"
        results.append(CheckResult(check.id, check.title, status, check.docs_url(docs_base_url)))
        logger.debug("%s: %s", check.id, status)

        if check.id == "package-json":
            if not _has_manifest(ctx):
                break
            ctx = CheckContext(root=root, files=ctx.files, manifest=load_manifest(root))
        if status == "failed" and fail_fast:
            break

    return CheckRun(manifest=ctx.manifest, results=results)
