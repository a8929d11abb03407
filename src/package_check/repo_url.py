"""Repository URL normalization and raw asset resolution.

Package manifests point at their source repository in many shapes: npm
shorthands (``github:owner/repo``, bare ``owner/repo``), SSH references
(``git@github.com:owner/repo.git``), ``git+https://`` URLs and plain or
protocol-relative HTTP URLs. ``normalize_repo_url`` rewrites all of them into
a single ``https://`` form, and ``resolve_asset_url`` turns that form into the
provider's raw-content URL for one file at one ref.

Both functions are pure: no I/O, no module state beyond immutable tables.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from typing import TypeAlias
from collections.abc import Callable
from urllib.parse import SplitResult, urlsplit

from .errors import MalformedRepoURLError

logger = logging.getLogger(__name__)

DEFAULT_REF = "HEAD"

_HOSTNAME_PATTERN = re.compile(r"[\w.-]+")


@dataclass(slots=True, frozen=True)
class RewriteStep:
    """A single textual rewrite applied while normalizing a reference.

    ``count`` follows ``re.sub`` semantics: ``1`` rewrites the first match
    only, ``0`` rewrites every match.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: str
    count: int = 1

    def apply(self, value: str) -> str:
        return self.pattern.sub(self.replacement, value, count=self.count)


# Order matters: the git+/.git/git@ strips expose the bare ``host.tld:path``
# form, which must be rewritten before a scheme is injected.
REWRITE_STEPS: tuple[RewriteStep, ...] = (
    RewriteStep("strip-git-plus", re.compile(r"^(?:git\+)+", re.IGNORECASE), ""),
    RewriteStep("strip-dot-git", re.compile(r"(?:\.git)+$", re.IGNORECASE), ""),
    RewriteStep(
        "strip-git-at",
        re.compile(r"^((?:[a-z][a-z0-9+.-]*\s*:)?//)?(?:git@)+", re.IGNORECASE),
        r"\1",
    ),
    RewriteStep(
        "scp-host-colon",
        re.compile(r"(bitbucket|github|gitlab)\.([a-z]+):"),
        r"\1.\2/",
        count=0,
    ),
    RewriteStep("bitbucket-shorthand", re.compile(r"^bitbucket:"), "bitbucket.org/"),
    RewriteStep("github-gitlab-shorthand", re.compile(r"^(github|gitlab):"), r"\1.com/"),
    # npm reads a bare "owner/repo" as a GitHub repository.
    RewriteStep("bare-github-shorthand", re.compile(r"^[^./:\s]+/[^/:\s]+$"), r"github.com/\g<0>"),
    RewriteStep(
        "force-https",
        re.compile(r"^(?:(?:https?|git|ssh)\s*://|//)?", re.IGNORECASE),
        "https://",
    ),
)


@dataclass(slots=True, frozen=True)
class UnrecognizedHost:
    """No raw-content convention is known for ``hostname``.

    ``url`` is the canonical repository URL, so callers can still link to the
    repository root when they cannot link to a specific file.
    """

    hostname: str
    url: str


AssetURL: TypeAlias = "str | UnrecognizedHost"
AssetBuilder: TypeAlias = Callable[[str, str, str], str]


def _parse(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        parts.port  # non-numeric ports only fail on access
    except ValueError as exc:
        raise MalformedRepoURLError(f"Cannot parse repository URL {url!r}: {exc}") from exc

    hostname = parts.hostname
    if not hostname or not _HOSTNAME_PATTERN.fullmatch(hostname):
        raise MalformedRepoURLError(f"Repository URL {url!r} has no valid host")
    return parts


def _rewrite(value: str) -> str:
    for step in REWRITE_STEPS:
        rewritten = step.apply(value)
        if rewritten != value:
            logger.debug("%s: %r -> %r", step.name, value, rewritten)
        value = rewritten
    return value.strip()


def _canonicalize(raw: str) -> tuple[str, SplitResult]:
    # Strips can expose new matches (whitespace before ".git", a second
    # "git@" after "//"), so repeat until stable. Every pass after the first
    # starts from "https://" and can only shorten the string.
    value = raw.strip()
    while True:
        rewritten = _rewrite(value)
        if rewritten == value:
            break
        value = rewritten
    return value, _parse(value)


def normalize_repo_url(raw: str) -> str:
    """Return the canonical ``https://`` URL for a repository reference.

    Unknown hosts are normalized like any other; deciding whether a host is
    supported is left to ``resolve_asset_url``.

    Raises:
        MalformedRepoURLError: If the rewritten string has no usable host or
            an invalid port (for example, an empty reference).
    """
    url, _ = _canonicalize(raw)
    return url


def _ref_or_default(version: str | None) -> str:
    if version is None:
        return DEFAULT_REF
    return version.strip() or DEFAULT_REF


def _join_path(*segments: str) -> str:
    """Join URL path segments with a single leading slash, resolving dot segments."""
    parts = [segment.strip("/") for segment in segments]
    return posixpath.normpath("/" + "/".join(part for part in parts if part))


def _bitbucket_url(pathname: str, file_path: str, ref: str) -> str:
    return "https://bitbucket.org" + _join_path(pathname, ref, file_path)


def _github_url(pathname: str, file_path: str, ref: str) -> str:
    # GitHub tree URLs look like /owner/repo/tree/<branch>/<subdir...>. The
    # branch segment is replaced by ``ref``; a branch containing "/" is
    # indistinguishable from a subdirectory and is not supported.
    segments = [segment for segment in pathname.split("/") if segment]
    repo, subdir = segments, []
    for index in range(2, len(segments)):
        if segments[index] == "tree":
            repo, subdir = segments[:index], segments[index + 2 :]
            break
    return "https://raw.githubusercontent.com" + _join_path(*repo, ref, *subdir, file_path)


def _gitlab_url(pathname: str, file_path: str, ref: str) -> str:
    return "https://gitlab.com" + _join_path(pathname, "-", "raw", ref, file_path)


@dataclass(slots=True, frozen=True)
class AssetHost:
    """Binds a hosting provider's hostname to its raw-content URL builder."""

    hostname: str
    display_name: str
    build: AssetBuilder


ASSET_HOSTS: dict[str, AssetHost] = {
    "bitbucket.org": AssetHost("bitbucket.org", "Bitbucket", _bitbucket_url),
    "github.com": AssetHost("github.com", "GitHub", _github_url),
    "gitlab.com": AssetHost("gitlab.com", "GitLab", _gitlab_url),
}


def resolve_asset_url(raw: str, file_path: str, version: str | None = None) -> AssetURL:
    """Return the raw-content URL of ``file_path`` in the repository ``raw`` points at.

    Args:
        raw: Repository reference in any form ``normalize_repo_url`` accepts.
        file_path: Path of the file relative to the repository root.
        version: Branch, tag or commit. Missing or blank values use ``HEAD``,
            which every supported provider reads as the default branch.

    Returns:
        The asset URL, or an ``UnrecognizedHost`` for hosts without a known
        raw-content convention.

    Raises:
        MalformedRepoURLError: If ``raw`` cannot be normalized into a URL.
    """
    url, parts = _canonicalize(raw)
    hostname = parts.hostname or ""

    host = ASSET_HOSTS.get(hostname)
    if host is None:
        logger.debug("No raw-content convention for host %r (%s)", hostname, url)
        return UnrecognizedHost(hostname=hostname, url=url)

    asset = host.build(parts.path or "/", file_path, _ref_or_default(version))
    logger.debug("Resolved %s asset %r -> %s", host.display_name, file_path, asset)
    return asset
