"""Exception hierarchy shared by the core and the checklist CLI."""

from __future__ import annotations


class PackageCheckError(RuntimeError):
    """Base error for package-check failures."""


class MalformedRepoURLError(PackageCheckError, ValueError):
    """Raised when a repository reference cannot be turned into a parseable URL."""


class ManifestError(PackageCheckError):
    """Raised when package.json is missing, unreadable or not a JSON object."""


class ConfigError(PackageCheckError):
    """Raised when the configuration file cannot be loaded or is invalid."""
