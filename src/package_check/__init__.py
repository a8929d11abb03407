"""package-check core package.

Repository URL normalization and raw asset resolution for package manifests,
plus the quality checklist CLI built on top of them.
"""

from .errors import ConfigError, MalformedRepoURLError, ManifestError, PackageCheckError
from .manifest import repository_reference
from .repo_url import DEFAULT_REF, UnrecognizedHost, normalize_repo_url, resolve_asset_url

__all__ = [
    "DEFAULT_REF",
    "ConfigError",
    "MalformedRepoURLError",
    "ManifestError",
    "PackageCheckError",
    "UnrecognizedHost",
    "normalize_repo_url",
    "repository_reference",
    "resolve_asset_url",
]
