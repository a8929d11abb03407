"""Configuration loader for package-check.

Settings are read from a YAML (or JSON) file and validated against
``SETTINGS_SCHEMA``. A missing default file is not an error: the built-in
defaults apply. Supported keys:

- ``skip``: check IDs to report as skipped
- ``docsBaseUrl``: prefix for each check's "how to fix" link
- ``ref``: branch, tag or commit used when resolving repository asset URLs
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from collections.abc import Iterable

import yaml
from jsonschema import Draft202012Validator

from .checks import DEFAULT_DOCS_BASE_URL, get_known_check_ids
from .errors import ConfigError

DEFAULT_CONFIG_NAME = ".package-check.yml"
CONFIG_PATH_ENV_VAR = "PACKAGE_CHECK_CONFIG"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "skip": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
        },
        "docsBaseUrl": {"type": "string", "minLength": 1},
        "ref": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    skip: tuple[str, ...] = ()
    docs_base_url: str = DEFAULT_DOCS_BASE_URL
    ref: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        return cls(
            skip=tuple(data.get("skip", ())),
            docs_base_url=data.get("docsBaseUrl", DEFAULT_DOCS_BASE_URL),
            ref=data.get("ref"),
        )


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_config_path(path: Path | str | None, root: Path) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. PACKAGE_CHECK_CONFIG environment variable
    3. .package-check.yml in the package root, when it exists
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    default = root / DEFAULT_CONFIG_NAME
    return default if default.is_file() else None


def load_settings(path: Path | str | None = None, root: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to the config file. If not provided, uses the
            PACKAGE_CHECK_CONFIG env var or ``root/.package-check.yml``.
        root: Package root searched for the default file (defaults to cwd).

    Raises:
        ConfigError: If an explicitly named file is missing, or any file
            cannot be read, parsed or validated.
    """
    config_path = _resolve_config_path(path, root or Path.cwd())
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    if data is None:
        data = {}

    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{_format_errors(errors)}")

    settings = Settings.from_dict(data)
    validate_check_ids(settings)
    return settings


def validate_check_ids(settings: Settings) -> None:
    """Validate that every skipped check ID is registered.

    Raises:
        ConfigError: If any skipped ID is unknown.
    """
    known = get_known_check_ids()
    unknown = [check_id for check_id in settings.skip if check_id not in known]
    if unknown:
        raise ConfigError(
            f"Unknown check ID(s): {', '.join(sorted(unknown))}. "
            f"Registered checks: {', '.join(known)}"
        )
