"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from collections.abc import Callable

import pytest

from package_check.config import CONFIG_PATH_ENV_VAR
from package_check.cli import WARN_ONLY_ENV_VAR

PASSING_MANIFEST: dict[str, Any] = {
    "name": "demo-pkg",
    "version": "1.2.3",
    "type": "module",
    "exports": {".": {"import": "./index.js"}},
    "files": ["dist"],
    "keywords": ["demo"],
    "license": "MIT",
    "repository": {"type": "git", "url": "git+https://github.com/acme/demo-pkg.git"},
    "types": "index.d.ts",
}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(WARN_ONLY_ENV_VAR, raising=False)


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., Path]:
    """Write a package directory with the given manifest overrides and a README."""

    def _make(readme: bool = True, drop: tuple[str, ...] = (), **overrides: Any) -> Path:
        manifest = {k: v for k, v in PASSING_MANIFEST.items() if k not in drop}
        manifest.update(overrides)
        (tmp_path / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        if readme:
            (tmp_path / "README.md").write_text("# demo\n", encoding="utf-8")
        return tmp_path

    return _make
