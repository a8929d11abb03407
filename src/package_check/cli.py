"""Run the package quality checklist against an npm package directory."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .checks import run_checks
from .config import load_settings
from .errors import ConfigError, ManifestError
from .report import aggregate, repository_links
from .summary import render_summary

WARN_ONLY_ENV_VAR = "PACKAGE_CHECK_WARN_ONLY"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="package-check", description=__doc__)
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Package directory containing package.json",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML/JSON settings file",
    )
    parser.add_argument(
        "--ref",
        default=None,
        help="Branch, tag or commit used for repository asset links (default: HEAD)",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--fail-fast", action="store_true", help="Stop at the first failing check"
    )
    parser.add_argument(
        "--warn-only", action="store_true", help="Report failures but exit 0"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _warn_only(flag: bool) -> bool:
    if flag:
        return True
    return os.getenv(WARN_ONLY_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "y"}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = args.root.resolve()
    try:
        settings = load_settings(args.config, root=root)
        run = run_checks(
            root,
            skip=settings.skip,
            docs_base_url=settings.docs_base_url,
            fail_fast=args.fail_fast,
        )
    except ConfigError as exc:
        print(f"ERROR: Invalid settings: {exc}", file=sys.stderr)
        return 1
    except ManifestError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    name = str(run.manifest.get("name") or root.name)
    repository = repository_links(run.manifest, args.ref or settings.ref)
    report = aggregate(name, run.results, repository)

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(render_summary(report), end="")

    if not report["passed"] and not _warn_only(args.warn_only):
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
