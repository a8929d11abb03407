"""Human-readable rendering of a check report."""

from __future__ import annotations

from typing import Any

_STATUS_LABELS = {"passed": "PASS", "failed": "FAIL", "skipped": "SKIP"}


def render_summary(report: dict[str, Any]) -> str:
    """Return a plain-text summary: one line per check, fix links, and a verdict."""
    name = report.get("package") or "(unnamed package)"
    totals = report.get("totals", {})
    results = report.get("results", [])

    lines = [f"package-check: {name}", ""]
    for result in results:
        label = _STATUS_LABELS.get(result.get("status", ""), "????")
        lines.append(f"{label}  {result.get('title', '')}")

    repository = report.get("repository")
    if repository:
        lines.append("")
        if repository.get("error"):
            lines.append(f"Repository: {repository.get('raw')} ({repository['error']})")
        else:
            lines.append(f"Repository: {repository.get('url')}")
            if repository.get("hostRecognized"):
                lines.append(f"Manifest:   {repository.get('manifestUrl')}")

    lines.append("")
    failures = [r for r in results if r.get("status") == "failed"]
    for failure in failures:
        lines.append(f"Check failed: {failure.get('title', '')}")
        lines.append(f"How to fix:   {failure.get('url', '')}")

    if failures:
        lines.append(
            f"[{totals.get('passed', 0)}/{totals.get('checks', 0)}] "
            f"{name} failed {len(failures)} quality check(s)."
        )
    else:
        lines.append(f"[100/100] {name} passes all quality checks.")

    return "\n".join(lines) + "\n"
