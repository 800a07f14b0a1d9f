"""Console summary of a comparison run."""

from __future__ import annotations

from pagediff.models.result import RunSummary

HEADING = "Summary of differing URL pairs:"
ALL_IDENTICAL = "All URL pairs are identical"


def render_summary(summary: RunSummary) -> list[str]:
    """Render the end-of-run listing as plain text lines."""
    lines = ["", HEADING]
    if not summary.differences and not summary.failures:
        lines.append(ALL_IDENTICAL)
        return lines

    for number, item in enumerate(summary.differences, 1):
        lines.append(f"{number}. {item.message}")
        lines.append(f"   Live: {item.live}")
        lines.append(f"   Dev: {item.dev}")
        if item.dev_browser:
            lines.append(f"   Dev Browser: {item.dev_browser}")
        lines.append(f"   Diff image: {item.diff_path}")

    if summary.failures:
        lines.append("")
        lines.append("URL pairs that could not be compared:")
        for number, failure in enumerate(summary.failures, 1):
            lines.append(f"{number}. {failure.message}")
            lines.append(f"   Live: {failure.live}")
            lines.append(f"   Dev: {failure.dev}")
            if failure.dev_browser:
                lines.append(f"   Dev Browser: {failure.dev_browser}")
            lines.append(f"   Error: {failure.error}")
    return lines
