"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from pagediff.models.result import RunSummary


def generate_json_report(summary: RunSummary, output_path: Path) -> None:
    """Write a machine-readable JSON report."""
    report = summary.model_dump()
    report["identical"] = summary.identical
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
