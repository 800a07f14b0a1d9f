"""CLI entry point for pagediff."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from pagediff.models.config import CompareConfig
from pagediff.models.pairs import load_pairs
from pagediff.orchestrator import Orchestrator
from pagediff.reporter.json_report import generate_json_report
from pagediff.reporter.summary import render_summary

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _fail(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]", highlight=False, soft_wrap=True)
    sys.exit(1)


@click.command()
@click.argument("urls_file", required=False)
@click.option("--config", "-c", "config_path", default=None, help="Config JSON file path")
@click.option("--output-dir", "-o", default=None, help="Directory for diff artifacts")
@click.option("--chunk-size", type=int, default=None, help="Pairs compared concurrently")
@click.option("--threshold", type=float, default=None, help="Per-pixel tolerance (0-1)")
@click.option("--json-report", default=None, help="Also write a JSON report to this path")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--fail-fast", is_flag=True, help="Abort the run on the first pair error")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    urls_file: Optional[str],
    config_path: Optional[str],
    output_dir: Optional[str],
    chunk_size: Optional[int],
    threshold: Optional[float],
    json_report: Optional[str],
    headed: bool,
    fail_fast: bool,
    verbose: bool,
) -> None:
    """Compare live and dev renders of every URL pair in URLS_FILE."""
    setup_logging(verbose)

    if not urls_file:
        _fail("Please provide the URLs JSON file path as a command line argument.")

    try:
        cfg = CompareConfig.load(config_path) if config_path else CompareConfig()
        overrides = {
            "output_dir": output_dir,
            "chunk_size": chunk_size,
            "threshold": threshold,
        }
        updates = {k: v for k, v in overrides.items() if v is not None}
        if headed:
            updates["headless"] = False
        if fail_fast:
            updates["isolate_failures"] = False
        if updates:
            cfg = CompareConfig.model_validate({**cfg.model_dump(), **updates})
    except (FileNotFoundError, ValueError, ValidationError) as e:
        _fail(f"Invalid configuration: {e}")

    try:
        pairs = load_pairs(urls_file)
    except (OSError, ValueError) as e:
        _fail(str(e))

    try:
        summary = Orchestrator(cfg).run(pairs)
    except Exception as e:
        logger.exception("Run aborted")
        _fail(f"Error: {e}")

    for line in render_summary(summary):
        console.print(line, markup=False, highlight=False, soft_wrap=True)

    if json_report:
        generate_json_report(summary, Path(json_report))
        console.print(f"  JSON report: [blue]{json_report}[/blue]")

    if summary.failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
