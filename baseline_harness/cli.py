"""CLI entry point for the baseline harness."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from baseline_harness.comparison.compare import compare_trees
from baseline_harness.errors import HarnessError
from baseline_harness.models.comparison import PathStatus, Verdict
from baseline_harness.models.config import HarnessConfig, normalize_extensions
from baseline_harness.orchestrator import HarnessOrchestrator
from baseline_harness.reporter.json_report import generate_verdict_report

console = Console()

_STATUS_STYLE = {
    PathStatus.MATCHED: "green",
    PathStatus.MISMATCHED: "red",
    PathStatus.MISSING_BASELINE: "red",
    PathStatus.NOT_GENERATED: "yellow",
}


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _print_verdict(verdict: Verdict, show_matched: bool = False) -> None:
    table = Table(title="Baseline Comparison")
    table.add_column("Path")
    table.add_column("Status", style="bold")
    for status in verdict.statuses:
        if status.status == PathStatus.MATCHED and not show_matched:
            continue
        style = _STATUS_STYLE[status.status]
        table.add_row(status.path, f"[{style}]{status.status.value}[/{style}]")
    if table.row_count:
        console.print(table)

    outcome = "[bold green]PASS[/bold green]" if verdict.passed else "[bold red]FAIL[/bold red]"
    console.print(
        f"{outcome} {verdict.files_visited} files in {verdict.directories_visited} directories, "
        f"{verdict.baseline_files} baselines"
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Baseline comparison harness for code generators"""
    setup_logging(verbose)


@cli.command()
@click.argument("actual_dir", type=click.Path(file_okay=False))
@click.argument("baseline_dir", type=click.Path(file_okay=False))
@click.option("--baseline-extension", default=".baseline", show_default=True,
              help="Suffix marking baseline files")
@click.option("--volatile-extension", "volatile_extensions", multiple=True,
              help="Extension exempt from content comparison (repeatable, default .proto)")
@click.option("--json-report", type=click.Path(dir_okay=False), help="Write the verdict as JSON")
@click.option("--show-matched", is_flag=True, help="List matched files too")
def compare(
    actual_dir: str,
    baseline_dir: str,
    baseline_extension: str,
    volatile_extensions: tuple[str, ...],
    json_report: str | None,
    show_matched: bool,
) -> None:
    """Compare a generated directory against a baseline directory."""
    try:
        verdict = compare_trees(
            actual_dir,
            baseline_dir,
            baseline_extension=baseline_extension,
            volatile_extensions=normalize_extensions(volatile_extensions) or [".proto"],
        )
    except HarnessError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    _print_verdict(verdict, show_matched)
    if json_report:
        generate_verdict_report(verdict, Path(json_report))
        console.print(f"  JSON report: [blue]{json_report}[/blue]")
    if not verdict.passed:
        sys.exit(1)


@cli.command()
@click.option("--config", "-c", default="harness-config.json", help="Config file path")
@click.option("--fixture", "-f", "fixtures", multiple=True, help="Fixture to run (repeatable, default all)")
def run(config: str, fixtures: tuple[str, ...]) -> None:
    """Regenerate fixtures and compare them against their baselines."""
    try:
        cfg = HarnessConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        console.print("Run 'baseline-harness init' to create a default config.")
        sys.exit(1)

    orchestrator = HarnessOrchestrator(cfg)
    try:
        harness_run = orchestrator.run(list(fixtures))
    except (HarnessError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    reports = orchestrator.write_reports(harness_run)

    table = Table(title="Results Summary")
    table.add_column("Fixture", style="bold")
    table.add_column("Result")
    table.add_column("Duration")
    table.add_column("Warnings")
    colors = {"pass": "green", "fail": "red", "error": "red"}
    for r in harness_run.fixture_results:
        color = colors[r.result]
        warnings = str(len(r.verdict.warnings)) if r.verdict else (r.error or "")
        table.add_row(r.baseline_name, f"[{color}]{r.result}[/{color}]", f"{r.duration_seconds}s", warnings)
    console.print(table)
    console.print(
        f"[green]{harness_run.passed} passed[/green], [red]{harness_run.failed} failed[/red], "
        f"[red]{harness_run.errors} errors[/red]"
    )
    for fmt, path in reports.items():
        console.print(f"  {fmt.upper()} report: [blue]{path}[/blue]")

    if not harness_run.succeeded:
        sys.exit(1)


@cli.command("list")
@click.option("--config", "-c", default="harness-config.json", help="Config file path")
def list_fixtures(config: str) -> None:
    """List configured fixtures."""
    try:
        cfg = HarnessConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        sys.exit(1)
    if not cfg.fixtures:
        console.print("[yellow]No fixtures configured[/yellow]")
        return
    for i, fixture in enumerate(cfg.fixtures, 1):
        console.print(f"  {i}. {fixture.baseline_name} [dim]({fixture.proto_path})[/dim]")


@cli.command()
def init() -> None:
    """Create a default configuration file."""
    config_path = Path("harness-config.json")
    if config_path.exists():
        if not click.confirm("harness-config.json already exists. Overwrite?"):
            return

    cfg = HarnessConfig()
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nAdd fixtures to this file and run:")
    console.print("  [blue]baseline-harness run[/blue]")


if __name__ == "__main__":
    cli()
