"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from baseline_harness.models.comparison import PathStatus, Verdict
from baseline_harness.models.run_result import HarnessRun


def _status_counts(verdict: Verdict) -> dict[str, int]:
    return {status.value: len(verdict.with_status(status)) for status in PathStatus}


def generate_json_report(run: HarnessRun, output_path: Path) -> None:
    """Write a machine-readable JSON report for a whole harness run."""
    report = run.model_dump(mode="json")
    for fixture, data in zip(run.fixture_results, report["fixture_results"]):
        if fixture.verdict is not None:
            data["status_counts"] = _status_counts(fixture.verdict)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)


def generate_verdict_report(verdict: Verdict, output_path: Path) -> None:
    """Write a JSON report for a single tree comparison."""
    report = verdict.model_dump(mode="json")
    report["status_counts"] = _status_counts(verdict)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
