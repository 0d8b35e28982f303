"""Harness orchestrator: prepares the generator, runs fixtures, and writes reports."""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

from baseline_harness.errors import HarnessError
from baseline_harness.models.config import HarnessConfig
from baseline_harness.models.fixture import BaselineOptions
from baseline_harness.models.run_result import FixtureResult, HarnessRun
from baseline_harness.reporter.json_report import generate_json_report
from baseline_harness.runner.baseline_test import run_baseline_test
from baseline_harness.runner.generator import prepare_plugin

logger = logging.getLogger(__name__)


class HarnessOrchestrator:
    """Runs configured fixtures one after another and collects their verdicts."""

    def __init__(self, config: HarnessConfig):
        self.config = config
        self._prepared = False

    def prepare(self) -> None:
        """One-time generator setup. SetupError propagates."""
        if self._prepared:
            return
        prepare_plugin(self.config)
        self._prepared = True

    def select_fixtures(self, names: list[str] | None = None) -> list[BaselineOptions]:
        if not names:
            return list(self.config.fixtures)
        selected = []
        for name in names:
            try:
                selected.append(self.config.get_fixture(name))
            except KeyError:
                raise ValueError(f"Unknown fixture: {name}") from None
        return selected

    def run_fixture(self, options: BaselineOptions) -> FixtureResult:
        """Run one fixture. Harness errors are recorded rather than raised."""
        start = time.time()
        try:
            verdict = run_baseline_test(self.config, options)
        except HarnessError as e:
            logger.error("Fixture %s errored: %s", options.baseline_name, e)
            return FixtureResult(
                baseline_name=options.baseline_name,
                result="error",
                duration_seconds=round(time.time() - start, 2),
                error=str(e),
            )

        result = "pass" if verdict.passed else "fail"
        logger.info("Fixture %s: %s", options.baseline_name, result)
        return FixtureResult(
            baseline_name=options.baseline_name,
            result=result,
            duration_seconds=round(time.time() - start, 2),
            verdict=verdict,
        )

    def run(self, names: list[str] | None = None) -> HarnessRun:
        """Run the named fixtures (all when names is empty)."""
        fixtures = self.select_fixtures(names)
        self.prepare()

        start = time.time()
        run = HarnessRun(
            run_id=f"run_{uuid.uuid4().hex[:8]}",
            started_at=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        )
        logger.info("=== Running %d baseline fixtures ===", len(fixtures))

        for options in fixtures:
            fixture_result = self.run_fixture(options)
            run.fixture_results.append(fixture_result)
            if fixture_result.result == "pass":
                run.passed += 1
            elif fixture_result.result == "fail":
                run.failed += 1
            else:
                run.errors += 1

        run.total_fixtures = len(fixtures)
        run.completed_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        run.duration_seconds = round(time.time() - start, 2)
        logger.info("=== %d passed, %d failed, %d errors in %.1fs ===",
                    run.passed, run.failed, run.errors, run.duration_seconds)
        return run

    def write_reports(self, run: HarnessRun, output_dir: Path | None = None) -> dict[str, str]:
        """Write all configured report formats. Returns format -> file path."""
        out_dir = output_dir or self.config.resolve(self.config.report_output_dir)
        generated = {}
        if "json" in self.config.report_formats:
            path = out_dir / f"report_{run.run_id}.json"
            generate_json_report(run, path)
            generated["json"] = str(path)
            logger.info("JSON report: %s", path)
        return generated
