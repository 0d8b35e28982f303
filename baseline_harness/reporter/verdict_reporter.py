"""Folds reconciliation results and leftover baselines into a pass/fail verdict."""

from __future__ import annotations

import logging

from baseline_harness.comparison.tree_collector import DEFAULT_BASELINE_EXTENSION
from baseline_harness.models.comparison import (
    BaselineRegistry,
    CompareOutcome,
    FileStatus,
    PathStatus,
    ReconcileResult,
    Verdict,
)

logger = logging.getLogger(__name__)

_OUTCOME_STATUS = {
    CompareOutcome.IDENTICAL: PathStatus.MATCHED,
    CompareOutcome.CONTENT_MISMATCH: PathStatus.MISMATCHED,
    CompareOutcome.MISSING_BASELINE: PathStatus.MISSING_BASELINE,
}


class VerdictReporter:
    """Builds the Verdict for one comparison run.

    Each relative path ends up with exactly one FileStatus. A mismatched file
    is reported twice in the warning stream (its line diagnostics, then its
    leftover registry entry) but both messages land on the same record.
    """

    def __init__(self, baseline_extension: str = DEFAULT_BASELINE_EXTENSION):
        self.baseline_extension = baseline_extension

    def _relative(self, key: str) -> str:
        return key[: -len(self.baseline_extension)] if key.endswith(self.baseline_extension) else key

    def build(self, result: ReconcileResult, registry: BaselineRegistry, baseline_files: int = 0) -> Verdict:
        statuses: dict[str, FileStatus] = {}
        warnings: list[str] = []

        for comparison in result.comparisons:
            rel = self._relative(registry.key_for(comparison.baseline_path))
            statuses[rel] = FileStatus(
                path=rel,
                status=_OUTCOME_STATUS[comparison.outcome],
                messages=list(comparison.messages),
            )
            warnings.extend(comparison.messages)

        leftovers = registry.remaining()
        for key in leftovers:
            message = f"{registry.path_for(key)} is not identical with the generated file."
            logger.warning(message)
            warnings.append(message)
            rel = self._relative(key)
            if rel in statuses:
                statuses[rel].messages.append(message)
            else:
                statuses[rel] = FileStatus(path=rel, status=PathStatus.NOT_GENERATED, messages=[message])

        passed = not result.missing_baselines and not leftovers and not result.mismatches
        if passed:
            logger.info("Output matches %d baseline files", baseline_files)
        else:
            logger.warning(
                "Baseline comparison failed: %d mismatched, %d without baseline, %d not generated",
                len(result.mismatches), len(result.missing_baselines),
                sum(1 for s in statuses.values() if s.status == PathStatus.NOT_GENERATED),
            )

        return Verdict(
            passed=passed,
            warnings=warnings,
            statuses=sorted(statuses.values(), key=lambda s: s.path),
            files_visited=result.files_visited,
            directories_visited=result.directories_visited,
            baseline_files=baseline_files,
        )
