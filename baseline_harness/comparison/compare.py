"""Entry points for comparing a generated tree against a baseline tree."""

from __future__ import annotations

import logging
from pathlib import Path

from baseline_harness.comparison.file_comparator import DEFAULT_VOLATILE_EXTENSIONS, FileComparator
from baseline_harness.comparison.reconciler import TreeReconciler
from baseline_harness.comparison.tree_collector import DEFAULT_BASELINE_EXTENSION, collect_baseline_files
from baseline_harness.models.comparison import Verdict
from baseline_harness.reporter.verdict_reporter import VerdictReporter

logger = logging.getLogger(__name__)


def compare_trees(
    actual_root: str | Path,
    baseline_root: str | Path,
    baseline_extension: str = DEFAULT_BASELINE_EXTENSION,
    volatile_extensions: tuple[str, ...] | list[str] = DEFAULT_VOLATILE_EXTENSIONS,
) -> Verdict:
    """Collect baselines, reconcile the actual tree against them, and build the verdict.

    Raises FilesystemError if either root cannot be read. Content differences
    never raise; they are reported in the returned Verdict.
    """
    actual = Path(actual_root).resolve()
    baseline = Path(baseline_root).resolve()
    logger.debug("Comparing %s against baselines in %s", actual, baseline)

    registry = collect_baseline_files(baseline, baseline_extension)
    baseline_files = len(registry)

    reconciler = TreeReconciler(FileComparator(volatile_extensions), baseline_extension)
    result = reconciler.reconcile(actual, baseline, registry)

    verdict = VerdictReporter(baseline_extension).build(result, registry, baseline_files=baseline_files)
    verdict.actual_root = str(actual)
    verdict.baseline_root = str(baseline)
    return verdict


def equal_to_baseline(
    actual_root: str | Path,
    baseline_root: str | Path,
    baseline_extension: str = DEFAULT_BASELINE_EXTENSION,
    volatile_extensions: tuple[str, ...] | list[str] = DEFAULT_VOLATILE_EXTENSIONS,
) -> bool:
    """True when every baseline was generated identically and nothing lacks a baseline."""
    return compare_trees(actual_root, baseline_root, baseline_extension, volatile_extensions).passed
