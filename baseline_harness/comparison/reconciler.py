"""Tree reconciliation: walks the generated tree and crosses off baselines."""

from __future__ import annotations

import logging
from pathlib import Path

from baseline_harness.comparison.file_comparator import FileComparator
from baseline_harness.comparison.tree_collector import DEFAULT_BASELINE_EXTENSION, list_directory
from baseline_harness.models.comparison import (
    BaselineRegistry,
    CompareOutcome,
    ComparisonItem,
    ReconcileResult,
)

logger = logging.getLogger(__name__)


class TreeReconciler:
    """Matches every file of an actual output tree against a parallel baseline tree.

    Traversal is depth-first over an explicit stack of ComparisonItems, so
    nesting depth never grows the call stack. Every mismatch is recorded and
    the walk always runs to completion.
    """

    def __init__(
        self,
        comparator: FileComparator | None = None,
        baseline_extension: str = DEFAULT_BASELINE_EXTENSION,
    ):
        self.comparator = comparator or FileComparator()
        self.baseline_extension = baseline_extension

    def _push_children(self, stack: list[ComparisonItem], actual_dir: Path, baseline_dir: Path) -> None:
        # Reversed so that items pop in name order.
        for child in reversed(list_directory(actual_dir)):
            stack.append(ComparisonItem(child.name, child, baseline_dir / child.name))

    def reconcile(
        self,
        actual_root: str | Path,
        baseline_root: str | Path,
        registry: BaselineRegistry,
    ) -> ReconcileResult:
        """Compare the actual tree to the baseline tree, discarding satisfied entries from registry."""
        result = ReconcileResult()
        stack: list[ComparisonItem] = []
        self._push_children(stack, Path(actual_root), Path(baseline_root))

        while stack:
            item = stack.pop()
            actual = item.actual_path

            if actual.is_symlink():
                logger.debug("Skipping symlink %s", actual)
                result.skipped.append(actual)
            elif actual.is_dir():
                result.directories_visited += 1
                self._push_children(stack, actual, item.baseline_path)
            elif actual.is_file():
                result.files_visited += 1
                baseline = Path(f"{item.baseline_path}{self.baseline_extension}")
                comparison = self.comparator.compare(actual, baseline)
                result.comparisons.append(comparison)

                # A content mismatch keeps its registry entry: still unsatisfied.
                if comparison.outcome in (CompareOutcome.IDENTICAL, CompareOutcome.MISSING_BASELINE):
                    registry.discard(baseline)
            else:
                logger.debug("Skipping special file %s", actual)
                result.skipped.append(actual)

        logger.debug(
            "Reconciled %d files in %d directories (%d mismatched, %d without baseline)",
            result.files_visited, result.directories_visited,
            len(result.mismatches), len(result.missing_baselines),
        )
        return result
