"""Collects every expected baseline file under a baseline root."""

from __future__ import annotations

import logging
from pathlib import Path

from baseline_harness.errors import FilesystemError
from baseline_harness.models.comparison import BaselineRegistry

logger = logging.getLogger(__name__)

DEFAULT_BASELINE_EXTENSION = ".baseline"


def list_directory(directory: Path) -> list[Path]:
    """Immediate children of a directory in name order.

    Raises FilesystemError when the directory is missing or unreadable.
    """
    try:
        return sorted(directory.iterdir())
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {directory}: {e}") from e


def collect_baseline_files(
    baseline_root: str | Path,
    baseline_extension: str = DEFAULT_BASELINE_EXTENSION,
) -> BaselineRegistry:
    """Register every file below baseline_root whose name ends in baseline_extension.

    Directories are walked with an explicit work-list rather than recursion,
    and are never registered themselves.
    """
    root = Path(baseline_root)
    if not root.is_dir():
        raise FilesystemError(f"Baseline directory does not exist: {root}")

    registry = BaselineRegistry(root)
    dir_stack = [root]
    while dir_stack:
        directory = dir_stack.pop()
        for child in list_directory(directory):
            if child.is_symlink():
                logger.debug("Skipping symlink %s", child)
            elif child.is_file() and child.name.endswith(baseline_extension):
                registry.add(child)
            elif child.is_dir():
                dir_stack.append(child)

    logger.debug("Collected %d baseline files under %s", len(registry), root)
    return registry
