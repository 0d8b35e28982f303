"""Single-file comparison between a generated file and its baseline."""

from __future__ import annotations

import logging
from pathlib import Path

from baseline_harness.errors import FilesystemError
from baseline_harness.models.comparison import CompareOutcome, FileComparison, LineDiff

logger = logging.getLogger(__name__)

DEFAULT_VOLATILE_EXTENSIONS = (".proto",)


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FilesystemError(f"Cannot read file {path}: {e}") from e


class FileComparator:
    """Classifies an (actual, baseline) pair as identical, mismatched or missing.

    Files ending in one of the volatile extensions are echoed by the generator
    and are accepted without reading them.
    """

    def __init__(self, volatile_extensions: tuple[str, ...] | list[str] = DEFAULT_VOLATILE_EXTENSIONS):
        self.volatile_extensions = tuple(volatile_extensions)

    def is_volatile(self, path: Path) -> bool:
        return bool(self.volatile_extensions) and str(path).endswith(self.volatile_extensions)

    def compare(self, actual_path: Path, baseline_path: Path) -> FileComparison:
        if self.is_volatile(actual_path):
            logger.debug("Skipping content check for volatile file %s", actual_path)
            return FileComparison(CompareOutcome.IDENTICAL, actual_path, baseline_path)

        if not baseline_path.is_file():
            message = f"{baseline_path} is not generated."
            logger.warning(message)
            return FileComparison(
                CompareOutcome.MISSING_BASELINE, actual_path, baseline_path, messages=[message]
            )

        actual_bytes = _read(actual_path)
        baseline_bytes = _read(baseline_path)
        if actual_bytes == baseline_bytes:
            return FileComparison(CompareOutcome.IDENTICAL, actual_path, baseline_path)

        result = FileComparison(CompareOutcome.CONTENT_MISMATCH, actual_path, baseline_path)
        actual_lines = actual_bytes.decode("utf-8", errors="replace").split("\n")
        baseline_lines = baseline_bytes.decode("utf-8", errors="replace").split("\n")

        if len(actual_lines) != len(baseline_lines):
            # Alignment is ambiguous, so no per-line diff.
            result.line_counts = (len(actual_lines), len(baseline_lines))
            result.messages.append(
                f"Line count for {actual_path} was {len(actual_lines)}, "
                f"but expected {len(baseline_lines)}."
            )
        else:
            for i, (actual, expected) in enumerate(zip(actual_lines, baseline_lines)):
                if actual != expected:
                    result.line_diffs.append(LineDiff(i + 1, actual, expected))
                    result.messages.append(
                        f'Line {i + 1} of {actual_path} was \n\t"{actual}"\n'
                        f'but expected\n\t"{expected}"'
                    )
            if not result.messages:
                # Only undecodable bytes differ.
                result.messages.append(f"{actual_path} differs from {baseline_path} in non-UTF-8 content.")

        for message in result.messages:
            logger.warning(message)
        return result
