"""Data structures shared by the collector, reconciler, comparator and reporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class CompareOutcome(str, Enum):
    IDENTICAL = "identical"
    CONTENT_MISMATCH = "content_mismatch"
    MISSING_BASELINE = "missing_baseline"


class PathStatus(str, Enum):
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    MISSING_BASELINE = "missing_baseline"  # generated, but no baseline exists
    NOT_GENERATED = "not_generated"  # baseline exists, nothing generated


class BaselineRegistry:
    """Expected baseline files still waiting for a satisfying match.

    Keys are POSIX paths relative to the baseline root, marker suffix included.
    """

    def __init__(self, root: Path):
        self.root = root
        self._entries: dict[str, Path] = {}

    def key_for(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def add(self, path: Path) -> None:
        self._entries[self.key_for(path)] = path

    def discard(self, path: Path) -> bool:
        """Cross a baseline off. Returns False when it was never registered."""
        return self._entries.pop(self.key_for(path), None) is not None

    def remaining(self) -> list[str]:
        return sorted(self._entries)

    def path_for(self, key: str) -> Path:
        return self._entries[key]

    def __contains__(self, path: Path) -> bool:
        return self.key_for(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class ComparisonItem:
    """One entry of the actual tree paired with its baseline counterpart.

    baseline_path never carries the marker suffix; the reconciler appends it
    when the actual entry turns out to be a file.
    """
    name: str
    actual_path: Path
    baseline_path: Path


@dataclass
class LineDiff:
    line_number: int  # 1-based
    actual: str
    expected: str


@dataclass
class FileComparison:
    outcome: CompareOutcome
    actual_path: Path
    baseline_path: Path
    messages: list[str] = field(default_factory=list)
    line_diffs: list[LineDiff] = field(default_factory=list)
    line_counts: Optional[tuple[int, int]] = None  # (actual, expected) when they differ


@dataclass
class ReconcileResult:
    comparisons: list[FileComparison] = field(default_factory=list)
    files_visited: int = 0
    directories_visited: int = 0
    skipped: list[Path] = field(default_factory=list)

    @property
    def missing_baselines(self) -> list[FileComparison]:
        return [c for c in self.comparisons if c.outcome == CompareOutcome.MISSING_BASELINE]

    @property
    def mismatches(self) -> list[FileComparison]:
        return [c for c in self.comparisons if c.outcome == CompareOutcome.CONTENT_MISMATCH]


class FileStatus(BaseModel):
    path: str  # relative to the baseline root, without the marker suffix
    status: PathStatus
    messages: list[str] = Field(default_factory=list)


class Verdict(BaseModel):
    passed: bool
    actual_root: str = ""
    baseline_root: str = ""
    warnings: list[str] = Field(default_factory=list)
    statuses: list[FileStatus] = Field(default_factory=list)
    files_visited: int = 0
    directories_visited: int = 0
    baseline_files: int = 0

    def with_status(self, status: PathStatus) -> list[FileStatus]:
        return [s for s in self.statuses if s.status == status]
