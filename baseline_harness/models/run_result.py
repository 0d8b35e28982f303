"""Run result data structures produced by the orchestrator."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from baseline_harness.models.comparison import Verdict


class FixtureResult(BaseModel):
    baseline_name: str
    result: str  # pass, fail, error
    duration_seconds: float = 0.0
    verdict: Optional[Verdict] = None  # None when the run raised before comparing
    error: Optional[str] = None


class HarnessRun(BaseModel):
    run_id: str
    started_at: str
    completed_at: str = ""
    total_fixtures: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    duration_seconds: float = 0.0
    fixture_results: list[FixtureResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.total_fixtures == self.passed
