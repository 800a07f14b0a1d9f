"""Comparison outcomes produced by the pair processor and orchestrator."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from pagediff.models.pairs import UrlPair


class DiffResult(BaseModel):
    """A pair whose renders differ. Only created when differing_pixels > 0."""

    model_config = ConfigDict(frozen=True)

    index: int  # 0-based position in the input list
    live: str
    dev: str
    dev_browser: Optional[str] = None
    differing_pixels: int
    diff_path: str
    dev_path: str
    live_path: str
    message: str = "Differences found"

    @property
    def pair(self) -> UrlPair:
        return UrlPair(live=self.live, dev=self.dev, dev_browser=self.dev_browser)


class PairFailure(BaseModel):
    """A pair that could not be compared (navigation, capture or decode error)."""

    model_config = ConfigDict(frozen=True)

    index: int
    live: str
    dev: str
    dev_browser: Optional[str] = None
    error: str
    message: str = "Comparison failed"


PairOutcome = Union[DiffResult, PairFailure, None]


class RunSummary(BaseModel):
    started_at: str = ""
    completed_at: str = ""
    total_pairs: int = 0
    duration_seconds: float = 0.0
    differences: list[DiffResult] = Field(default_factory=list)
    failures: list[PairFailure] = Field(default_factory=list)

    @property
    def identical(self) -> int:
        return self.total_pairs - len(self.differences) - len(self.failures)

    @property
    def is_clean(self) -> bool:
        return not self.differences and not self.failures

    def add(self, outcome: PairOutcome) -> None:
        """Append a pair outcome; ``None`` (no difference) is dropped."""
        if isinstance(outcome, DiffResult):
            self.differences.append(outcome)
        elif isinstance(outcome, PairFailure):
            self.failures.append(outcome)
