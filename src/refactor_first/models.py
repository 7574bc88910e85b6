"""Data models for Refactor First"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Tuple

from .exceptions import MissingHistoryError

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class ClassMetrics:
    """Structural metrics for a single class, as reported by a metrics provider."""

    class_name: str
    path: str
    wmc: int
    atfd: int
    tcc: float
    method_count: int = 0

    def __post_init__(self) -> None:
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if not self.path:
            raise ValueError(f"path must not be empty for {self.class_name}")
        if self.wmc < 0:
            raise ValueError(f"wmc must be non-negative, got {self.wmc}")
        if self.atfd < 0:
            raise ValueError(f"atfd must be non-negative, got {self.atfd}")
        if not 0.0 <= self.tcc <= 1.0:
            raise ValueError(f"tcc must be between 0.0 and 1.0, got {self.tcc}")
        if self.method_count < 0:
            raise ValueError(f"method_count must be non-negative, got {self.method_count}")


@dataclass(frozen=True)
class ChangeHistory:
    """Commit activity for a single file."""

    path: str
    commit_count: int
    first_commit_time: datetime
    most_recent_commit_time: datetime

    def __post_init__(self) -> None:
        if self.commit_count < 1:
            raise ValueError(f"commit_count must be at least 1, got {self.commit_count}")
        if self.first_commit_time > self.most_recent_commit_time:
            raise ValueError(
                f"first_commit_time ({self.first_commit_time.isoformat()}) is after "
                f"most_recent_commit_time ({self.most_recent_commit_time.isoformat()})"
            )

    @property
    def span(self) -> timedelta:
        return self.most_recent_commit_time - self.first_commit_time

    @property
    def span_days(self) -> float:
        return self.span.total_seconds() / SECONDS_PER_DAY


@dataclass(frozen=True)
class RankedDisharmony:
    """A ranked refactoring candidate.

    All ``*_rank`` fields are dense ranks where 1 is the worst value in the
    candidate set. ``priority`` is unique within a run; higher means refactor
    first.
    """

    class_name: str
    path: str
    wmc: int
    wmc_rank: int
    atfd: int
    atfd_rank: int
    tcc: float
    tcc_rank: int
    effort_rank: int
    change_proneness_rank: int
    priority: int
    first_commit_time: datetime
    most_recent_commit_time: datetime
    commit_count: int
    method_count: int = 0
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_name": self.class_name,
            "path": self.path,
            "priority": self.priority,
            "score": self.score,
            "change_proneness_rank": self.change_proneness_rank,
            "effort_rank": self.effort_rank,
            "wmc": self.wmc,
            "wmc_rank": self.wmc_rank,
            "atfd": self.atfd,
            "atfd_rank": self.atfd_rank,
            "tcc": self.tcc,
            "tcc_rank": self.tcc_rank,
            "method_count": self.method_count,
            "first_commit_time": self.first_commit_time.isoformat(),
            "most_recent_commit_time": self.most_recent_commit_time.isoformat(),
            "commit_count": self.commit_count,
        }


class Outcome(str, Enum):
    """How a calculation run ended."""

    RANKED = "ranked"
    NO_DISHARMONIES = "no_disharmonies"


@dataclass(frozen=True)
class CalculationResult:
    """Output of one cost/benefit calculation run.

    ``disharmonies`` is unordered; use ``sorted_by_priority()`` for display.
    ``skipped`` holds the candidates dropped because they had no history.
    """

    outcome: Outcome
    disharmonies: Tuple[RankedDisharmony, ...] = ()
    skipped: Tuple[MissingHistoryError, ...] = ()
    scanned: int = 0
    candidates: int = 0

    @classmethod
    def clean(cls, scanned: int) -> "CalculationResult":
        return cls(outcome=Outcome.NO_DISHARMONIES, scanned=scanned)

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.RANKED

    def sorted_by_priority(self) -> List[RankedDisharmony]:
        return sorted(self.disharmonies, key=lambda d: d.priority, reverse=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "scanned": self.scanned,
            "candidates": self.candidates,
            "disharmonies": [d.to_dict() for d in self.sorted_by_priority()],
            "skipped": [
                {"class_name": e.class_name, "path": e.path, "reason": e.message}
                for e in self.skipped
            ],
        }


@dataclass
class ReportContext:
    """Context passed to formatters alongside the calculation result."""

    project_name: str
    show_details: bool = False
    top_n: int = 0  # 0 = show everything
