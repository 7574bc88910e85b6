"""CostBenefitCalculator: rank disharmonies by refactoring priority.

Pipeline for one run:

1. Collect class metrics and change history concurrently, then wait for both.
2. Keep only disharmonies (DisharmonyFilter). None left is a clean result.
3. Join each candidate with its file's history. Candidates without history
   are dropped and reported, never given an invented rank.
4. Effort rank: WMC, ATFD and TCC are dense-ranked separately and the rank
   sum is ranked again, so no metric dominates through its scale alone.
5. Change-proneness rank: commit count, recency of the last commit and
   commit frequency over the file's active span, combined the same way.
6. Priority: the configured policy scores each candidate; candidates are
   totally ordered by (score, class name) and numbered N..1 along it.
"""

from __future__ import annotations

from collections import defaultdict
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from ..config import DEFAULT_THRESHOLDS, AnalysisConfig, DisharmonyThresholds
from ..exceptions import (
    DuplicateCandidateError,
    HistoryExtractionError,
    MetricsExtractionError,
    MissingHistoryError,
    RefactorFirstError,
)
from ..file_ops import resolve_source_root
from ..logging_config import get_logger
from ..metrics import MetricsProvider, ReportMetricsProvider
from ..models import CalculationResult, ChangeHistory, ClassMetrics, Outcome, RankedDisharmony
from ..temporal import GitHistoryProvider, HistoryProvider
from .aggregator import Direction, RankAggregator
from .filter import DisharmonyFilter
from .priority import PriorityPolicy, QuickWinPolicy, get_priority_policy

logger = get_logger(__name__)

# Frequency is commits per day of activity; shorter spans count as one day
_MIN_SPAN_DAYS = 1.0


@dataclass(frozen=True)
class _Candidate:
    metrics: ClassMetrics
    history: ChangeHistory

    @property
    def key(self) -> str:
        return self.metrics.path


class CostBenefitCalculator:
    """Orchestrates providers, filtering, ranking and priority assembly."""

    def __init__(
        self,
        metrics_provider: MetricsProvider,
        history_provider: HistoryProvider,
        thresholds: DisharmonyThresholds = DEFAULT_THRESHOLDS,
        policy: Optional[PriorityPolicy] = None,
        workers: int = 2,
    ):
        self.metrics_provider = metrics_provider
        self.history_provider = history_provider
        self.disharmony_filter = DisharmonyFilter(thresholds)
        self.policy = policy or QuickWinPolicy()
        self.workers = workers

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> "CostBenefitCalculator":
        """Wire the report-based metrics provider and git history provider."""
        return cls(
            metrics_provider=ReportMetricsProvider(config.metrics_report),
            history_provider=GitHistoryProvider(
                max_commits=config.git_max_commits,
                timeout_seconds=config.timeout_seconds,
            ),
            thresholds=config.thresholds,
            policy=get_priority_policy(config.priority_policy, **config.policy_options()),
            workers=config.workers,
        )

    def calculate(self, source_root: Union[str, Path]) -> CalculationResult:
        """Rank every disharmony under ``source_root``.

        Returns:
            A RANKED result (disharmonies unordered, dropped candidates in
            ``skipped``) or a NO_DISHARMONIES result when nothing survives
            the filter.

        Raises:
            InputError: If the root or either collaborator is unusable
            InvalidPathError: If the root does not exist
        """
        root = resolve_source_root(source_root)
        classes = self._collect(root)

        candidates = self.disharmony_filter.apply(classes)
        if not candidates:
            logger.info("No disharmonies found")
            return CalculationResult.clean(scanned=len(classes))

        _check_unique_paths(candidates)
        joined, skipped = self._join(candidates)

        disharmonies = self._rank(joined)
        logger.info(
            f"Ranked {len(disharmonies)} disharmonies "
            f"({len(skipped)} skipped without history, {len(classes)} classes scanned)"
        )
        return CalculationResult(
            outcome=Outcome.RANKED,
            disharmonies=tuple(disharmonies),
            skipped=tuple(skipped),
            scanned=len(classes),
            candidates=len(candidates),
        )

    # ── Collection ─────────────────────────────────────────────────────

    def _collect(self, root: Path) -> list[ClassMetrics]:
        """Run both collaborators concurrently; both must finish before ranking."""
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            metrics_future = executor.submit(self.metrics_provider.extract, root)
            history_future = executor.submit(self.history_provider.load, root)
        # Leaving the executor blocks until both scans are done

        # A bad repository root outranks a bad metrics report
        _unwrap(history_future, lambda e: HistoryExtractionError(root, str(e)))
        classes = _unwrap(
            metrics_future, lambda e: MetricsExtractionError(str(root), str(e))
        )
        return list(classes)

    def _join(
        self, candidates: Sequence[ClassMetrics]
    ) -> tuple[list[_Candidate], list[MissingHistoryError]]:
        joined: list[_Candidate] = []
        skipped: list[MissingHistoryError] = []
        for metrics in candidates:
            history = self.history_provider.history(metrics.path)
            if history is None:
                error = MissingHistoryError(metrics.class_name, metrics.path)
                logger.warning(f"Skipping {metrics.class_name}: {metrics.path} has no commit history")
                skipped.append(error)
                continue
            joined.append(_Candidate(metrics=metrics, history=history))
        return joined, skipped

    # ── Ranking ────────────────────────────────────────────────────────

    def _rank(self, candidates: Sequence[_Candidate]) -> list[RankedDisharmony]:
        if not candidates:
            return []

        rank = RankAggregator.dense_rank
        wmc_ranks = rank({c.key: c.metrics.wmc for c in candidates}, Direction.HIGHER_IS_WORSE)
        atfd_ranks = rank({c.key: c.metrics.atfd for c in candidates}, Direction.HIGHER_IS_WORSE)
        tcc_ranks = rank({c.key: c.metrics.tcc for c in candidates}, Direction.LOWER_IS_WORSE)
        effort_ranks = RankAggregator.combine([wmc_ranks, atfd_ranks, tcc_ranks])

        change_ranks = change_proneness_ranks({c.key: c.history for c in candidates})

        scores = {
            c.key: self.policy.score(effort_ranks[c.key], change_ranks[c.key])
            for c in candidates
        }
        ordered = sorted(
            candidates, key=lambda c: (-scores[c.key], c.metrics.class_name, c.key)
        )
        total = len(ordered)

        results = []
        for position, c in enumerate(ordered):
            m, h = c.metrics, c.history
            results.append(
                RankedDisharmony(
                    class_name=m.class_name,
                    path=m.path,
                    wmc=m.wmc,
                    wmc_rank=wmc_ranks[c.key],
                    atfd=m.atfd,
                    atfd_rank=atfd_ranks[c.key],
                    tcc=m.tcc,
                    tcc_rank=tcc_ranks[c.key],
                    effort_rank=effort_ranks[c.key],
                    change_proneness_rank=change_ranks[c.key],
                    priority=total - position,
                    first_commit_time=h.first_commit_time,
                    most_recent_commit_time=h.most_recent_commit_time,
                    commit_count=h.commit_count,
                    method_count=m.method_count,
                    score=scores[c.key],
                )
            )
        return results


def change_proneness_ranks(histories: Mapping[str, ChangeHistory]) -> dict[str, int]:
    """Dense change-proneness rank per candidate (1 = most change-prone).

    Combines three signals by rank sum: commit count, recency of the most
    recent commit, and commits per day over the file's active span.
    Identical histories always share a rank.
    """
    rank = RankAggregator.dense_rank
    counts = rank({key: h.commit_count for key, h in histories.items()}, Direction.HIGHER_IS_WORSE)
    recency = rank(
        {key: h.most_recent_commit_time.timestamp() for key, h in histories.items()},
        Direction.HIGHER_IS_WORSE,
    )
    frequency = rank(
        {
            key: h.commit_count / max(h.span_days, _MIN_SPAN_DAYS)
            for key, h in histories.items()
        },
        Direction.HIGHER_IS_WORSE,
    )
    return RankAggregator.combine([counts, recency, frequency])


def _check_unique_paths(candidates: Sequence[ClassMetrics]) -> None:
    by_path: dict[str, list[str]] = defaultdict(list)
    for metrics in candidates:
        by_path[metrics.path].append(metrics.class_name)
    for path, names in sorted(by_path.items()):
        if len(names) > 1:
            raise DuplicateCandidateError(path, sorted(names))


def _unwrap(future: Future, wrap):
    """Return a collaborator's result, converting foreign errors to InputErrors."""
    try:
        return future.result()
    except RefactorFirstError:
        raise
    except Exception as e:
        raise wrap(e) from e
