"""MetricsProvider interface and an in-memory implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from ..models import ClassMetrics


@runtime_checkable
class MetricsProvider(Protocol):
    """Supplies structural metrics for every analyzable class.

    ``extract`` is called once per run and must return a fresh, finite
    sequence. Paths are repository-relative POSIX paths.
    """

    def extract(self, source_root: Path) -> Sequence[ClassMetrics]: ...


class StaticMetricsProvider:
    """Serves a fixed list of metrics (API callers, tests)."""

    def __init__(self, metrics: Sequence[ClassMetrics]):
        self._metrics = tuple(metrics)

    def extract(self, source_root: Path) -> Sequence[ClassMetrics]:
        return list(self._metrics)
