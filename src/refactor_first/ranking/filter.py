"""DisharmonyFilter: keep only classes that show a God-class symptom.

A class is a disharmony when it is both overly complex and reaching into
other classes' data, or when its methods barely share state:

    (WMC > wmc_threshold AND ATFD > atfd_threshold) OR TCC < tcc_threshold

Large classes that are cohesive and keep to their own data are left out of
the ranking entirely.
"""

from __future__ import annotations

from typing import Iterable

from ..config import DEFAULT_THRESHOLDS, DisharmonyThresholds
from ..logging_config import get_logger
from ..models import ClassMetrics

logger = get_logger(__name__)

COMPLEXITY_AND_COUPLING = "complexity_and_coupling"
LOW_COHESION = "low_cohesion"


class DisharmonyFilter:
    """Select ranking candidates using explicit threshold configuration."""

    def __init__(self, thresholds: DisharmonyThresholds = DEFAULT_THRESHOLDS):
        self.thresholds = thresholds

    def symptoms(self, metrics: ClassMetrics) -> list[str]:
        """Names of the disharmony symptoms this class exhibits."""
        t = self.thresholds
        found = []
        if metrics.wmc > t.wmc_threshold and metrics.atfd > t.atfd_threshold:
            found.append(COMPLEXITY_AND_COUPLING)
        if metrics.tcc < t.tcc_threshold:
            found.append(LOW_COHESION)
        return found

    def is_disharmony(self, metrics: ClassMetrics) -> bool:
        return bool(self.symptoms(metrics))

    def apply(self, classes: Iterable[ClassMetrics]) -> list[ClassMetrics]:
        """Return the candidate subset, preserving input order."""
        candidates = []
        total = 0
        for metrics in classes:
            total += 1
            symptoms = self.symptoms(metrics)
            if symptoms:
                logger.debug(f"{metrics.class_name}: {', '.join(symptoms)}")
                candidates.append(metrics)

        logger.info(f"{len(candidates)} of {total} classes are disharmonies")
        return candidates
