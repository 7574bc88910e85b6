"""
Refactor First - rank God classes by refactoring priority

Combines structural metrics (WMC, ATFD, TCC) with git change history using
rank-based aggregation, so the classes that are cheapest to fix and most
often touched come first.
"""

__version__ = "0.1.0"

from .api import rank
from .models import CalculationResult, ChangeHistory, ClassMetrics, Outcome, RankedDisharmony
from .ranking import CostBenefitCalculator, DisharmonyFilter, RankAggregator

__all__ = [
    "rank",  # Main entry point
    "CostBenefitCalculator",  # Advanced usage (custom providers)
    "DisharmonyFilter",
    "RankAggregator",
    "CalculationResult",
    "ChangeHistory",
    "ClassMetrics",
    "Outcome",
    "RankedDisharmony",
]
