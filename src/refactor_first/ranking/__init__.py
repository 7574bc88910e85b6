"""Ranking engine: filtering, dense ranking, priority and orchestration."""

from .aggregator import Direction, RankAggregator
from .calculator import CostBenefitCalculator, change_proneness_ranks
from .filter import DisharmonyFilter
from .priority import PriorityPolicy, QuickWinPolicy, WeightedPolicy, get_priority_policy

__all__ = [
    "CostBenefitCalculator",
    "Direction",
    "DisharmonyFilter",
    "PriorityPolicy",
    "QuickWinPolicy",
    "RankAggregator",
    "WeightedPolicy",
    "change_proneness_ranks",
    "get_priority_policy",
]
