"""Priority policies: turn an effort rank and a change-proneness rank into a score.

Both inputs use the 1 = worst convention, so a small effort rank means the
class is among the costliest to fix and a small change-proneness rank means
the file is among the most frequently touched. Every policy must satisfy:

- becoming more change-prone (smaller change rank) never lowers the score
- becoming costlier (smaller effort rank) never raises the score

The calculator breaks equal scores by class name, which makes the final
priority a total order.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from ..exceptions import InvalidConfigError


@runtime_checkable
class PriorityPolicy(Protocol):
    """Scoring function for refactoring priority (higher = fix first)."""

    name: str

    def score(self, effort_rank: int, change_proneness_rank: int) -> float: ...


class QuickWinPolicy:
    """Favor cheap fixes on busy files over deep refactors of quiet ones.

    score = effort_rank - change_proneness_rank
    """

    name = "quick_win"

    def score(self, effort_rank: int, change_proneness_rank: int) -> float:
        return float(effort_rank - change_proneness_rank)


class WeightedPolicy:
    """Linear trade-off with tunable emphasis on either signal."""

    name = "weighted"

    def __init__(self, effort_weight: float = 1.0, change_weight: float = 1.0):
        if effort_weight <= 0 or change_weight <= 0:
            raise InvalidConfigError(
                "priority weights",
                (effort_weight, change_weight),
                "both weights must be positive to keep priority monotonic",
            )
        self.effort_weight = effort_weight
        self.change_weight = change_weight

    def score(self, effort_rank: int, change_proneness_rank: int) -> float:
        return self.effort_weight * effort_rank - self.change_weight * change_proneness_rank


_POLICIES: dict[str, Callable[..., PriorityPolicy]] = {
    QuickWinPolicy.name: QuickWinPolicy,
    WeightedPolicy.name: WeightedPolicy,
}


def get_priority_policy(name: str, **options: float) -> PriorityPolicy:
    """Build a registered priority policy by name.

    Raises:
        InvalidConfigError: If the name is unknown or the options are invalid
    """
    factory = _POLICIES.get(name)
    if factory is None:
        raise InvalidConfigError(
            "priority_policy", name, f"choose from: {', '.join(sorted(_POLICIES))}"
        )
    try:
        return factory(**options)
    except TypeError as e:
        raise InvalidConfigError("priority_policy", name, str(e))
