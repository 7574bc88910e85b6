"""Tests for priority scoring policies."""

import itertools

import pytest

from refactor_first.exceptions import InvalidConfigError
from refactor_first.ranking.priority import (
    PriorityPolicy,
    QuickWinPolicy,
    WeightedPolicy,
    get_priority_policy,
)


class TestQuickWinPolicy:
    """Test the default effort-minus-change score."""

    def test_score(self):
        assert QuickWinPolicy().score(effort_rank=5, change_proneness_rank=2) == 3.0

    def test_busy_cheap_class_beats_quiet_costly_class(self):
        policy = QuickWinPolicy()
        cheap_and_busy = policy.score(effort_rank=3, change_proneness_rank=1)
        costly_and_quiet = policy.score(effort_rank=1, change_proneness_rank=3)
        assert cheap_and_busy > costly_and_quiet

    def test_satisfies_protocol(self):
        assert isinstance(QuickWinPolicy(), PriorityPolicy)


class TestWeightedPolicy:
    """Test the weighted linear policy."""

    def test_equal_weights_match_quick_win(self):
        weighted = WeightedPolicy()
        quick = QuickWinPolicy()
        for effort, change in itertools.product(range(1, 5), repeat=2):
            assert weighted.score(effort, change) == quick.score(effort, change)

    def test_change_weight_emphasis(self):
        policy = WeightedPolicy(effort_weight=1.0, change_weight=3.0)
        assert policy.score(effort_rank=4, change_proneness_rank=2) == -2.0

    @pytest.mark.parametrize("effort_weight,change_weight", [(0, 1), (1, 0), (-1, 2)])
    def test_non_positive_weights_rejected(self, effort_weight, change_weight):
        with pytest.raises(InvalidConfigError):
            WeightedPolicy(effort_weight=effort_weight, change_weight=change_weight)


class TestMonotonicity:
    """Every registered policy must order change-prone and cheap classes first."""

    @pytest.mark.parametrize(
        "policy",
        [QuickWinPolicy(), WeightedPolicy(), WeightedPolicy(0.5, 2.0), WeightedPolicy(3.0, 0.25)],
        ids=["quick_win", "weighted", "change_heavy", "effort_heavy"],
    )
    def test_monotonic(self, policy):
        for effort, change in itertools.product(range(1, 6), repeat=2):
            base = policy.score(effort, change)
            # More change-prone never lowers the score
            if change > 1:
                assert policy.score(effort, change - 1) >= base
            # Costlier never raises the score
            if effort > 1:
                assert policy.score(effort - 1, change) <= base


class TestRegistry:
    """Test policy lookup by name."""

    def test_default(self):
        assert isinstance(get_priority_policy("quick_win"), QuickWinPolicy)

    def test_weighted_with_options(self):
        policy = get_priority_policy("weighted", effort_weight=2.0, change_weight=1.0)
        assert isinstance(policy, WeightedPolicy)
        assert policy.effort_weight == 2.0

    def test_unknown_name(self):
        with pytest.raises(InvalidConfigError, match="priority_policy"):
            get_priority_policy("fastest_first")

    def test_unexpected_option(self):
        with pytest.raises(InvalidConfigError):
            get_priority_policy("quick_win", effort_weight=2.0)
