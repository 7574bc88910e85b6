"""Tests for DisharmonyFilter candidate selection."""

import pytest

from refactor_first.config import DisharmonyThresholds
from refactor_first.models import ClassMetrics
from refactor_first.ranking.filter import (
    COMPLEXITY_AND_COUPLING,
    LOW_COHESION,
    DisharmonyFilter,
)


def make_metrics(name: str, wmc: int, atfd: int, tcc: float) -> ClassMetrics:
    return ClassMetrics(
        class_name=name, path=f"src/{name}.java", wmc=wmc, atfd=atfd, tcc=tcc, method_count=10
    )


class TestSymptoms:
    """Test which symptoms fire for a class."""

    def test_complex_and_coupled(self):
        f = DisharmonyFilter()
        assert f.symptoms(make_metrics("Big", wmc=60, atfd=8, tcc=0.8)) == [COMPLEXITY_AND_COUPLING]

    def test_complex_but_encapsulated_is_healthy(self):
        """High WMC alone is not enough without foreign data access."""
        f = DisharmonyFilter()
        assert f.symptoms(make_metrics("Large", wmc=200, atfd=2, tcc=0.9)) == []

    def test_coupled_but_simple_is_healthy(self):
        f = DisharmonyFilter()
        assert f.symptoms(make_metrics("Chatty", wmc=10, atfd=40, tcc=0.9)) == []

    def test_low_cohesion_alone(self):
        f = DisharmonyFilter()
        assert f.symptoms(make_metrics("Scattered", wmc=5, atfd=0, tcc=0.1)) == [LOW_COHESION]

    def test_both_symptoms(self):
        f = DisharmonyFilter()
        symptoms = f.symptoms(make_metrics("God", wmc=90, atfd=20, tcc=0.05))
        assert symptoms == [COMPLEXITY_AND_COUPLING, LOW_COHESION]

    def test_thresholds_are_strict(self):
        """Values exactly at a floor do not trigger."""
        t = DisharmonyThresholds(wmc_threshold=47, atfd_threshold=5, tcc_threshold=0.5)
        f = DisharmonyFilter(t)
        assert not f.is_disharmony(make_metrics("Edge", wmc=47, atfd=6, tcc=0.5))
        assert not f.is_disharmony(make_metrics("Edge2", wmc=48, atfd=5, tcc=0.5))
        assert f.is_disharmony(make_metrics("Over", wmc=48, atfd=6, tcc=0.5))


class TestApply:
    """Test filtering a whole class set."""

    def test_preserves_order_and_drops_healthy(self):
        classes = [
            make_metrics("A", wmc=60, atfd=8, tcc=0.8),
            make_metrics("B", wmc=10, atfd=1, tcc=0.9),
            make_metrics("C", wmc=3, atfd=0, tcc=0.2),
        ]
        kept = DisharmonyFilter().apply(classes)
        assert [m.class_name for m in kept] == ["A", "C"]

    def test_empty_when_all_healthy(self):
        classes = [make_metrics("Fine", wmc=10, atfd=1, tcc=0.9)]
        assert DisharmonyFilter().apply(classes) == []

    def test_accepts_generator(self):
        kept = DisharmonyFilter().apply(make_metrics(f"C{i}", 100, 10, 0.1) for i in range(3))
        assert len(kept) == 3

    def test_custom_thresholds(self):
        """Explicit configuration replaces the defaults."""
        strict = DisharmonyFilter(DisharmonyThresholds(wmc_threshold=5, atfd_threshold=1, tcc_threshold=0.0))
        assert strict.is_disharmony(make_metrics("Small", wmc=6, atfd=2, tcc=0.9))

    @pytest.mark.parametrize(
        "wmc,atfd,tcc",
        [(0, 0, 1.0), (47, 100, 0.34), (100, 5, 0.99), (10, 3, 0.5)],
    )
    def test_healthy_classes_never_kept(self, wmc, atfd, tcc):
        """No class inside every healthy bound is a candidate."""
        assert DisharmonyFilter().apply([make_metrics("H", wmc, atfd, tcc)]) == []
