"""Public API for Refactor First.

Example:
    >>> from refactor_first import rank
    >>>
    >>> result = rank("/path/to/repo")
    >>> for d in result.sorted_by_priority()[:5]:
    ...     print(d.priority, d.class_name)
    >>>
    >>> # With customization
    >>> result = rank("/path/to/repo", metrics_report="build/metrics.csv", wmc_threshold=60)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_config
from .logging_config import get_logger, setup_logging
from .models import CalculationResult
from .ranking import CostBenefitCalculator

logger = get_logger(__name__)


def rank(
    path: str = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> CalculationResult:
    """Rank the God class candidates of a repository.

    1. Load configuration (auto-discover TOML + apply overrides)
    2. Wire the metrics report reader and git history reader
    3. Filter, join and rank

    Args:
        path: Repository root (must be the git top level)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. verbose=True, tcc_threshold=0.25)

    Returns:
        CalculationResult: RANKED with the candidates, or NO_DISHARMONIES

    Raises:
        RefactorFirstError: If configuration or inputs are invalid
    """
    setup_logging(verbose=bool(overrides.get("verbose")), quiet=bool(overrides.get("quiet")))

    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Configuration loaded: policy={config.priority_policy}, {config.thresholds}")

    calculator = CostBenefitCalculator.from_config(config)
    result = calculator.calculate(path)

    logger.info(f"Run finished: {result.outcome.value}, {len(result.disharmonies)} ranked")
    return result
