"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    metrics: Optional[str] = None,
    policy: Optional[str] = None,
    wmc_threshold: Optional[int] = None,
    atfd_threshold: Optional[int] = None,
    tcc_threshold: Optional[float] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options; unset options keep file/env values."""
    overrides = {
        "metrics_report": metrics,
        "priority_policy": policy,
        "wmc_threshold": wmc_threshold,
        "atfd_threshold": atfd_threshold,
        "tcc_threshold": tcc_threshold,
    }
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)
