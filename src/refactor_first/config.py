"""Configuration loading and management for Refactor First.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.refactor-first.toml)
    3. Project config (./refactor-first.toml)
    4. Explicit config file
    5. Environment variables (REFACTOR_FIRST_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, priority_policy="weighted")
    >>> config.verbosity
    'verbose'
    >>> config.thresholds.wmc_threshold
    47
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import RefactorFirstError

# Type aliases for clarity
Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "REFACTOR_FIRST_"


@dataclass(frozen=True)
class DisharmonyThresholds:
    """Floors that decide whether a class is a disharmony worth ranking.

    A class is kept when it is both complex and coupled, or when it lacks
    cohesion:

        (wmc > wmc_threshold and atfd > atfd_threshold) or tcc < tcc_threshold

    Defaults follow the Lanza & Marinescu God Class detection strategy:
    - WMC "very high" for Java classes is 47
    - ATFD "few" is 5
    - TCC below one third means most method pairs share no fields
    """

    wmc_threshold: int = 47
    atfd_threshold: int = 5
    tcc_threshold: float = 1.0 / 3.0

    def __post_init__(self) -> None:
        if self.wmc_threshold < 0:
            raise ValueError("wmc_threshold must be non-negative")
        if self.atfd_threshold < 0:
            raise ValueError("atfd_threshold must be non-negative")
        if not 0.0 <= self.tcc_threshold <= 1.0:
            raise ValueError("tcc_threshold must be between 0.0 and 1.0")


DEFAULT_THRESHOLDS = DisharmonyThresholds()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a ranking run.

    Attributes:
        Inputs:
            metrics_report: Metrics report path, relative to the source root
                unless absolute (JSON or CSV)

        Git integration:
            git_max_commits: Maximum commits to read (0 = unlimited)
            timeout_seconds: Timeout for the git log subprocess

        Ranking:
            priority_policy: Name of the priority scoring policy
            effort_weight: Effort weight for the "weighted" policy
            change_weight: Change-proneness weight for the "weighted" policy

        Performance tuning:
            workers: Threads used to collect metrics and history concurrently

        Output control:
            verbosity: Logging verbosity level
    """

    # Inputs
    metrics_report: str = "refactor-first-metrics.json"

    # Git integration
    git_max_commits: int = 0
    timeout_seconds: int = 120

    # Ranking
    priority_policy: str = "quick_win"
    effort_weight: float = 1.0
    change_weight: float = 1.0

    # Performance tuning
    workers: int = 2

    # Output control
    verbosity: Verbosity = "normal"

    # Disharmony floors (nested config)
    thresholds: DisharmonyThresholds = field(default_factory=DisharmonyThresholds)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.metrics_report:
            raise ValueError("metrics_report must not be empty")

        if self.git_max_commits < 0:
            raise ValueError("git_max_commits must be non-negative")
        if self.timeout_seconds < 1:
            raise ValueError("timeout_seconds must be at least 1")

        if self.effort_weight <= 0 or self.change_weight <= 0:
            raise ValueError("effort_weight and change_weight must be positive")

        if self.workers < 1:
            raise ValueError("workers must be at least 1")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got {self.verbosity!r}")

    def policy_options(self) -> dict[str, float]:
        """Keyword arguments for the configured priority policy."""
        if self.priority_policy == "weighted":
            return {"effort_weight": self.effort_weight, "change_weight": self.change_weight}
        return {}


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). Threshold
            fields (wmc_threshold, atfd_threshold, tcc_threshold) may be
            passed flat and are routed into the [thresholds] section.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        RefactorFirstError: If a config file is invalid or missing
    """
    merged: dict = {}

    # 1. Global config
    global_config = Path.home() / ".refactor-first.toml"
    if global_config.exists():
        try:
            _merge(merged, _load_toml_file(global_config))
        except RefactorFirstError:
            raise
        except Exception as e:
            raise RefactorFirstError(f"Invalid global config '{global_config}': {e}")

    # 2. Project config
    project_config = Path.cwd() / "refactor-first.toml"
    if project_config.exists():
        try:
            _merge(merged, _load_toml_file(project_config))
        except RefactorFirstError:
            raise
        except Exception as e:
            raise RefactorFirstError(f"Invalid project config '{project_config}': {e}")

    # 3. Explicit config file (highest priority from files)
    if config_file is not None:
        if not config_file.exists():
            raise RefactorFirstError(f"Config file not found: {config_file}")
        try:
            _merge(merged, _load_toml_file(config_file))
        except RefactorFirstError:
            raise
        except Exception as e:
            raise RefactorFirstError(f"Invalid config file '{config_file}': {e}")

    # 4. Environment variables
    _merge(merged, _load_env_vars())

    # 5. CLI overrides (highest priority)
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    _merge(merged, {k: v for k, v in overrides.items() if v is not None})

    thresholds_dict = merged.pop("thresholds", None)
    if thresholds_dict is not None:
        if isinstance(thresholds_dict, DisharmonyThresholds):
            merged["thresholds"] = thresholds_dict
        elif isinstance(thresholds_dict, dict):
            try:
                merged["thresholds"] = DisharmonyThresholds(**thresholds_dict)
            except (TypeError, ValueError) as e:
                raise RefactorFirstError(f"Invalid [thresholds] config: {e}")
        else:
            raise RefactorFirstError("[thresholds] must be a table")

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise RefactorFirstError(f"Invalid configuration: {e}")


_THRESHOLD_FIELDS = frozenset(DisharmonyThresholds.__dataclass_fields__)


def _merge(target: dict, source: dict) -> None:
    """Merge one configuration layer into another.

    Flat threshold keys and [thresholds] tables are folded into a single
    "thresholds" dict so later layers override individual floors.
    """
    for key, value in source.items():
        if key in _THRESHOLD_FIELDS:
            target.setdefault("thresholds", {})[key] = value
        elif key == "thresholds" and isinstance(value, dict):
            existing = target.get("thresholds")
            if isinstance(existing, dict):
                existing.update(value)
            else:
                target["thresholds"] = dict(value)
        else:
            target[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from REFACTOR_FIRST_* environment variables.

    Every scalar field of AnalysisConfig and DisharmonyThresholds is
    supported, e.g. REFACTOR_FIRST_WMC_THRESHOLD=60 or
    REFACTOR_FIRST_PRIORITY_POLICY=weighted.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    result: dict[str, Any] = {}

    for config_cls in (AnalysisConfig, DisharmonyThresholds):
        type_hints = get_type_hints(config_cls)
        for field_name in config_cls.__dataclass_fields__:
            env_key = f"{ENV_PREFIX}{field_name.upper()}"
            env_value = os.environ.get(env_key)

            if env_value is None:
                continue

            type_hint = type_hints.get(field_name)
            if type_hint is None:
                continue

            try:
                parsed = _parse_env_value(env_value, type_hint)
                if parsed is not None:
                    result[field_name] = parsed
            except ValueError as e:
                raise RefactorFirstError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the field type is not settable from env

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        RefactorFirstError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise RefactorFirstError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
