"""Exception hierarchy for Refactor First."""

from .analysis import (
    DuplicateCandidateError,
    HistoryExtractionError,
    InputError,
    InvalidRepositoryError,
    JoinError,
    MetricsExtractionError,
    MissingHistoryError,
)
from .base import RefactorFirstError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "RefactorFirstError",
    "InputError",
    "InvalidRepositoryError",
    "MetricsExtractionError",
    "HistoryExtractionError",
    "DuplicateCandidateError",
    "JoinError",
    "MissingHistoryError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
]
