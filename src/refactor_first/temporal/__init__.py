"""Temporal analysis: git history and per-file change activity."""

from .git_extractor import GitExtractor
from .history import (
    GitHistoryProvider,
    HistoryProvider,
    StaticHistoryProvider,
    build_change_histories,
)
from .models import Commit, GitHistory

__all__ = [
    "Commit",
    "GitHistory",
    "GitExtractor",
    "GitHistoryProvider",
    "HistoryProvider",
    "StaticHistoryProvider",
    "build_change_histories",
]
