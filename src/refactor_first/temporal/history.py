"""Per-file change history: the HistoryProvider interface and its git backend."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Protocol, runtime_checkable

from ..exceptions import HistoryExtractionError
from ..logging_config import get_logger
from ..models import ChangeHistory
from .git_extractor import GitExtractor
from .models import GitHistory

logger = get_logger(__name__)


@runtime_checkable
class HistoryProvider(Protocol):
    """Supplies commit activity per repository-relative file path.

    ``load`` performs the (possibly slow) VCS traversal once per run and may
    run concurrently with metrics extraction. ``history`` is a lookup that
    returns None for files the VCS has never seen.
    """

    def load(self, source_root: Path) -> None: ...

    def history(self, path: str) -> Optional[ChangeHistory]: ...


def build_change_histories(history: GitHistory) -> dict[str, ChangeHistory]:
    """Fold a commit log into one ChangeHistory per file."""
    counts: dict[str, int] = {}
    first_seen: dict[str, int] = {}
    last_seen: dict[str, int] = {}

    for commit in history.commits:
        # A file listed twice in one commit still counts once
        for path in set(commit.files):
            counts[path] = counts.get(path, 0) + 1
            ts = commit.timestamp
            if path not in first_seen or ts < first_seen[path]:
                first_seen[path] = ts
            if path not in last_seen or ts > last_seen[path]:
                last_seen[path] = ts

    return {
        path: ChangeHistory(
            path=path,
            commit_count=count,
            first_commit_time=_to_datetime(first_seen[path]),
            most_recent_commit_time=_to_datetime(last_seen[path]),
        )
        for path, count in counts.items()
    }


def _to_datetime(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class GitHistoryProvider:
    """HistoryProvider backed by ``git log`` on the source root."""

    def __init__(self, max_commits: int = 0, timeout_seconds: int = 120):
        self.max_commits = max_commits
        self.timeout_seconds = timeout_seconds
        self._histories: Optional[dict[str, ChangeHistory]] = None

    def load(self, source_root: Path) -> None:
        extractor = GitExtractor(
            str(source_root),
            max_commits=self.max_commits,
            timeout_seconds=self.timeout_seconds,
        )
        git_history = extractor.extract()
        self._histories = build_change_histories(git_history)
        logger.debug(f"Indexed change history for {len(self._histories)} files")

    def history(self, path: str) -> Optional[ChangeHistory]:
        if self._histories is None:
            raise HistoryExtractionError(Path(path), "history requested before load()")
        return self._histories.get(path)


class StaticHistoryProvider:
    """Serves a fixed set of change histories (API callers, tests)."""

    def __init__(self, histories: Iterable[ChangeHistory]):
        self._histories = {h.path: h for h in histories}

    def load(self, source_root: Path) -> None:
        return None

    def history(self, path: str) -> Optional[ChangeHistory]:
        return self._histories.get(path)
