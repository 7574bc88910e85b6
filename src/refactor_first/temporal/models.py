"""Data models for git history extraction."""

from dataclasses import dataclass


@dataclass
class Commit:
    hash: str
    timestamp: int  # unix seconds
    files: list[str]  # repository-relative paths changed


@dataclass
class GitHistory:
    commits: list[Commit]  # newest first
    file_set: set[str]  # all files ever seen

    @property
    def total_commits(self) -> int:
        return len(self.commits)

    @property
    def head(self) -> str:
        """Hash of the newest commit read, or "" for an empty log."""
        return self.commits[0].hash if self.commits else ""
