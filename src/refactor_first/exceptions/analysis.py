"""Analysis exceptions: fatal input failures and per-candidate join failures.

InputError and its subclasses abort a run before any ranking happens.
JoinError describes a single candidate that could not be joined with its
change history; the calculator records it and keeps going.
"""

from pathlib import Path
from typing import List

from .base import RefactorFirstError


class InputError(RefactorFirstError):
    """Base class for errors that make the whole run unusable."""

    pass


class InvalidRepositoryError(InputError):
    """Raised when the source root is not the top level of a git repository."""

    def __init__(self, source_root: Path, reason: str):
        super().__init__(
            f"Not an analyzable repository root: {source_root}",
            details={"source_root": str(source_root), "reason": reason},
        )
        self.source_root = source_root
        self.reason = reason


class MetricsExtractionError(InputError):
    """Raised when structural metrics cannot be collected."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Failed to collect class metrics from {source}",
            details={"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason


class HistoryExtractionError(InputError):
    """Raised when version-control history cannot be read completely."""

    def __init__(self, source_root: Path, reason: str):
        super().__init__(
            f"Failed to read change history for {source_root}",
            details={"source_root": str(source_root), "reason": reason},
        )
        self.source_root = source_root
        self.reason = reason


class DuplicateCandidateError(InputError):
    """Raised when several candidate classes map to the same file path."""

    def __init__(self, path: str, class_names: List[str]):
        super().__init__(
            f"Several candidate classes share the path {path}",
            details={"path": path, "classes": ", ".join(class_names)},
        )
        self.path = path
        self.class_names = class_names


class JoinError(RefactorFirstError):
    """Base class for a candidate that cannot be joined with its history."""

    pass


class MissingHistoryError(JoinError):
    """A candidate file has no commits in the version-control history."""

    def __init__(self, class_name: str, path: str):
        super().__init__(
            f"No change history for {class_name}",
            details={"class_name": class_name, "path": path},
        )
        self.class_name = class_name
        self.path = path
