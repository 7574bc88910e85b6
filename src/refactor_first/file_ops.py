"""
Path handling shared by the metrics and history providers.

Both providers key their records by the same repository-relative POSIX
path so the calculator can join them.
"""

import posixpath
from pathlib import Path, PureWindowsPath
from typing import Union

from .exceptions import InvalidPathError


def resolve_source_root(source_root: Union[str, Path]) -> Path:
    """
    Resolve and validate the directory a run analyzes.

    Raises:
        InvalidPathError: If the path does not exist or is not a directory
    """
    root = Path(source_root).expanduser()
    if not root.exists():
        raise InvalidPathError(root, "does not exist")
    if not root.is_dir():
        raise InvalidPathError(root, "is not a directory")
    return root.resolve()


def normalize_path(path: Union[str, Path], source_root: Path) -> str:
    """
    Convert a provider-reported path into the join key.

    Absolute paths under ``source_root`` become relative to it. Windows
    separators are converted, "." segments are dropped and ".." segments
    are collapsed.

    Raises:
        InvalidPathError: If the path lies outside ``source_root``
    """
    raw = str(path).strip()
    if "\\" in raw:
        raw = PureWindowsPath(raw).as_posix()

    candidate = Path(raw)
    if candidate.is_absolute():
        try:
            candidate = candidate.resolve().relative_to(source_root)
        except ValueError:
            raise InvalidPathError(candidate, f"outside of source root {source_root}")
        return candidate.as_posix()

    normalized = posixpath.normpath(raw)
    if normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith("../"):
        raise InvalidPathError(Path(raw), f"outside of source root {source_root}")
    return normalized
