"""Shared test fixtures for Refactor First tests."""

import os
import shutil
import subprocess
from datetime import datetime, timezone
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# Fixed reference point so commit dates never depend on the clock
BASE_TS = 1_700_000_000


class GitRepo:
    """Throwaway git repository with controllable commit dates."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args: str, env: dict = None) -> str:
        full_env = {
            **os.environ,
            "GIT_AUTHOR_NAME": "Test Dev",
            "GIT_AUTHOR_EMAIL": "dev@example.com",
            "GIT_COMMITTER_NAME": "Test Dev",
            "GIT_COMMITTER_EMAIL": "dev@example.com",
            "GIT_CONFIG_NOSYSTEM": "1",
            "HOME": str(self.path.parent),
        }
        if env:
            full_env.update(env)
        result = subprocess.run(
            ["git", "-C", str(self.path), *args],
            capture_output=True,
            text=True,
            check=True,
            env=full_env,
        )
        return result.stdout

    def commit(self, paths: list, timestamp: int, message: str = "change") -> None:
        """Append a line to each path and commit them at ``timestamp``."""
        for rel in paths:
            target = self.path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "a", encoding="utf-8") as f:
                f.write(f"// {message} at {timestamp}\n")
        self.git("add", "-A")
        date = f"{timestamp} +0000"
        self.git(
            "-c",
            "commit.gpgsign=false",
            "commit",
            "-q",
            "-m",
            message,
            env={"GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date},
        )


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository; skipped when git is not installed."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    path = tmp_path / "repo"
    path.mkdir()
    repo = GitRepo(path)
    repo.git("init", "-q")
    return repo


@pytest.fixture
def base_time():
    """Reference datetime matching BASE_TS."""
    return datetime.fromtimestamp(BASE_TS, tz=timezone.utc)
