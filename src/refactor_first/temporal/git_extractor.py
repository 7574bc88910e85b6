"""Extract git history via subprocess."""

import re
import subprocess
import tempfile
import threading
from pathlib import Path

from ..exceptions import HistoryExtractionError, InvalidRepositoryError
from ..logging_config import get_logger
from .models import Commit, GitHistory

logger = get_logger(__name__)


class GitExtractor:
    """Parse git log into structured GitHistory.

    Any failure while reading the log aborts extraction: a truncated history
    would silently shift every change-proneness rank.
    """

    def __init__(self, repo_path: str, max_commits: int = 0, timeout_seconds: int = 120):
        self.repo_path = str(Path(repo_path).resolve())
        self.max_commits = max_commits
        self.timeout_seconds = timeout_seconds

    def extract(self) -> GitHistory:
        """Parse the full git log of the repository."""
        self.verify_repository_root()

        raw = self._run_git_log()
        commits = self._parse_log(raw)

        file_set: set[str] = set()
        for c in commits:
            file_set.update(c.files)

        history = GitHistory(commits=commits, file_set=file_set)
        logger.info(
            f"Read {history.total_commits} commits touching {len(file_set)} files"
            + (f" (head {history.head[:12]})" if history.head else "")
        )
        return history

    def verify_repository_root(self) -> None:
        """Require repo_path to be the top level of a git working tree.

        Raises:
            InvalidRepositoryError: If git is missing, the path is not inside a
                repository, or it is a subdirectory of one.
        """
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--show-toplevel"],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except FileNotFoundError:
            raise InvalidRepositoryError(Path(self.repo_path), "git executable not found")
        except subprocess.TimeoutExpired:
            raise InvalidRepositoryError(Path(self.repo_path), "git rev-parse timed out")

        if result.returncode != 0:
            raise InvalidRepositoryError(Path(self.repo_path), "not a git repository")

        toplevel = Path(result.stdout.strip()).resolve()
        if toplevel != Path(self.repo_path):
            logger.warning(f"Source root {self.repo_path} does not match git top level {toplevel}")
            raise InvalidRepositoryError(
                Path(self.repo_path), f"repository top level is {toplevel}"
            )

    # Maximum git log output size (50MB) to prevent OOM on huge repos
    _MAX_OUTPUT_BYTES = 50 * 1024 * 1024

    def _run_git_log(self) -> str:
        cmd = [
            "git",
            "-C",
            self.repo_path,
            "-c",
            "core.quotepath=false",
            "log",
            "--format=%H|%at",
            "--name-only",
        ]
        if self.max_commits > 0:
            cmd.append(f"-n{self.max_commits}")

        # stderr goes to a file so a chatty git never blocks on a full pipe
        with tempfile.TemporaryFile() as stderr_file:
            try:
                proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=stderr_file)
            except FileNotFoundError as e:
                raise HistoryExtractionError(Path(self.repo_path), f"git not available: {e}")

            timed_out = threading.Event()

            def _kill() -> None:
                timed_out.set()
                proc.kill()

            watchdog = threading.Timer(self.timeout_seconds, _kill)
            watchdog.start()
            try:
                raw = self._read_capped(proc)
                proc.wait()
            finally:
                watchdog.cancel()
                if proc.poll() is None:
                    proc.kill()
                    proc.wait()
                if proc.stdout:
                    proc.stdout.close()

            if timed_out.is_set():
                raise HistoryExtractionError(
                    Path(self.repo_path), f"git log timed out after {self.timeout_seconds}s"
                )
            if proc.returncode != 0:
                stderr_file.seek(0)
                stderr = stderr_file.read().decode("utf-8", errors="replace").strip()
                raise HistoryExtractionError(Path(self.repo_path), stderr or "git log failed")

        return raw.decode("utf-8", errors="replace")

    def _read_capped(self, proc: subprocess.Popen) -> bytes:
        """Read all of stdout, killing git once the byte cap is exceeded."""
        stdout = proc.stdout
        if stdout is None:
            raise HistoryExtractionError(Path(self.repo_path), "git log produced no output")

        chunks = []
        total_size = 0
        while True:
            chunk = stdout.read(1024 * 1024)  # 1MB chunks
            if not chunk:
                break
            total_size += len(chunk)
            if total_size > self._MAX_OUTPUT_BYTES:
                proc.kill()
                raise HistoryExtractionError(
                    Path(self.repo_path),
                    f"git log output exceeded {self._MAX_OUTPUT_BYTES} bytes; "
                    "set git_max_commits to bound the history",
                )
            chunks.append(chunk)
        return b"".join(chunks)

    # Matches: 40/64-char hex hash | unix timestamp
    _HEADER_RE = re.compile(r"^[0-9a-f]{40}(?:[0-9a-f]{24})?\|\d+$")

    def _parse_log(self, raw: str) -> list[Commit]:
        """Parse git log output into Commit objects.

        Handles merge commits (no files) and consecutive headers correctly
        by detecting header lines via regex rather than relying on blank-line
        separation.
        """
        commits = []
        current_hash = None
        current_ts = 0
        current_files: list[str] = []

        for line in raw.split("\n"):
            line = line.strip()
            if not line:
                continue

            if self._HEADER_RE.match(line):
                if current_hash and current_files:
                    commits.append(Commit(hash=current_hash, timestamp=current_ts, files=current_files))

                current_hash, ts = line.split("|")
                current_ts = int(ts)
                current_files = []
            elif current_hash:
                current_files.append(line)

        if current_hash and current_files:
            commits.append(Commit(hash=current_hash, timestamp=current_ts, files=current_files))

        return commits
