"""Tests for the exception hierarchy."""

from pathlib import Path

import pytest

from refactor_first.exceptions import (
    ConfigurationError,
    DuplicateCandidateError,
    HistoryExtractionError,
    InputError,
    InvalidConfigError,
    InvalidPathError,
    InvalidRepositoryError,
    JoinError,
    MetricsExtractionError,
    MissingHistoryError,
    RefactorFirstError,
)


class TestHierarchy:
    """Fatal input errors and per-candidate join errors are separate families."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidRepositoryError(Path("/repo/sub"), "repository top level is /repo"),
            MetricsExtractionError("metrics.json", "metrics report not found"),
            HistoryExtractionError(Path("/repo"), "git log timed out after 120s"),
            DuplicateCandidateError("src/A.java", ["A", "Inner"]),
        ],
    )
    def test_input_errors(self, error):
        assert isinstance(error, InputError)
        assert isinstance(error, RefactorFirstError)
        assert not isinstance(error, JoinError)

    def test_missing_history_is_join_error(self):
        error = MissingHistoryError("Order", "src/Order.java")
        assert isinstance(error, JoinError)
        assert not isinstance(error, InputError)

    def test_config_errors(self):
        assert isinstance(InvalidConfigError("workers", 0, "must be positive"), ConfigurationError)
        assert isinstance(InvalidPathError(Path("x"), "does not exist"), ConfigurationError)


class TestMessages:
    def test_details_in_str(self):
        error = HistoryExtractionError(Path("/repo"), "git log failed")
        assert str(error) == (
            "Failed to read change history for /repo (source_root=/repo, reason=git log failed)"
        )

    def test_no_details(self):
        assert str(RefactorFirstError("plain")) == "plain"

    def test_attributes(self):
        error = DuplicateCandidateError("src/A.java", ["A", "Inner"])
        assert error.path == "src/A.java"
        assert error.class_names == ["A", "Inner"]
        assert error.details["classes"] == "A, Inner"
