"""Tests for source root validation and join-key normalization."""

import pytest

from refactor_first.exceptions import InvalidPathError
from refactor_first.file_ops import normalize_path, resolve_source_root


class TestResolveSourceRoot:
    def test_existing_directory(self, tmp_path):
        assert resolve_source_root(str(tmp_path)) == tmp_path.resolve()

    def test_missing(self, tmp_path):
        with pytest.raises(InvalidPathError, match="does not exist"):
            resolve_source_root(tmp_path / "absent")

    def test_file(self, tmp_path):
        target = tmp_path / "metrics.json"
        target.write_text("[]", encoding="utf-8")
        with pytest.raises(InvalidPathError, match="is not a directory"):
            resolve_source_root(target)


class TestNormalizePath:
    """Report paths must match the keys git reports."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("src/A.java", "src/A.java"),
            ("./src/A.java", "src/A.java"),
            ("src/./A.java", "src/A.java"),
            ("src/../src/A.java", "src/A.java"),
            ("src/main/../../lib/B.java", "lib/B.java"),
            ("src\\acme\\Order.java", "src/acme/Order.java"),
            ("src//A.java", "src/A.java"),
            ("  src/A.java ", "src/A.java"),
        ],
    )
    def test_relative(self, tmp_path, raw, expected):
        assert normalize_path(raw, tmp_path.resolve()) == expected

    def test_absolute_inside_root(self, tmp_path):
        root = tmp_path.resolve()
        assert normalize_path(str(root / "src" / "A.java"), root) == "src/A.java"

    @pytest.mark.parametrize("raw", ["../A.java", "src/../../A.java", ".."])
    def test_relative_escape_rejected(self, tmp_path, raw):
        with pytest.raises(InvalidPathError, match="outside of source root"):
            normalize_path(raw, tmp_path.resolve())

    def test_absolute_outside_root_rejected(self, tmp_path):
        root = (tmp_path / "repo").resolve()
        with pytest.raises(InvalidPathError, match="outside of source root"):
            normalize_path(str(tmp_path.resolve() / "Other.java"), root)
