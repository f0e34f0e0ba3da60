"""Tests for valman.core.persistence and valman.utils.file_io."""
import pytest

from valman.core.errors import FileNotFound, FileWriteFailure
from valman.core.persistence import dump_registry, load_registry, store_registry
from valman.core.registry import Registry
from valman.utils.file_io import read_text, write_text


class TestFileIO:
    def test_write_then_read(self, tmp_path):
        f = tmp_path / "t.txt"
        assert write_text(f, "héllo\n") is True
        assert read_text(f) == "héllo\n"

    def test_read_missing(self, tmp_path):
        assert read_text(tmp_path / "nope.txt") is None

    def test_write_into_missing_dir(self, tmp_path):
        assert write_text(tmp_path / "no" / "such" / "dir.txt", "x") is False


class TestStore:
    def test_format(self, registry):
        assert dump_registry(registry) == "alice||2.0\nalpha||1.0\nbeta||3.0\n"

    def test_custom_marker(self):
        reg = Registry(marker="::")
        reg.add("x", -0.5)
        assert dump_registry(reg, "::") == "x::-0.5\n"

    def test_overwrites_whole_file(self, tmp_path, registry):
        f = tmp_path / "values.txt"
        f.write_text("old||1\n" * 50, encoding="utf-8")
        assert store_registry(registry, f) == 3
        assert f.read_text(encoding="utf-8").count("\n") == 3

    def test_write_failure_leaves_registry(self, tmp_path, registry):
        before = registry.as_dict()
        with pytest.raises(FileWriteFailure):
            store_registry(registry, tmp_path / "missing_dir" / "values.txt")
        assert registry.as_dict() == before

    def test_store_into_directory_fails(self, tmp_path, registry):
        with pytest.raises(FileWriteFailure):
            registry.store(tmp_path)


class TestLoad:
    def test_missing_file(self, tmp_path):
        reg = Registry()
        logs = []
        assert load_registry(reg, tmp_path / "none.txt", log=lambda l, m: logs.append(l)) is False
        assert len(reg) == 0
        assert logs == ["INFO"]

    def test_malformed_line_skipped(self, tmp_path):
        f = tmp_path / "values.txt"
        f.write_text("a||1\nb||2\nthis is junk\n\nc||-3.5\n", encoding="utf-8")
        reg = Registry()
        logs = []
        assert load_registry(reg, f, log=lambda l, m: logs.append((l, m))) is True
        assert reg.as_dict() == {"a": 1.0, "b": 2.0, "c": -3.5}
        assert any(l == "WARNING" and ":3:" in m for l, m in logs)

    def test_operator_line_skipped(self, tmp_path):
        f = tmp_path / "values.txt"
        f.write_text("a||1\na|| * 3\n", encoding="utf-8")
        reg = Registry()
        assert reg.load(f) is True
        assert reg.as_dict() == {"a": 1.0}

    def test_load_merges(self, tmp_path, registry):
        f = tmp_path / "values.txt"
        f.write_text("alpha||10\ngamma||5\n", encoding="utf-8")
        registry.load(f)
        assert registry.as_dict() == {"alpha": 10.0, "alice": 2.0, "beta": 3.0, "gamma": 5.0}

    def test_unreadable_file(self, tmp_path):
        f = tmp_path / "binary.txt"
        f.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(FileNotFound):
            Registry().load(f)

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(FileNotFound):
            Registry().load(tmp_path)


class TestRoundTrip:
    def test_store_then_load(self, tmp_path):
        reg = Registry()
        values = {"a": 0.1 + 0.2, "b": -1 / 3, "big": 1.5e22, "tiny": 3e-15, "my var": 0.0}
        for name, value in values.items():
            reg.add(name, value)
        f = tmp_path / "values.txt"
        reg.store(f)

        fresh = Registry(f)
        assert fresh.as_dict() == values
