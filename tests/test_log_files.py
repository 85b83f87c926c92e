from __future__ import annotations

from pathlib import Path

import pytest

from conftest import DAY1, write_log
from log_toolkit_gui.errors import DirectoryNotFound, FileReadError
from log_toolkit_gui.models.common import UnitFailure
from log_toolkit_gui.services import log_files
from log_toolkit_gui.services.log_files import iter_log_files, iter_root_lines, read_lines, stat_log_file


class TestIterLogFiles:
    def test_finds_log_files_at_any_depth(self, nested_root: Path):
        found = {Path(p).relative_to(nested_root).as_posix() for p in iter_log_files(nested_root)}
        assert found == {"top.log", "svc/api.log", "svc/deep/worker.log"}

    def test_ignores_other_suffixes(self, nested_root: Path):
        assert not any(p.endswith(".txt") for p in iter_log_files(nested_root))

    def test_custom_suffix(self, nested_root: Path):
        found = [Path(p).name for p in iter_log_files(nested_root, suffix=".txt")]
        assert found == ["notes.txt"]

    def test_missing_root_raises_before_iteration(self, tmp_path: Path):
        with pytest.raises(DirectoryNotFound):
            iter_log_files(tmp_path / "missing")

    def test_file_as_root_is_not_a_directory(self, tmp_path: Path):
        f = write_log(tmp_path / "plain.log", ["x"])
        with pytest.raises(DirectoryNotFound):
            iter_log_files(f)


class TestReadLines:
    def test_strips_terminator_only(self, tmp_path: Path):
        f = write_log(tmp_path / "a.log", ["  padded  ", "", "last"])
        assert list(read_lines(f)) == ["  padded  ", "", "last"]

    def test_crlf_terminators(self, tmp_path: Path):
        f = tmp_path / "win.log"
        f.write_bytes(b"one\r\ntwo\r\n")
        assert list(read_lines(f)) == ["one", "two"]

    def test_undecodable_bytes_do_not_fail_the_file(self, tmp_path: Path):
        f = tmp_path / "bin.log"
        f.write_bytes(b"ok\n\xff\xfe broken\n")
        lines = list(read_lines(f))
        assert lines[0] == "ok"
        assert len(lines) == 2

    def test_missing_file_raises_file_read_error(self, tmp_path: Path):
        with pytest.raises(FileReadError):
            list(read_lines(tmp_path / "gone.log"))


class TestIterRootLines:
    def test_unreadable_file_is_recorded_and_skipped(self, tmp_path: Path, monkeypatch):
        write_log(tmp_path / "good.log", ["fine"])
        write_log(tmp_path / "bad.log", ["never seen"])
        real = log_files.read_lines

        def flaky(path, encoding="utf-8"):
            if str(path).endswith("bad.log"):
                yield "partial"
                raise FileReadError("disk error", path=str(path))
            yield from real(path, encoding)

        monkeypatch.setattr(log_files, "read_lines", flaky)
        failures: list[UnitFailure] = []
        texts = sorted(line.text for line in iter_root_lines(str(tmp_path), failures, "test"))

        assert texts == ["fine", "partial"]
        assert [(Path(f.unit).name, f.kind) for f in failures] == [("bad.log", "FileReadError")]


def test_stat_log_file_reports_size_and_mtime(tmp_path: Path):
    f = write_log(tmp_path / "a.log", ["x" * 2047], DAY1)
    info = stat_log_file(f)
    assert info.size_bytes == 2048
    assert info.size_kb == 2
    assert info.modified == DAY1


def test_stat_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileReadError):
        stat_log_file(tmp_path / "nope.log")


def test_leading_byte_order_mark_is_dropped(tmp_path: Path):
    f = tmp_path / "bom.log"
    f.write_bytes(b"\xef\xbb\xbfERROR x\nERROR x\n")
    assert list(read_lines(f)) == ["ERROR x", "ERROR x"]
