from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from conftest import DAY1, DAY5, write_log
from log_toolkit_gui.collectors import date_range_collector
from log_toolkit_gui.errors import FileReadError
from log_toolkit_gui.models.logs import DateRange
from log_toolkit_gui.services.log_archive_service import LogArchiveService


@pytest.fixture
def archiver() -> LogArchiveService:
    return LogArchiveService()


def _names(zip_path: Path) -> list[str]:
    with zipfile.ZipFile(zip_path) as zf:
        return sorted(zf.namelist())


class TestLogArchiveService:
    def test_round_trip_archives_then_removes(self, archiver, nested_root: Path):
        period = DateRange(DAY1, DAY1)
        res = archiver.archive([str(nested_root)], period)

        zip_path = nested_root / period.archive_name()
        assert res.status == "OK"
        assert _names(zip_path) == ["api.log", "top.log"]
        assert not (nested_root / "top.log").exists()
        assert not (nested_root / "svc" / "api.log").exists()
        assert (nested_root / "svc" / "deep" / "worker.log").exists()
        assert (nested_root / "svc" / "notes.txt").exists()

        artifact = res.data.artifacts[0]
        assert artifact.zip_path == str(zip_path)
        assert sorted(Path(p).name for p in artifact.deleted) == ["api.log", "top.log"]

    def test_archive_keeps_file_content(self, archiver, scenario_root: Path):
        period = DateRange(DAY5, DAY5)
        archiver.archive([str(scenario_root)], period)
        with zipfile.ZipFile(scenario_root / period.archive_name()) as zf:
            assert zf.read("b.log").decode("utf-8") == "ERROR x\nERROR y\n"

    def test_each_root_gets_its_own_artifact(self, archiver, tmp_path: Path):
        r1 = tmp_path / "r1"
        r2 = tmp_path / "r2"
        write_log(r1 / "a.log", ["one"], DAY1)
        write_log(r2 / "b.log", ["two"], DAY1)
        period = DateRange(DAY1, DAY5)

        res = archiver.archive([str(r1), str(r2)], period)

        assert res.data.zip_name == "01_03_2024-05_03_2024.zip"
        assert res.data.message == "Logs archived to 01_03_2024-05_03_2024.zip successfully."
        assert _names(r1 / res.data.zip_name) == ["a.log"]
        assert _names(r2 / res.data.zip_name) == ["b.log"]

    def test_base_name_collision_keeps_one_entry(self, archiver, tmp_path: Path):
        write_log(tmp_path / "x" / "app.log", ["from x"], DAY1)
        write_log(tmp_path / "y" / "app.log", ["from y"], DAY1)
        period = DateRange(DAY1, DAY1)

        res = archiver.archive([str(tmp_path)], period)

        assert _names(tmp_path / period.archive_name()) == ["app.log"]
        assert len(res.data.artifacts[0].deleted) == 2

    def test_missing_root_does_not_stop_the_others(self, archiver, tmp_path: Path, scenario_root: Path):
        missing = str(tmp_path / "missing")
        period = DateRange(DAY1, DAY5)
        res = archiver.archive([missing, str(scenario_root)], period)

        assert [(f.unit, f.kind) for f in res.failures] == [(missing, "DirectoryNotFound")]
        assert _names(scenario_root / period.archive_name()) == ["a.log", "b.log"]

    def test_existing_artifact_fails_root_and_keeps_logs(self, archiver, scenario_root: Path):
        period = DateRange(DAY1, DAY5)
        existing = scenario_root / period.archive_name()
        existing.write_bytes(b"previous run")

        res = archiver.archive([str(scenario_root)], period)

        assert res.status == "WARN"
        assert res.failures[0].kind == "FileWriteError"
        assert res.data.artifacts == []
        assert existing.read_bytes() == b"previous run"
        assert (scenario_root / "a.log").exists()
        assert (scenario_root / "b.log").exists()

    def test_failed_write_removes_partial_archive(self, archiver, scenario_root: Path, monkeypatch):
        period = DateRange(DAY1, DAY5)

        def broken_write(self, filename, arcname=None, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(zipfile.ZipFile, "write", broken_write)
        res = archiver.archive([str(scenario_root)], period)

        assert res.failures[0].kind == "FileWriteError"
        assert not (scenario_root / period.archive_name()).exists()
        assert (scenario_root / "a.log").exists()


def test_file_not_inspected_during_archiving_is_kept(archiver, scenario_root: Path, monkeypatch):
    real_stat = date_range_collector.stat_log_file

    def flaky_stat(path):
        if str(path).endswith("a.log"):
            raise FileReadError("stat failed", path=str(path))
        return real_stat(path)

    monkeypatch.setattr(date_range_collector, "stat_log_file", flaky_stat)
    period = DateRange(DAY1, DAY5)
    res = archiver.archive([str(scenario_root)], period)

    assert _names(scenario_root / period.archive_name()) == ["b.log"]
    assert (scenario_root / "a.log").exists()
    assert not (scenario_root / "b.log").exists()
    assert [f.kind for f in res.failures] == ["FileReadError"]
