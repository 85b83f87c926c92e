from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import DAY1, DAY5
from log_toolkit_gui.errors import AccessDenied, DirectoryNotFound
from log_toolkit_gui.models.logs import DateRange
from log_toolkit_gui.services import log_delete_service
from log_toolkit_gui.services.log_delete_service import LogDeleteService


@pytest.fixture
def deleter() -> LogDeleteService:
    return LogDeleteService()


class TestLogDeleteService:
    def test_deletes_only_in_range(self, deleter, scenario_root: Path):
        res = deleter.delete_in_range(str(scenario_root), DateRange(DAY1, DAY1))
        assert [Path(p).name for p in res.deleted] == ["a.log"]
        assert not (scenario_root / "a.log").exists()
        assert (scenario_root / "b.log").exists()

    def test_recurses_and_leaves_non_logs(self, deleter, nested_root: Path):
        res = deleter.delete_in_range(str(nested_root), DateRange(DAY1, DAY1))
        assert sorted(Path(p).name for p in res.deleted) == ["api.log", "top.log"]
        assert (nested_root / "svc" / "notes.txt").exists()
        assert (nested_root / "svc" / "deep" / "worker.log").exists()

    def test_second_run_is_a_no_op(self, deleter, scenario_root: Path):
        period = DateRange(DAY1, DAY5)
        first = deleter.delete_in_range(str(scenario_root), period)
        second = deleter.delete_in_range(str(scenario_root), period)
        assert len(first.deleted) == 2
        assert second.deleted == []
        assert second.failures == []

    def test_missing_root_raises(self, deleter, tmp_path: Path):
        with pytest.raises(DirectoryNotFound):
            deleter.delete_in_range(str(tmp_path / "missing"), DateRange(DAY1, DAY5))

    def test_unlistable_root_is_access_denied(self, deleter, scenario_root: Path, monkeypatch):
        def deny(directory):
            raise PermissionError(13, "Permission denied", directory)

        monkeypatch.setattr(deleter, "_list", deny)
        with pytest.raises(AccessDenied):
            deleter.delete_in_range(str(scenario_root), DateRange(DAY1, DAY5))

    def test_unlistable_subdirectory_is_skipped(self, deleter, nested_root: Path, monkeypatch):
        real = deleter._list
        blocked = str(nested_root / "svc")

        def partial(directory):
            if str(directory) == blocked:
                raise PermissionError(13, "Permission denied", directory)
            return real(directory)

        monkeypatch.setattr(deleter, "_list", partial)
        res = deleter.delete_in_range(str(nested_root), DateRange(DAY1, DAY5))
        assert [Path(p).name for p in res.deleted] == ["top.log"]
        assert [(f.unit, f.kind) for f in res.failures] == [(blocked, "AccessDenied")]

    def test_single_file_delete_failure_does_not_abort(self, deleter, scenario_root: Path, monkeypatch):
        real_remove = os.remove

        def stubborn(path, *args, **kwargs):
            if str(path).endswith("a.log"):
                raise PermissionError(13, "Permission denied", path)
            return real_remove(path, *args, **kwargs)

        monkeypatch.setattr(log_delete_service.os, "remove", stubborn)
        res = deleter.delete_in_range(str(scenario_root), DateRange(DAY1, DAY5))
        assert [Path(p).name for p in res.deleted] == ["b.log"]
        assert [f.kind for f in res.failures] == ["FileDeleteError"]
        assert (scenario_root / "a.log").exists()


def test_root_behind_denied_parent_is_access_denied(deleter, scenario_root: Path, monkeypatch):
    real_stat = os.stat

    def guarded_stat(path, *args, **kwargs):
        if str(path) == str(scenario_root):
            raise PermissionError(13, "Permission denied", path)
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(log_delete_service.os, "stat", guarded_stat)
    with pytest.raises(AccessDenied):
        deleter.delete_in_range(str(scenario_root), DateRange(DAY1, DAY5))


def test_only_listed_files_are_deleted(deleter, scenario_root: Path):
    keep_out = {str(scenario_root / "b.log")}
    res = deleter.delete_in_range(str(scenario_root), DateRange(DAY1, DAY5), only=keep_out)
    assert [Path(p).name for p in res.deleted] == ["b.log"]
    assert (scenario_root / "a.log").exists()
