from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

DAY1 = datetime(2024, 3, 1, 12, 0, 0)
DAY5 = datetime(2024, 3, 5, 12, 0, 0)


def write_log(path: Path, lines: list[str], modified: datetime | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    if modified is not None:
        ts = modified.timestamp()
        os.utime(path, (ts, ts))
    return path


@pytest.fixture
def scenario_root(tmp_path: Path) -> Path:
    """a.log (day 1, one line) and b.log (day 5, two lines)."""
    root = tmp_path / "logs"
    write_log(root / "a.log", ["ERROR x"], DAY1)
    write_log(root / "b.log", ["ERROR x", "ERROR y"], DAY5)
    return root


@pytest.fixture
def nested_root(tmp_path: Path) -> Path:
    root = tmp_path / "nested"
    write_log(root / "top.log", ["INFO boot", "ERROR disk full"], DAY1)
    write_log(root / "svc" / "api.log", ["  ERROR disk full  ", "WARN slow"], DAY1)
    write_log(root / "svc" / "deep" / "worker.log", ["error lowercase", "ERROR disk full"], DAY5)
    write_log(root / "svc" / "notes.txt", ["ERROR not a log"], DAY1)
    return root
