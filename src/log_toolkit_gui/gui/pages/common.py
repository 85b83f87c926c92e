from __future__ import annotations

from PySide6.QtWidgets import QAbstractItemView, QGroupBox, QTableWidget, QVBoxLayout

from log_toolkit_gui.models.common import UnitFailure


def human_bytes(n: int) -> str:
    v = float(n)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if v < 1024.0:
            return f"{v:.1f}{unit}" if unit != "B" else f"{int(v)}B"
        v /= 1024.0
    return f"{v:.1f}PB"


def make_table(title: str, headers: list[str]) -> tuple[QGroupBox, QTableWidget]:
    gb = QGroupBox(title)
    t = QTableWidget(0, len(headers))
    t.setHorizontalHeaderLabels(headers)
    t.setEditTriggers(QAbstractItemView.NoEditTriggers)
    t.setSelectionBehavior(QAbstractItemView.SelectRows)
    t.setAlternatingRowColors(True)
    t.verticalHeader().setVisible(False)
    t.horizontalHeader().setStretchLastSection(True)
    l = QVBoxLayout(gb)
    l.addWidget(t)
    return gb, t


def failure_notes(failures: list[UnitFailure], limit: int = 20) -> str:
    if not failures:
        return ""
    lines = [f"{f.kind}: {f.unit}" for f in failures[:limit]]
    if len(failures) > limit:
        lines.append(f"... and {len(failures) - limit} more")
    return "\n".join(lines)
