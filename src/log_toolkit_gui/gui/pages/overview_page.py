from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from log_toolkit_gui.gui.pages.common import failure_notes, human_bytes, make_table
from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.models.logs import RootUsage
from log_toolkit_gui.services.config_service import ToolkitConfig


class OverviewPage(QWidget):
    applyRequested = Signal(dict)

    def __init__(self) -> None:
        super().__init__()

        self._roots = QPlainTextEdit()
        self._roots.setPlaceholderText("/var/log/myapp\n/srv/other/logs")
        self._roots.setMaximumHeight(120)
        self._suffix = QLineEdit(".log")

        apply_btn = QPushButton("Apply && Inspect")
        apply_btn.clicked.connect(self._on_apply_clicked)  # type: ignore[arg-type]

        cfg = QGroupBox("Log Roots")
        cfg_grid = QGridLayout(cfg)
        cfg_grid.addWidget(QLabel("Root Directories (one per line)"), 0, 0)
        cfg_grid.addWidget(self._roots, 0, 1)
        cfg_grid.addWidget(QLabel("Log Suffix"), 1, 0)
        cfg_grid.addWidget(self._suffix, 1, 1)

        cfg_row = QHBoxLayout()
        cfg_row.addWidget(cfg, 1)
        cfg_row.addWidget(apply_btn)

        self._status = QLabel("-")
        self._status.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self._notes = QLabel("")
        self._notes.setWordWrap(True)

        summary = QGroupBox("Summary")
        grid = QGridLayout(summary)
        grid.addWidget(QLabel("Status"), 0, 0)
        grid.addWidget(self._status, 0, 1)
        grid.addWidget(QLabel("Skipped"), 1, 0)
        grid.addWidget(self._notes, 1, 1)

        self._usage = make_table(
            "Root Usage",
            ["ROOT", "LOG FILES", "LOG SIZE", "DISK TOTAL(GB)", "DISK FREE(GB)", "DISK USED%"],
        )

        layout = QVBoxLayout(self)
        layout.addLayout(cfg_row)
        layout.addWidget(summary)
        layout.addWidget(self._usage[0], 1)

    def set_config(self, cfg: ToolkitConfig) -> None:
        self._roots.setPlainText("\n".join(cfg.roots))
        self._suffix.setText(cfg.suffix)

    def _on_apply_clicked(self) -> None:
        roots = [r.strip() for r in self._roots.toPlainText().splitlines() if r.strip()]
        self.applyRequested.emit(
            {
                "roots": roots,
                "suffix": self._suffix.text().strip() or ".log",
            }
        )

    def set_data(self, result: OperationResult[list[RootUsage]]) -> None:
        self._status.setText(f"{result.status} @ {result.ts:%F %T}")
        self._notes.setText(failure_notes(result.failures))
        self._fill_usage(self._usage[1], result.data)

    def _fill_usage(self, t: QTableWidget, rows: list[RootUsage]) -> None:
        t.setRowCount(len(rows))
        for r, u in enumerate(rows):
            t.setItem(r, 0, QTableWidgetItem(u.root))
            t.setItem(r, 1, QTableWidgetItem(str(u.log_files)))
            t.setItem(r, 2, QTableWidgetItem(human_bytes(u.log_bytes)))
            t.setItem(r, 3, QTableWidgetItem(f"{u.total_gb:.2f}"))
            t.setItem(r, 4, QTableWidgetItem(f"{u.free_gb:.2f}"))
            t.setItem(r, 5, QTableWidgetItem(str(u.used_percent)))
        t.resizeColumnsToContents()
