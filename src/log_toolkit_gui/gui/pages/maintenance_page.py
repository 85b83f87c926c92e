from __future__ import annotations

from datetime import datetime

from PySide6.QtCore import QDateTime, Signal
from PySide6.QtWidgets import (
    QDateTimeEdit,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from log_toolkit_gui.gui.pages.common import failure_notes
from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.models.logs import ArchiveSummary, DeleteResult


class MaintenancePage(QWidget):
    countRequested = Signal(dict)
    archiveRequested = Signal(dict)
    deleteRequested = Signal(dict)

    def __init__(self) -> None:
        super().__init__()

        now = QDateTime.currentDateTime()
        self._from = QDateTimeEdit(now.addDays(-30))
        self._from.setCalendarPopup(True)
        self._from.setDisplayFormat("yyyy-MM-dd HH:mm:ss")
        self._to = QDateTimeEdit(now)
        self._to.setCalendarPopup(True)
        self._to.setDisplayFormat("yyyy-MM-dd HH:mm:ss")
        self._delete_dir = QLineEdit()
        self._delete_dir.setPlaceholderText("single root to clean")

        count_btn = QPushButton("Count Logs")
        count_btn.clicked.connect(lambda: self.countRequested.emit(self._range()))  # type: ignore[arg-type]
        archive_btn = QPushButton("Archive && Remove")
        archive_btn.clicked.connect(self._on_archive_clicked)  # type: ignore[arg-type]
        delete_btn = QPushButton("Delete")
        delete_btn.clicked.connect(self._on_delete_clicked)  # type: ignore[arg-type]

        cfg = QGroupBox("Period (inclusive)")
        cfg_grid = QGridLayout(cfg)
        cfg_grid.addWidget(QLabel("From"), 0, 0)
        cfg_grid.addWidget(self._from, 0, 1)
        cfg_grid.addWidget(QLabel("To"), 1, 0)
        cfg_grid.addWidget(self._to, 1, 1)
        cfg_grid.addWidget(QLabel("Delete Directory"), 2, 0)
        cfg_grid.addWidget(self._delete_dir, 2, 1)

        btn_col = QVBoxLayout()
        btn_col.addWidget(count_btn)
        btn_col.addWidget(archive_btn)
        btn_col.addWidget(delete_btn)
        btn_col.addStretch(1)

        cfg_row = QHBoxLayout()
        cfg_row.addWidget(cfg, 1)
        cfg_row.addLayout(btn_col)

        self._output = QTextEdit()
        self._output.setReadOnly(True)
        out_box = QGroupBox("Activity")
        out_l = QVBoxLayout(out_box)
        out_l.addWidget(self._output)

        layout = QVBoxLayout(self)
        layout.addLayout(cfg_row)
        layout.addWidget(out_box, 1)

    def _range(self) -> dict[str, datetime]:
        return {
            "start": self._from.dateTime().toPython(),
            "end": self._to.dateTime().toPython(),
        }

    def _confirm(self, text: str) -> bool:
        answer = QMessageBox.question(self, "Confirm", text)
        return answer == QMessageBox.StandardButton.Yes

    def _on_archive_clicked(self) -> None:
        r = self._range()
        if self._confirm(f"Archive and remove logs modified {r['start']:%F %T} .. {r['end']:%F %T} in every root?"):
            self.archiveRequested.emit(r)

    def _on_delete_clicked(self) -> None:
        r = self._range()
        r_dir = self._delete_dir.text().strip()
        if self._confirm(f"Delete logs modified {r['start']:%F %T} .. {r['end']:%F %T} under {r_dir or '(none)'}?"):
            self.deleteRequested.emit({**r, "root": r_dir})

    def set_count(self, result: OperationResult[int]) -> None:
        self._append(result, f"Total logs in the specified period: {result.data}")

    def set_archive(self, result: OperationResult[ArchiveSummary]) -> None:
        d = result.data
        lines = [d.message]
        for a in d.artifacts:
            lines.append(f"  {a.zip_path}: {len(a.entries)} entr(ies), {len(a.deleted)} removed")
        self._append(result, "\n".join(lines))

    def set_delete(self, result: OperationResult[DeleteResult]) -> None:
        d = result.data
        self._append(result, f"{d.message} {d.root}: {len(d.deleted)} removed")

    def _append(self, result: OperationResult, text: str) -> None:
        self._output.append(f"[{result.ts:%F %T}] {result.status} {text}")
        notes = failure_notes(result.failures)
        if notes:
            self._output.append(notes)
