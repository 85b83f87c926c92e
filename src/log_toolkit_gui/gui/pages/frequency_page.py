from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTableWidgetItem,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from log_toolkit_gui.collectors.frequency_collector import ALL, DUPLICATES
from log_toolkit_gui.gui.pages.common import failure_notes, make_table
from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.models.logs import FrequencyReport

MAX_ROWS = 1000


class FrequencyPage(QWidget):
    countRequested = Signal(str)

    def __init__(self) -> None:
        super().__init__()

        all_btn = QPushButton("Count All Lines")
        all_btn.clicked.connect(lambda: self.countRequested.emit(ALL))  # type: ignore[arg-type]
        dup_btn = QPushButton("Count Duplicates")
        dup_btn.clicked.connect(lambda: self.countRequested.emit(DUPLICATES))  # type: ignore[arg-type]

        btn_row = QHBoxLayout()
        btn_row.addWidget(all_btn)
        btn_row.addWidget(dup_btn)
        btn_row.addStretch(1)

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

        self._table = make_table("Line Counts", ["COUNT", "LINE"])

        self._report = QTextEdit()
        self._report.setReadOnly(True)
        self._report.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
        report_box = QGroupBox("Report")
        report_l = QVBoxLayout(report_box)
        report_l.addWidget(self._report)

        layout = QVBoxLayout(self)
        layout.addLayout(btn_row)
        layout.addWidget(summary)
        layout.addWidget(self._table[0], 2)
        layout.addWidget(report_box, 1)

    def set_data(self, result: OperationResult[FrequencyReport]) -> None:
        d = result.data
        self._status.setText(f"{result.status}: {len(d.table)} distinct line(s), policy={d.policy}")
        self._notes.setText(failure_notes(result.failures))

        rows = d.top(MAX_ROWS)
        t = self._table[1]
        t.setRowCount(len(rows))
        for r, (line, count) in enumerate(rows):
            t.setItem(r, 0, QTableWidgetItem(str(count)))
            t.setItem(r, 1, QTableWidgetItem(line))
        t.resizeColumnsToContents()

        self._report.setPlainText(d.text)
