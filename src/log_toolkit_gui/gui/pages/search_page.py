from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from log_toolkit_gui.gui.pages.common import failure_notes, make_table
from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.models.logs import SearchResult, SizeResult


class SearchPage(QWidget):
    searchRequested = Signal(dict)
    sizeRequested = Signal(dict)

    def __init__(self) -> None:
        super().__init__()

        self._query = QLineEdit()
        self._query.setPlaceholderText("ERROR")
        self._single = QCheckBox("Only this directory")
        self._directory = QLineEdit()
        self._directory.setEnabled(False)
        self._single.toggled.connect(self._directory.setEnabled)  # type: ignore[arg-type]

        search_btn = QPushButton("Search")
        search_btn.clicked.connect(self._on_search_clicked)  # type: ignore[arg-type]
        self._query.returnPressed.connect(self._on_search_clicked)  # type: ignore[arg-type]

        self._min_kb = QSpinBox()
        self._min_kb.setRange(0, 2_000_000_000)
        self._max_kb = QSpinBox()
        self._max_kb.setRange(0, 2_000_000_000)
        self._max_kb.setValue(1024)

        size_btn = QPushButton("Search by Size")
        size_btn.clicked.connect(self._on_size_clicked)  # type: ignore[arg-type]

        text_box = QGroupBox("Text Search")
        text_grid = QGridLayout(text_box)
        text_grid.addWidget(QLabel("Query"), 0, 0)
        text_grid.addWidget(self._query, 0, 1)
        text_grid.addWidget(self._single, 1, 0)
        text_grid.addWidget(self._directory, 1, 1)
        text_grid.addWidget(search_btn, 2, 1)

        size_box = QGroupBox("Size Search")
        size_grid = QGridLayout(size_box)
        size_grid.addWidget(QLabel("Min (KB)"), 0, 0)
        size_grid.addWidget(self._min_kb, 0, 1)
        size_grid.addWidget(QLabel("Max (KB)"), 1, 0)
        size_grid.addWidget(self._max_kb, 1, 1)
        size_grid.addWidget(size_btn, 2, 1)

        cfg_row = QHBoxLayout()
        cfg_row.addWidget(text_box, 2)
        cfg_row.addWidget(size_box, 1)

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

        self._results = make_table("Results", ["FILE", "MATCH / SIZE(KB)"])

        layout = QVBoxLayout(self)
        layout.addLayout(cfg_row)
        layout.addWidget(summary)
        layout.addWidget(self._results[0], 1)

    def _on_search_clicked(self) -> None:
        directory = self._directory.text().strip() if self._single.isChecked() else ""
        self.searchRequested.emit({"query": self._query.text(), "directory": directory})

    def _on_size_clicked(self) -> None:
        self.sizeRequested.emit({"min_kb": int(self._min_kb.value()), "max_kb": int(self._max_kb.value())})

    def set_search(self, result: OperationResult[list[SearchResult]]) -> None:
        self._set_summary(result, f"{len(result.data)} matching line(s)")
        t = self._results[1]
        t.setRowCount(len(result.data))
        for r, m in enumerate(result.data):
            t.setItem(r, 0, QTableWidgetItem(m.file_path))
            t.setItem(r, 1, QTableWidgetItem(m.line))
        t.resizeColumnsToContents()

    def set_sizes(self, result: OperationResult[list[SizeResult]]) -> None:
        self._set_summary(result, f"{len(result.data)} file(s) in range")
        t = self._results[1]
        t.setRowCount(len(result.data))
        for r, s in enumerate(result.data):
            t.setItem(r, 0, QTableWidgetItem(s.file_path))
            t.setItem(r, 1, QTableWidgetItem(str(s.size_kb)))
        t.resizeColumnsToContents()

    def _set_summary(self, result: OperationResult, what: str) -> None:
        self._status.setText(f"{result.status}: {what}")
        self._notes.setText(failure_notes(result.failures))
