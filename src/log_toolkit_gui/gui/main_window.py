from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QThreadPool
from PySide6.QtWidgets import (
    QMainWindow,
    QPushButton,
    QSplitter,
    QStackedWidget,
    QTreeWidget,
    QTreeWidgetItem,
)

from log_toolkit_gui.collectors.frequency_collector import DUPLICATES
from log_toolkit_gui.collectors.root_usage_collector import RootUsageCollector
from log_toolkit_gui.gui.pages.frequency_page import FrequencyPage
from log_toolkit_gui.gui.pages.maintenance_page import MaintenancePage
from log_toolkit_gui.gui.pages.overview_page import OverviewPage
from log_toolkit_gui.gui.pages.search_page import SearchPage
from log_toolkit_gui.gui.workers import Worker, WorkerJob
from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.services.config_service import ConfigService, ToolkitConfig
from log_toolkit_gui.services.report_service import ReportService
from log_toolkit_gui.toolkit import LogToolkit


class MainWindow(QMainWindow):
    def __init__(self, config_service: ConfigService | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Log Toolkit GUI")
        self.resize(1100, 720)

        self._config = config_service or ConfigService()
        self._reporter = ReportService()
        self._cfg: ToolkitConfig = self._config.load()
        self._toolkit = LogToolkit(self._cfg, reporter=self._reporter)
        self._usage_collector = RootUsageCollector(suffix=self._cfg.suffix)

        # Latest result per operation, for the exported report.
        self._latest: dict[str, OperationResult[Any]] = {}
        self._req_ids: dict[str, int] = {}
        self._thread_pool = QThreadPool.globalInstance()
        self._active_workers: set[Worker] = set()

        self._nav = QTreeWidget()
        self._nav.setHeaderHidden(True)

        self._pages = QStackedWidget()
        self._overview = OverviewPage()
        self._search = SearchPage()
        self._frequency = FrequencyPage()
        self._maintenance = MaintenancePage()

        self._pages.addWidget(self._overview)
        self._pages.addWidget(self._search)
        self._pages.addWidget(self._frequency)
        self._pages.addWidget(self._maintenance)

        self._nav_items: dict[str, int] = {
            "Overview": 0,
            "Search": 1,
            "Frequency": 2,
            "Maintenance": 3,
        }
        for title in self._nav_items.keys():
            self._nav.addTopLevelItem(QTreeWidgetItem([title]))
        self._nav.setCurrentItem(self._nav.topLevelItem(0))

        splitter = QSplitter()
        splitter.addWidget(self._nav)
        splitter.addWidget(self._pages)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self.statusBar().showMessage("Ready")

        export_btn = QPushButton("Export Report")
        export_btn.clicked.connect(self._export_report)  # type: ignore[arg-type]
        self.statusBar().addPermanentWidget(export_btn)

        self._nav.currentItemChanged.connect(self._on_nav_changed)  # type: ignore[arg-type]

        self._overview.applyRequested.connect(self._on_roots_apply)  # type: ignore[arg-type]
        self._search.searchRequested.connect(self._on_search)  # type: ignore[arg-type]
        self._search.sizeRequested.connect(self._on_size_search)  # type: ignore[arg-type]
        self._frequency.countRequested.connect(self._on_count)  # type: ignore[arg-type]
        self._maintenance.countRequested.connect(self._on_count_logs)  # type: ignore[arg-type]
        self._maintenance.archiveRequested.connect(self._on_archive)  # type: ignore[arg-type]
        self._maintenance.deleteRequested.connect(self._on_delete)  # type: ignore[arg-type]

        self._overview.set_config(self._cfg)
        self.refresh_usage()

    def _on_roots_apply(self, cfg: dict) -> None:
        merged = {**self._cfg.to_dict(), **cfg}
        self._cfg = ToolkitConfig.from_mapping(merged)
        self._toolkit = LogToolkit(self._cfg, reporter=self._reporter)
        self._usage_collector = RootUsageCollector(suffix=self._cfg.suffix)
        try:
            self._config.save(self._cfg)
        except OSError as e:
            self._on_worker_error("save config", str(e))
        self.statusBar().showMessage(f"Roots applied: {len(self._cfg.roots)} root(s), suffix={self._cfg.suffix}")
        self.refresh_usage()

    def _on_nav_changed(self, current: QTreeWidgetItem | None, _prev: QTreeWidgetItem | None) -> None:
        if current is None:
            return
        title = current.text(0)
        idx = self._nav_items.get(title)
        if idx is not None:
            self._pages.setCurrentIndex(idx)

    def refresh_usage(self) -> None:
        if not self._cfg.roots:
            return
        roots = list(self._cfg.roots)
        self._run("usage", lambda: self._usage_collector.collect(roots), self._overview.set_data)

    def _on_search(self, req: dict) -> None:
        query = str(req.get("query") or "")
        directory = str(req.get("directory") or "")
        if directory:
            self._run("search", lambda: self._toolkit.search_by_directory(directory, query), self._search.set_search)
        else:
            roots = list(self._cfg.roots)
            self._run("search", lambda: self._toolkit.search(roots, query), self._search.set_search)

    def _on_size_search(self, req: dict) -> None:
        roots = list(self._cfg.roots)
        min_kb = int(req.get("min_kb") or 0)
        max_kb = int(req.get("max_kb") or 0)
        self._run("sizes", lambda: self._toolkit.search_by_size(roots, min_kb, max_kb), self._search.set_sizes)

    def _on_count(self, policy: str) -> None:
        roots = list(self._cfg.roots)
        if policy == DUPLICATES:
            fn: Callable[[], Any] = lambda: self._toolkit.count_duplicate_errors(roots)
        else:
            fn = lambda: self._toolkit.count_errors(roots)
        self._run("frequency", fn, self._frequency.set_data)

    def _on_count_logs(self, req: dict) -> None:
        roots = list(self._cfg.roots)
        start, end = req.get("start"), req.get("end")
        self._run("total_logs", lambda: self._toolkit.count_total_logs(roots, start, end), self._maintenance.set_count)

    def _on_archive(self, req: dict) -> None:
        roots = list(self._cfg.roots)
        start, end = req.get("start"), req.get("end")
        self._run("archive", lambda: self._toolkit.archive_logs(roots, start, end), self._after_destructive(self._maintenance.set_archive))

    def _on_delete(self, req: dict) -> None:
        root = str(req.get("root") or "")
        start, end = req.get("start"), req.get("end")
        self._run("delete", lambda: self._toolkit.delete_logs(root, start, end), self._after_destructive(self._maintenance.set_delete))

    def _after_destructive(self, show: Callable[[Any], None]) -> Callable[[Any], None]:
        def handler(res: Any) -> None:
            show(res)
            self.refresh_usage()

        return handler

    def _run(self, op: str, fn: Callable[[], Any], show: Callable[[Any], None]) -> None:
        req_id = self._req_ids.get(op, 0) + 1
        self._req_ids[op] = req_id
        self.statusBar().showMessage(f"Running {op} ...")

        w = Worker(WorkerJob(op=op, fn=fn))
        self._active_workers.add(w)
        w.signals.result.connect(lambda o, r, _w=w: self._on_result(o, req_id, r, show))  # type: ignore[arg-type]
        w.signals.error.connect(lambda o, m, _w=w: self._on_worker_error(o, m))  # type: ignore[arg-type]
        w.signals.finished.connect(lambda _w=w: self._active_workers.discard(_w))  # type: ignore[arg-type]
        self._thread_pool.start(w)

    def _on_result(self, op: str, req_id: int, res: Any, show: Callable[[Any], None]) -> None:
        if req_id != self._req_ids.get(op):
            return
        if not isinstance(res, OperationResult):
            return
        try:
            self._latest[op] = res
            show(res)
            self.statusBar().showMessage(
                f"{op}: {res.ts.strftime('%F %T')} | Status: {res.status} | Skipped: {res.warning_count}"
            )
        except Exception as e:  # noqa: BLE001
            self._on_worker_error(op, str(e))

    def _export_report(self) -> None:
        try:
            bundle = self._reporter.build_report(
                search=self._latest.get("search"),
                sizes=self._latest.get("sizes"),
                frequency=self._latest.get("frequency"),
                total_logs=self._latest.get("total_logs"),
                archive=self._latest.get("archive"),
                delete=self._latest.get("delete"),
            )
            out = self._reporter.default_report_path()
            written = self._reporter.write_html(out, bundle.html)
            self.statusBar().showMessage(f"Report exported: {written}")
        except Exception as e:  # noqa: BLE001
            self._on_worker_error("export", str(e))

    def _on_worker_error(self, op: str, msg: str) -> None:
        self.statusBar().showMessage(f"Error ({op}): {msg}")
