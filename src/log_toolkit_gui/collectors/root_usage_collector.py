from __future__ import annotations

import psutil

from log_toolkit_gui.errors import FileReadError
from log_toolkit_gui.models.common import OperationResult, UnitFailure
from log_toolkit_gui.models.logs import RootUsage
from log_toolkit_gui.services.log_files import LOG_SUFFIX, iter_log_files, require_dir, stat_log_file
from log_toolkit_gui.services.orchestrator import RootOrchestrator, record_failure

GB = 1024 * 1024 * 1024


class RootUsageCollector:
    """Log volume per root and how full the disk holding it is."""

    def __init__(self, suffix: str = LOG_SUFFIX) -> None:
        self.suffix = suffix
        self._orchestrator = RootOrchestrator()

    def collect(self, roots: list[str]) -> OperationResult[list[RootUsage]]:
        rows: list[RootUsage] = []
        failures = self._orchestrator.run(
            roots,
            "inspect roots",
            lambda root, f: rows.append(self.inspect(root, f)),
        )
        rows.sort(key=lambda r: r.log_bytes, reverse=True)
        return OperationResult.build(rows, failures)

    def inspect(self, root: str, failures: list[UnitFailure]) -> RootUsage:
        require_dir(root)
        u = psutil.disk_usage(root)

        count = 0
        total = 0
        on_error = lambda e: record_failure(failures, e.filename or root, e, "inspect roots")  # noqa: E731
        for path in iter_log_files(root, self.suffix, on_error=on_error):
            try:
                total += stat_log_file(path).size_bytes
            except FileReadError as e:
                record_failure(failures, path, e, "inspect roots")
                continue
            count += 1

        return RootUsage(
            root=str(root),
            log_files=count,
            log_bytes=total,
            total_gb=float(u.total / GB),
            used_gb=float(u.used / GB),
            free_gb=float(u.free / GB),
            used_percent=int(u.percent),
        )
