from __future__ import annotations

from log_toolkit_gui.errors import FileReadError
from log_toolkit_gui.models.common import OperationResult, UnitFailure
from log_toolkit_gui.models.logs import SizeResult
from log_toolkit_gui.services.log_files import LOG_SUFFIX, iter_log_files, stat_log_file
from log_toolkit_gui.services.orchestrator import RootOrchestrator, record_failure


class SizeFilterCollector:
    """Log files whose size in whole KB lies in [min_kb, max_kb].

    The range is checked by the caller; an inverted range simply matches nothing.
    """

    def __init__(self, suffix: str = LOG_SUFFIX) -> None:
        self.suffix = suffix
        self._orchestrator = RootOrchestrator()

    def collect(self, roots: list[str], min_kb: int, max_kb: int) -> OperationResult[list[SizeResult]]:
        results: list[SizeResult] = []
        failures = self._orchestrator.run(
            roots,
            "search by size",
            lambda root, f: self.filter_root(root, int(min_kb), int(max_kb), results, f),
        )
        return OperationResult.build(results, failures)

    def filter_root(
        self,
        root: str,
        min_kb: int,
        max_kb: int,
        results: list[SizeResult],
        failures: list[UnitFailure],
    ) -> None:
        on_error = lambda e: record_failure(failures, e.filename or root, e, "search by size")  # noqa: E731
        for path in iter_log_files(root, self.suffix, on_error=on_error):
            try:
                info = stat_log_file(path)
            except FileReadError as e:
                record_failure(failures, path, e, "search by size")
                continue
            if min_kb <= info.size_kb <= max_kb:
                results.append(SizeResult(file_path=path, size_kb=info.size_kb))
