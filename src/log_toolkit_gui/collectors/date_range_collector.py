from __future__ import annotations

from collections.abc import Iterator

from log_toolkit_gui.errors import FileReadError
from log_toolkit_gui.models.common import OperationResult, UnitFailure
from log_toolkit_gui.models.logs import DateRange, LogFile
from log_toolkit_gui.services.log_files import LOG_SUFFIX, iter_log_files, stat_log_file
from log_toolkit_gui.services.orchestrator import RootOrchestrator, record_failure


def iter_in_range(
    root: str,
    period: DateRange,
    failures: list[UnitFailure],
    label: str,
    suffix: str = LOG_SUFFIX,
) -> Iterator[LogFile]:
    """Log files at any depth under root modified within the closed range."""
    on_error = lambda e: record_failure(failures, e.filename or root, e, label)  # noqa: E731
    for path in iter_log_files(root, suffix, on_error=on_error):
        try:
            info = stat_log_file(path)
        except FileReadError as e:
            record_failure(failures, path, e, label)
            continue
        if period.contains(info.modified):
            yield info


class DateRangeCollector:
    def __init__(self, suffix: str = LOG_SUFFIX) -> None:
        self.suffix = suffix
        self._orchestrator = RootOrchestrator()

    def collect(self, roots: list[str], period: DateRange) -> OperationResult[int]:
        counts: dict[str, int] = {}

        def job(root: str, failures: list[UnitFailure]) -> None:
            counts[root] = counts.get(root, 0) + self.count_root(root, period, failures)

        failures = self._orchestrator.run(roots, "count logs", job)
        return OperationResult.build(sum(counts.values()), failures)

    def count_root(self, root: str, period: DateRange, failures: list[UnitFailure]) -> int:
        return sum(1 for _ in iter_in_range(root, period, failures, "count logs", self.suffix))
