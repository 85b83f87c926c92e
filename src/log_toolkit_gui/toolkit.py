from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import TypeVar

from log_toolkit_gui.collectors.date_range_collector import DateRangeCollector
from log_toolkit_gui.collectors.frequency_collector import ALL, DUPLICATES, FrequencyCollector
from log_toolkit_gui.collectors.search_collector import LogSearchCollector
from log_toolkit_gui.collectors.size_collector import SizeFilterCollector
from log_toolkit_gui.errors import AggregationFailure, InvalidInput, LogToolkitError, UnknownFailure
from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.models.logs import (
    ArchiveSummary,
    DateRange,
    DeleteResult,
    FrequencyReport,
    SearchResult,
    SizeResult,
)
from log_toolkit_gui.services.config_service import ToolkitConfig
from log_toolkit_gui.services.log_archive_service import LogArchiveService
from log_toolkit_gui.services.log_delete_service import LogDeleteService
from log_toolkit_gui.services.report_service import COUNT_HEADER, DUPLICATE_HEADER, ReportService

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def _guarded(fn: F) -> F:
    """Re-raise anything that is not already a toolkit failure as UnknownFailure."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except LogToolkitError:
            raise
        except Exception as e:
            logger.exception("%s failed", fn.__name__)
            raise UnknownFailure(f"Unknown error occurred while processing the request: {e}") from e

    return wrapper  # type: ignore[return-value]


def _roots(roots: Sequence[str] | None, what: str) -> list[str]:
    if isinstance(roots, str):
        roots = [roots]
    cleaned = [str(r) for r in (roots or []) if r and str(r).strip()]
    if not cleaned:
        raise InvalidInput(f"{what} parameters are required.")
    return cleaned


def _as_datetime(value: datetime | date | None) -> datetime | None:
    if isinstance(value, datetime):
        # File times are compared as local naive datetimes.
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


def _period(start: datetime | date | None, end: datetime | date | None, what: str) -> DateRange:
    s = _as_datetime(start)
    e = _as_datetime(end)
    if s is None or e is None:
        raise InvalidInput(f"{what}, fromDate, and toDate parameters are required.")
    return DateRange(start=s, end=e)


class LogToolkit:
    """Caller-facing operations over one or more log directory trees.

    Multi-root operations return whatever they could gather and list the roots
    and files they skipped on ``OperationResult.failures``. Single-root
    operations (``delete_logs``, ``search_by_directory``) raise when the root
    itself is unusable.
    """

    def __init__(self, config: ToolkitConfig | None = None, reporter: ReportService | None = None) -> None:
        cfg = config or ToolkitConfig()
        self.config = cfg
        self._reporter = reporter or ReportService()
        self._search = LogSearchCollector(suffix=cfg.suffix, encoding=cfg.encoding)
        self._frequency = FrequencyCollector(suffix=cfg.suffix, encoding=cfg.encoding)
        self._sizes = SizeFilterCollector(suffix=cfg.suffix)
        self._dates = DateRangeCollector(suffix=cfg.suffix)
        self._deleter = LogDeleteService(suffix=cfg.suffix)
        self._archiver = LogArchiveService(suffix=cfg.suffix, deleter=self._deleter)

    @_guarded
    def search(self, roots: Sequence[str], query: str) -> OperationResult[list[SearchResult]]:
        roots = _roots(roots, "Directories and query")
        if not query:
            raise InvalidInput("Directories and query parameters are required.")
        return self._search.collect(roots, query)

    @_guarded
    def search_by_directory(self, root: str, query: str) -> OperationResult[list[SearchResult]]:
        if not root or not query:
            raise InvalidInput("Directory and query parameters are required.")
        return self._search.collect_directory(root, query)

    @_guarded
    def count_errors(self, roots: Sequence[str]) -> OperationResult[FrequencyReport]:
        return self._count(_roots(roots, "Directories"), ALL, COUNT_HEADER)

    @_guarded
    def count_duplicate_errors(self, roots: Sequence[str]) -> OperationResult[FrequencyReport]:
        return self._count(_roots(roots, "Directories"), DUPLICATES, DUPLICATE_HEADER)

    def _count(self, roots: list[str], policy: str, header: str) -> OperationResult[FrequencyReport]:
        res = self._frequency.collect(roots, policy)
        table = dict(res.data)
        try:
            text = self._reporter.frequency_text(header, table)
        except Exception as e:
            raise AggregationFailure(f"Error occurred while executing count query: {e}") from e
        report = FrequencyReport(policy=policy, table=table, text=text)
        return OperationResult(ts=res.ts, status=res.status, data=report, failures=res.failures)

    @_guarded
    def delete_logs(
        self,
        root: str,
        start: datetime | date | None,
        end: datetime | date | None,
    ) -> OperationResult[DeleteResult]:
        if not root:
            raise InvalidInput("Directory, fromDate, and toDate parameters are required.")
        period = _period(start, end, "Directory")
        result = self._deleter.delete_in_range(root, period)
        return OperationResult.build(result, result.failures)

    @_guarded
    def archive_logs(
        self,
        roots: Sequence[str],
        start: datetime | date | None,
        end: datetime | date | None,
    ) -> OperationResult[ArchiveSummary]:
        roots = _roots(roots, "Directories, fromDate, and toDate")
        return self._archiver.archive(roots, _period(start, end, "Directories"))

    @_guarded
    def count_total_logs(
        self,
        roots: Sequence[str],
        start: datetime | date | None,
        end: datetime | date | None,
    ) -> OperationResult[int]:
        roots = _roots(roots, "Directories, fromDate, and toDate")
        return self._dates.collect(roots, _period(start, end, "Directories"))

    @_guarded
    def search_by_size(self, roots: Sequence[str], min_kb: int, max_kb: int) -> OperationResult[list[SizeResult]]:
        roots = _roots(roots, "Directories, minSizeKB, and maxSizeKB")
        if min_kb is None or max_kb is None or min_kb < 0 or max_kb < min_kb:
            raise InvalidInput("Directories, minSizeKB, and maxSizeKB parameters are required and must be valid.")
        return self._sizes.collect(roots, int(min_kb), int(max_kb))
