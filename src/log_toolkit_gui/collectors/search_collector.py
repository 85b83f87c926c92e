from __future__ import annotations

from log_toolkit_gui.models.common import OperationResult, UnitFailure
from log_toolkit_gui.models.logs import SearchResult
from log_toolkit_gui.services.log_files import DEFAULT_ENCODING, LOG_SUFFIX, iter_root_lines
from log_toolkit_gui.services.orchestrator import RootOrchestrator


class LogSearchCollector:
    def __init__(self, suffix: str = LOG_SUFFIX, encoding: str = DEFAULT_ENCODING) -> None:
        self.suffix = suffix
        self.encoding = encoding
        self._orchestrator = RootOrchestrator()

    def collect(self, roots: list[str], query: str) -> OperationResult[list[SearchResult]]:
        results: list[SearchResult] = []
        failures = self._orchestrator.run(
            roots,
            "search",
            lambda root, f: self.search_root(root, query, results, f),
        )
        return OperationResult.build(results, failures)

    def collect_directory(self, root: str, query: str) -> OperationResult[list[SearchResult]]:
        # Single root: DirectoryNotFound reaches the caller.
        results: list[SearchResult] = []
        failures: list[UnitFailure] = []
        self.search_root(root, query, results, failures)
        return OperationResult.build(results, failures)

    def search_root(
        self,
        root: str,
        query: str,
        results: list[SearchResult],
        failures: list[UnitFailure],
    ) -> None:
        for line in iter_root_lines(root, failures, "search", self.suffix, self.encoding):
            if query in line.text:
                results.append(SearchResult(file_path=line.file_path, line=line.text.strip()))
