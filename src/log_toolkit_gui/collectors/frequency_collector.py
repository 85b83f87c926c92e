from __future__ import annotations

from collections import Counter

from log_toolkit_gui.models.common import OperationResult, UnitFailure
from log_toolkit_gui.services.log_files import DEFAULT_ENCODING, LOG_SUFFIX, iter_root_lines
from log_toolkit_gui.services.orchestrator import RootOrchestrator

ALL = "all"
DUPLICATES = "duplicates"


class FrequencyCollector:
    """Counts identical lines across every root of one request.

    ``all`` counts every occurrence. ``duplicates`` lets the first sighting of
    a line through uncounted, so a line seen N times reports N - 1 and a line
    seen once never appears.
    """

    def __init__(self, suffix: str = LOG_SUFFIX, encoding: str = DEFAULT_ENCODING) -> None:
        self.suffix = suffix
        self.encoding = encoding
        self._orchestrator = RootOrchestrator()

    def collect(self, roots: list[str], policy: str = ALL) -> OperationResult[Counter[str]]:
        if policy not in (ALL, DUPLICATES):
            raise ValueError(f"unknown counting policy: {policy}")

        table: Counter[str] = Counter()
        seen: set[str] = set()

        def job(root: str, failures: list[UnitFailure]) -> None:
            if policy == ALL:
                self.count_all(root, table, failures)
            else:
                self.count_duplicates(root, table, seen, failures)

        failures = self._orchestrator.run(roots, f"count {policy}", job)
        return OperationResult.build(table, failures)

    def count_all(self, root: str, table: Counter[str], failures: list[UnitFailure]) -> None:
        for line in iter_root_lines(root, failures, "count all", self.suffix, self.encoding):
            table[line.text] += 1

    def count_duplicates(
        self,
        root: str,
        table: Counter[str],
        seen: set[str],
        failures: list[UnitFailure],
    ) -> None:
        for line in iter_root_lines(root, failures, "count duplicates", self.suffix, self.encoding):
            if line.text not in seen:
                seen.add(line.text)
                continue
            table[line.text] += 1
