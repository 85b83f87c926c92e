from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from log_toolkit_gui.errors import failure_kind
from log_toolkit_gui.models.common import UnitFailure

logger = logging.getLogger(__name__)

RootJob = Callable[[str, list[UnitFailure]], None]


def record_failure(failures: list[UnitFailure], unit: str, exc: BaseException, label: str) -> None:
    failures.append(UnitFailure(unit=unit, kind=failure_kind(exc), message=str(exc)))
    logger.warning("%s: skipped %s: %s", label, unit, exc)


class RootOrchestrator:
    """Runs one job per root directory, absorbing failures root by root."""

    def run(self, roots: Iterable[str], label: str, job: RootJob) -> list[UnitFailure]:
        failures: list[UnitFailure] = []
        for root in roots:
            try:
                job(root, failures)
            except Exception as e:  # noqa: BLE001
                record_failure(failures, root, e, label)
        return failures
