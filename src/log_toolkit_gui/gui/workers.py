from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from log_toolkit_gui.errors import LogToolkitError

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    result = Signal(str, object)
    error = Signal(str, str)
    finished = Signal()


@dataclass(frozen=True)
class WorkerJob:
    op: str
    fn: Callable[[], Any]


class Worker(QRunnable):
    """Runs one toolkit operation off the UI thread and reports back by signal."""

    def __init__(self, job: WorkerJob) -> None:
        super().__init__()
        self.job = job
        self.signals = WorkerSignals()
        self.setAutoDelete(False)

    @Slot()
    def run(self) -> None:
        try:
            res = self.job.fn()
            self.signals.result.emit(self.job.op, res)
        except LogToolkitError as e:
            self.signals.error.emit(self.job.op, f"{e.kind}: {e}")
        except Exception as e:  # noqa: BLE001
            logger.exception("%s crashed", self.job.op)
            self.signals.error.emit(self.job.op, str(e))
        finally:
            self.signals.finished.emit()
