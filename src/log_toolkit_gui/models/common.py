from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class UnitFailure:
    """A file or root that was skipped, and why."""

    unit: str
    kind: str
    message: str


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    ts: datetime
    status: str
    data: T
    failures: list[UnitFailure] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.failures)

    @classmethod
    def build(cls, data: T, failures: list[UnitFailure]) -> "OperationResult[T]":
        return cls(
            ts=datetime.now(),
            status="OK" if not failures else "WARN",
            data=data,
            failures=list(failures),
        )
