from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from log_toolkit_gui.models.common import UnitFailure


@dataclass(frozen=True)
class LogFile:
    path: str
    size_bytes: int
    modified: datetime

    @property
    def size_kb(self) -> int:
        return self.size_bytes // 1024


@dataclass(frozen=True)
class LogLine:
    file_path: str
    text: str


@dataclass(frozen=True)
class SearchResult:
    file_path: str
    line: str


@dataclass(frozen=True)
class SizeResult:
    file_path: str
    size_kb: int


@dataclass(frozen=True)
class DateRange:
    """Closed interval on modification time. No normalisation: start > end matches nothing."""

    start: datetime
    end: datetime

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end

    def archive_name(self) -> str:
        return f"{self.start:%d_%m_%Y}-{self.end:%d_%m_%Y}.zip"


@dataclass(frozen=True)
class FrequencyReport:
    policy: str
    table: dict[str, int]
    text: str

    def top(self, n: int | None = None) -> list[tuple[str, int]]:
        rows = sorted(self.table.items(), key=lambda kv: kv[1], reverse=True)
        return rows if n is None else rows[:n]


@dataclass(frozen=True)
class DeleteResult:
    root: str
    deleted: list[str]
    failures: list[UnitFailure] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "Logs deleted successfully."


@dataclass(frozen=True)
class ArchiveArtifact:
    root: str
    zip_path: str
    entries: list[str]
    deleted: list[str]


@dataclass(frozen=True)
class ArchiveSummary:
    zip_name: str
    artifacts: list[ArchiveArtifact]

    @property
    def message(self) -> str:
        return f"Logs archived to {self.zip_name} successfully."


@dataclass(frozen=True)
class RootUsage:
    root: str
    log_files: int
    log_bytes: int
    total_gb: float
    used_gb: float
    free_gb: float
    used_percent: int
