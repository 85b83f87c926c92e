from __future__ import annotations

import html
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from log_toolkit_gui.models.common import OperationResult
from log_toolkit_gui.models.logs import ArchiveSummary, DeleteResult, FrequencyReport, SearchResult, SizeResult

COUNT_HEADER = "Error count is: "
DUPLICATE_HEADER = "Duplicate Count is: "


@dataclass(frozen=True)
class ReportBundle:
    text: str
    html: str


class ReportService:
    def frequency_text(self, header: str, table: Mapping[str, int]) -> str:
        body = "".join(f"Error: {line}, Count: {count}\n" for line, count in table.items())
        return header + body

    def build_report(
        self,
        *,
        search: OperationResult[list[SearchResult]] | None = None,
        sizes: OperationResult[list[SizeResult]] | None = None,
        frequency: OperationResult[FrequencyReport] | None = None,
        total_logs: OperationResult[int] | None = None,
        archive: OperationResult[ArchiveSummary] | None = None,
        delete: OperationResult[DeleteResult] | None = None,
    ) -> ReportBundle:
        now = datetime.now().strftime("%F %T")

        lines: list[str] = [f"Log Toolkit Report @ {now}", ""]
        lines.append(self._section_search(search))
        lines.append(self._section_sizes(sizes))
        lines.append(self._section_frequency(frequency))
        lines.append(self._section_maintenance(total_logs, archive, delete))
        text_out = "\n".join(lines).strip() + "\n"

        html_out = self._wrap_html(text_out)
        return ReportBundle(text=text_out, html=html_out)

    def default_report_path(self) -> Path:
        base = Path.home() / "log_toolkit_reports"
        base.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        return base / f"log_report_{ts}.html"

    def write_html(self, path: str | os.PathLike[str], html_str: str) -> str:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(html_str, encoding="utf-8")
        return str(p)

    def _header(self, title: str, r: OperationResult) -> str:
        return (
            f"[{title}]\n"
            f"- ts: {r.ts:%F %T}\n"
            f"- status: {r.status} (skipped={r.warning_count})\n"
        )

    def _section_search(self, r: OperationResult[list[SearchResult]] | None) -> str:
        if r is None:
            return "[Search]\n- no data\n"
        rows = "\n".join([f"  - {m.file_path}: {m.line}" for m in r.data[:50]])
        return self._header("Search", r) + f"- matches: {len(r.data)}\n" + (rows + "\n" if rows else "")

    def _section_sizes(self, r: OperationResult[list[SizeResult]] | None) -> str:
        if r is None:
            return "[Size]\n- no data\n"
        rows = "\n".join([f"  - {s.size_kb} KB {s.file_path}" for s in r.data[:50]])
        return self._header("Size", r) + f"- files: {len(r.data)}\n" + (rows + "\n" if rows else "")

    def _section_frequency(self, r: OperationResult[FrequencyReport] | None) -> str:
        if r is None:
            return "[Frequency]\n- no data\n"
        d = r.data
        rows = "\n".join([f"  - {count} x {line}" for line, count in d.top(20)])
        return (
            self._header("Frequency", r)
            + f"- policy: {d.policy}\n"
            + f"- distinct_lines: {len(d.table)}\n"
            + (rows + "\n" if rows else "")
        )

    def _section_maintenance(
        self,
        total: OperationResult[int] | None,
        archive: OperationResult[ArchiveSummary] | None,
        delete: OperationResult[DeleteResult] | None,
    ) -> str:
        if total is None and archive is None and delete is None:
            return "[Maintenance]\n- no data\n"
        out = ["[Maintenance]"]
        if total is not None:
            out.append(f"- total_logs_in_period: {total.data}")
        if archive is not None:
            out.append(f"- archive: {archive.data.message} ({len(archive.data.artifacts)} root(s))")
        if delete is not None:
            out.append(f"- delete: {delete.data.root} removed {len(delete.data.deleted)} file(s)")
        return "\n".join(out) + "\n"

    def _wrap_html(self, text_out: str) -> str:
        escaped = html.escape(text_out)
        return (
            "<!doctype html>"
            "<html><head><meta charset='utf-8'>"
            "<meta name='viewport' content='width=device-width, initial-scale=1'>"
            "<title>Log Toolkit Report</title>"
            "<style>body{font-family:ui-monospace,Menlo,Consolas,monospace;margin:24px;}"
            "pre{white-space:pre-wrap;line-height:1.35;}"
            "</style></head><body>"
            "<h1>Log Toolkit Report</h1>"
            f"<pre>{escaped}</pre>"
            "</body></html>"
        )
