from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path

from log_toolkit_gui.collectors.date_range_collector import iter_in_range
from log_toolkit_gui.errors import FileWriteError
from log_toolkit_gui.models.common import OperationResult, UnitFailure
from log_toolkit_gui.models.logs import ArchiveArtifact, ArchiveSummary, DateRange
from log_toolkit_gui.services.log_delete_service import LogDeleteService
from log_toolkit_gui.services.log_files import LOG_SUFFIX, require_dir
from log_toolkit_gui.services.orchestrator import RootOrchestrator

logger = logging.getLogger(__name__)

LABEL = "archive logs"


class LogArchiveService:
    def __init__(
        self,
        suffix: str = LOG_SUFFIX,
        deleter: LogDeleteService | None = None,
        compression: int = zipfile.ZIP_DEFLATED,
    ) -> None:
        self.suffix = suffix
        self.compression = compression
        self._deleter = deleter or LogDeleteService(suffix=suffix)
        self._orchestrator = RootOrchestrator()

    def archive(self, roots: list[str], period: DateRange) -> OperationResult[ArchiveSummary]:
        zip_name = period.archive_name()
        artifacts: list[ArchiveArtifact] = []
        failures = self._orchestrator.run(
            roots,
            LABEL,
            lambda root, f: artifacts.append(self.archive_root(root, period, zip_name, f)),
        )
        return OperationResult.build(ArchiveSummary(zip_name=zip_name, artifacts=artifacts), failures)

    def archive_root(
        self,
        root: str,
        period: DateRange,
        zip_name: str,
        failures: list[UnitFailure],
    ) -> ArchiveArtifact:
        """Zip the in-range logs of one root into ``<root>/<zip_name>``, then delete them.

        Entries are stored flat under their base name; when two files share a
        base name the one enumerated later replaces the earlier one. Nothing is
        deleted unless the archive was written completely, and only files seen
        by this scan are deleted.
        """
        dest = require_dir(root) / zip_name

        members: dict[str, str] = {}
        scanned: set[str] = set()
        for info in iter_in_range(root, period, failures, LABEL, self.suffix):
            scanned.add(info.path)
            name = os.path.basename(info.path)
            if name in members:
                logger.warning("%s: %s replaces %s in %s", LABEL, info.path, members[name], zip_name)
            members[name] = info.path

        self._write_zip(dest, members)
        logger.info("archived %d log file(s) into %s", len(members), dest)

        # Only files seen by the scan above may be deleted.
        result = self._deleter.delete_in_range(root, period, only=scanned)
        failures.extend(result.failures)
        return ArchiveArtifact(
            root=str(root),
            zip_path=str(dest),
            entries=list(members.keys()),
            deleted=result.deleted,
        )

    def _write_zip(self, dest: Path, members: dict[str, str]) -> None:
        try:
            zf = zipfile.ZipFile(dest, "x", compression=self.compression, strict_timestamps=False)
        except FileExistsError as e:
            raise FileWriteError(f"Archive already exists: {dest}", path=str(dest)) from e
        except OSError as e:
            raise FileWriteError(f"Error creating archive {dest}: {e}", path=str(dest)) from e

        try:
            with zf:
                for name, path in members.items():
                    zf.write(path, arcname=name)
        except (OSError, ValueError) as e:
            dest.unlink(missing_ok=True)
            raise FileWriteError(f"Error archiving logs into {dest}: {e}", path=str(dest)) from e
