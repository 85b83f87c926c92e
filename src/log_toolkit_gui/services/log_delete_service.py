from __future__ import annotations

import logging
import os
import stat

from log_toolkit_gui.errors import AccessDenied, DirectoryNotFound, FileDeleteError, FileReadError
from log_toolkit_gui.models.common import UnitFailure
from log_toolkit_gui.models.logs import DateRange, DeleteResult
from log_toolkit_gui.services.log_files import LOG_SUFFIX, is_log_file, stat_log_file
from log_toolkit_gui.services.orchestrator import record_failure

logger = logging.getLogger(__name__)

LABEL = "delete logs"


class LogDeleteService:
    """Removes log files modified within a closed date range, depth first.

    Only the root itself can fail the call: a missing root raises
    DirectoryNotFound and an unlistable root raises AccessDenied. Files that
    cannot be removed and subdirectories that cannot be listed are recorded on
    the result and skipped.
    """

    def __init__(self, suffix: str = LOG_SUFFIX) -> None:
        self.suffix = suffix

    def delete_in_range(self, root: str, period: DateRange, only: set[str] | None = None) -> DeleteResult:
        """Delete in-range logs under root.

        When ``only`` is given, files outside that set are left alone even if
        they fall in the range.
        """
        try:
            st = os.stat(root)
        except FileNotFoundError as e:
            raise DirectoryNotFound(str(root)) from e
        except PermissionError as e:
            raise AccessDenied(f"Access denied. {e}", path=str(root)) from e
        except OSError as e:
            raise DirectoryNotFound(str(root)) from e
        if not stat.S_ISDIR(st.st_mode):
            raise DirectoryNotFound(str(root))
        try:
            entries = self._list(root)
        except FileNotFoundError as e:
            raise DirectoryNotFound(str(root)) from e
        except PermissionError as e:
            raise AccessDenied(f"Access denied. {e}", path=str(root)) from e

        deleted: list[str] = []
        failures: list[UnitFailure] = []
        allowed = {os.path.normpath(p) for p in only} if only is not None else None
        self._sweep(entries, period, deleted, failures, allowed)
        if deleted:
            logger.info("deleted %d log file(s) under %s", len(deleted), root)
        return DeleteResult(root=str(root), deleted=deleted, failures=failures)

    def _list(self, directory: str) -> list[os.DirEntry[str]]:
        with os.scandir(directory) as it:
            return list(it)

    def _sweep(
        self,
        entries: list[os.DirEntry[str]],
        period: DateRange,
        deleted: list[str],
        failures: list[UnitFailure],
        allowed: set[str] | None = None,
    ) -> None:
        subdirs: list[str] = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path)
                    continue
                if not entry.is_file() or not is_log_file(entry.name, self.suffix):
                    continue
            except OSError as e:
                record_failure(failures, entry.path, e, LABEL)
                continue
            if allowed is not None and os.path.normpath(entry.path) not in allowed:
                continue
            self._delete_if_in_range(entry.path, period, deleted, failures)

        for sub in subdirs:
            try:
                sub_entries = self._list(sub)
            except OSError as e:
                record_failure(failures, sub, e, LABEL)
                continue
            self._sweep(sub_entries, period, deleted, failures, allowed)

    def _delete_if_in_range(
        self,
        path: str,
        period: DateRange,
        deleted: list[str],
        failures: list[UnitFailure],
    ) -> None:
        try:
            info = stat_log_file(path)
        except FileReadError as e:
            record_failure(failures, path, e, LABEL)
            return
        if not period.contains(info.modified):
            return
        try:
            os.remove(path)
        except OSError as e:
            err = FileDeleteError(f"Error deleting file {path}: {e}", path=path)
            record_failure(failures, path, err, LABEL)
            return
        logger.debug("deleted %s", path)
        deleted.append(path)
