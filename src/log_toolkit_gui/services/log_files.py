from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

from log_toolkit_gui.errors import DirectoryNotFound, FileReadError
from log_toolkit_gui.models.common import UnitFailure
from log_toolkit_gui.models.logs import LogFile, LogLine
from log_toolkit_gui.services.orchestrator import record_failure

logger = logging.getLogger(__name__)

LOG_SUFFIX = ".log"
# Strips a leading byte-order mark; plain UTF-8 files decode the same.
DEFAULT_ENCODING = "utf-8-sig"


def is_log_file(name: str, suffix: str = LOG_SUFFIX) -> bool:
    return name.endswith(suffix)


def require_dir(root: str | os.PathLike[str]) -> Path:
    p = Path(root)
    if not p.is_dir():
        raise DirectoryNotFound(str(root))
    return p


def iter_log_files(
    root: str | os.PathLike[str],
    suffix: str = LOG_SUFFIX,
    on_error: Callable[[OSError], None] | None = None,
) -> Iterator[str]:
    """Yield every log file path at any depth under root.

    The root check happens eagerly so a missing root fails before the caller
    starts iterating. Unreadable subdirectories go to ``on_error`` and are
    skipped; directory symlinks are not followed.
    """
    p = require_dir(root)
    return _walk(p, suffix, on_error)


def _walk(root: Path, suffix: str, on_error: Callable[[OSError], None] | None) -> Iterator[str]:
    for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
        for fn in filenames:
            if is_log_file(fn, suffix):
                yield os.path.join(dirpath, fn)


def read_lines(path: str | os.PathLike[str], encoding: str = DEFAULT_ENCODING) -> Iterator[str]:
    """Yield the lines of one file without their terminator.

    Raises FileReadError if the file cannot be opened or a read fails part way;
    lines already yielded stay yielded.
    """
    try:
        with open(path, "r", encoding=encoding, errors="replace") as f:
            for line in f:
                yield line.rstrip("\n")
    except OSError as e:
        raise FileReadError(f"Error reading file {path}: {e}", path=str(path)) from e


def iter_root_lines(
    root: str,
    failures: list[UnitFailure],
    label: str,
    suffix: str = LOG_SUFFIX,
    encoding: str = DEFAULT_ENCODING,
) -> Iterator[LogLine]:
    """Every line of every log file under root; unreadable files are recorded and skipped."""
    files = iter_log_files(root, suffix, on_error=lambda e: record_failure(failures, e.filename or root, e, label))
    for path in files:
        logger.debug("scanning %s", path)
        try:
            for text in read_lines(path, encoding):
                yield LogLine(file_path=path, text=text)
        except FileReadError as e:
            record_failure(failures, path, e, label)


def stat_log_file(path: str | os.PathLike[str]) -> LogFile:
    try:
        st = os.stat(path)
    except OSError as e:
        raise FileReadError(f"stat failed for {path}: {e}", path=str(path)) from e
    return LogFile(
        path=str(path),
        size_bytes=int(st.st_size),
        modified=datetime.fromtimestamp(st.st_mtime),
    )
