from __future__ import annotations


class LogToolkitError(Exception):
    """Base for every failure signal raised by the log toolkit."""

    kind = "UnknownFailure"

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidInput(LogToolkitError):
    kind = "InvalidInput"


class DirectoryNotFound(LogToolkitError):
    kind = "DirectoryNotFound"

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory not found: {path}", path=path)


class AccessDenied(LogToolkitError):
    kind = "AccessDenied"


class FileReadError(LogToolkitError):
    kind = "FileReadError"


class FileWriteError(LogToolkitError):
    kind = "FileWriteError"


class FileDeleteError(LogToolkitError):
    kind = "FileDeleteError"


class AggregationFailure(LogToolkitError):
    kind = "AggregationFailure"


class UnknownFailure(LogToolkitError):
    kind = "UnknownFailure"


def failure_kind(exc: BaseException) -> str:
    if isinstance(exc, LogToolkitError):
        return exc.kind
    if isinstance(exc, FileNotFoundError):
        return DirectoryNotFound.kind
    if isinstance(exc, PermissionError):
        return AccessDenied.kind
    return type(exc).__name__
