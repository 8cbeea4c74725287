"""Error kinds raised by crossfs operations.

Probing operations (existence checks, directory listing) never raise these.
Everything that reads, writes or mutates does, with the failing operation
and path attached and the underlying OSError chained as ``__cause__``.
"""

from __future__ import annotations


class FileSystemError(Exception):
    """Base class for all explicit crossfs failures.

    Attributes:
        operation: Short name of the operation that failed (e.g. "remove").
        path: String form of the path the operation targeted.
        reason: Human readable cause, usually the host's strerror.
    """

    def __init__(self, operation: str, path: str, reason: str = "") -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        message = f"{operation} failed"
        if path:
            message = f"{message} for '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    @classmethod
    def from_os_error(cls, operation: str, path: str, exc: BaseException):
        reason = getattr(exc, "strerror", None) or str(exc) or type(exc).__name__
        return cls(operation, path, reason)


class FileSystemUnavailable(FileSystemError):
    """A well-known directory (temp, home, cwd) could not be resolved."""


class MetadataError(FileSystemError):
    """Host metadata lookup failed."""


class OpenError(FileSystemError):
    """A file handle could not be acquired."""


class ReadError(FileSystemError):
    """Reading from an open handle failed."""


class WriteError(FileSystemError):
    """Writing to an open handle failed."""


class DeleteError(FileSystemError):
    """A single file could not be deleted."""


class CreateError(FileSystemError):
    """A directory could not be created."""


class RemoveError(FileSystemError):
    """A directory could not be removed."""
