"""Whole-file operations on a single path."""

from __future__ import annotations

import logging
import os
from typing import Any, BinaryIO, Iterable

from .errors import (
    DeleteError,
    MetadataError,
    OpenError,
    ReadError,
    WriteError,
)
from .path import Path, PathLike, as_path

logger = logging.getLogger(__name__)

# Lets any byte sequence survive a read_text/write_text round trip.
TEXT_ERRORS = "surrogateescape"

COPY_CHUNK_SIZE = 64 * 1024


class File:
    """A regular file at a given path.

    Nothing is cached: every call is a fresh round trip to the host, so two
    calls in a row may see different results if something else changes the
    file in between.

    Args:
        path: Location of the file, as a Path or anything Path accepts.
        host: Host for a plain string ``path``. A Path keeps its own host.
    """

    def __init__(self, path: PathLike, host: Any = None) -> None:
        self._path = as_path(path, host)

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"File({str(self._path)!r})"

    def exists(self) -> bool:
        """True only for an existing regular file (not a directory)."""
        return self._path.exists() and self._path.is_file()

    def size(self) -> int:
        """Size in bytes.

        Raises:
            MetadataError: If the host cannot stat the path.
        """
        try:
            st = self._path.host.stat(str(self._path))
        except (OSError, ValueError) as exc:
            raise MetadataError.from_os_error("size", str(self._path), exc) from exc
        return st.st_size

    def _open(self, operation: str, mode: str) -> BinaryIO:
        try:
            return self._path.host.open(str(self._path), mode)
        except (OSError, ValueError) as exc:
            raise OpenError.from_os_error(operation, str(self._path), exc) from exc

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def read_bytes(self) -> bytes:
        """Read the whole file.

        Raises:
            OpenError: If the file cannot be opened for reading.
            ReadError: If reading fails once opened.
        """
        handle = self._open("read", "rb")
        try:
            with handle:
                handle.seek(0, os.SEEK_END)
                length = handle.tell()
                handle.seek(0, os.SEEK_SET)
                return handle.read(length)
        except OSError as exc:
            raise ReadError.from_os_error("read", str(self._path), exc) from exc

    def read_text(self, encoding: str = "utf-8") -> str:
        """Read the whole file as text, without newline translation."""
        return self.read_bytes().decode(encoding, TEXT_ERRORS)

    def write_bytes(self, content: bytes | bytearray | Iterable[int]) -> None:
        """Replace the file's content, creating the file if needed.

        Raises:
            OpenError: If the file cannot be opened for writing.
            WriteError: If writing fails once opened.
        """
        data = bytes(content)
        handle = self._open("write", "wb")
        try:
            with handle:
                handle.write(data)
        except OSError as exc:
            raise WriteError.from_os_error("write", str(self._path), exc) from exc
        logger.debug("Wrote %d bytes to %s", len(data), self._path)

    def write_text(self, content: str, encoding: str = "utf-8") -> None:
        self.write_bytes(content.encode(encoding, TEXT_ERRORS))

    # -------------------------------------------------------------------------
    # Single-entry operations
    # -------------------------------------------------------------------------

    def copy(self, destination: PathLike) -> None:
        """Copy the file's bytes to ``destination``, overwriting it.

        ``destination`` may live on another host. Copying a file onto
        itself leaves it untouched.

        Raises:
            OpenError: If either endpoint cannot be opened.
            ReadError: If reading the source fails part way.
            WriteError: If writing the destination fails part way.
        """
        target = File(as_path(destination, self._path.host))
        source = self._open("copy", "rb")
        with source:
            if self._same_file(target.path):
                logger.debug("Skipped copy of %s onto itself", self._path)
                return
            sink = target._open("copy", "wb")
            try:
                with sink:
                    while True:
                        try:
                            chunk = source.read(COPY_CHUNK_SIZE)
                        except OSError as exc:
                            raise ReadError.from_os_error("copy", str(self._path), exc) from exc
                        if not chunk:
                            break
                        sink.write(chunk)
            except OSError as exc:
                raise WriteError.from_os_error("copy", str(target.path), exc) from exc
        logger.debug("Copied %s to %s", self._path, target.path)

    def _same_file(self, other: Path) -> bool:
        """True if ``other`` names this file on the same host."""
        if other.host is not self._path.host:
            return False
        try:
            mine = self._path.host.stat(str(self._path))
            if str(other) == str(self._path):
                return True
            theirs = other.host.stat(str(other))
        except (OSError, ValueError):
            return False
        return mine.st_ino != 0 and (mine.st_dev, mine.st_ino) == (theirs.st_dev, theirs.st_ino)

    def move(self, destination: PathLike) -> None:
        """Move the file to ``destination``.

        Tries a single host rename first. If that fails for any reason
        (e.g. the endpoints are on different devices or hosts), falls back
        to copy then delete. The fallback is not atomic: if it is
        interrupted, or the delete fails, both endpoints may exist.

        Raises:
            OpenError, WriteError: If the fallback copy fails.
            DeleteError: If the fallback cannot delete the source.
        """
        target = as_path(destination, self._path.host)
        host = self._path.host
        if target.host is host:
            try:
                host.rename(str(self._path), str(target))
            except (OSError, ValueError) as exc:
                logger.warning(
                    "Rename of %s to %s failed (%s); falling back to copy and delete",
                    self._path,
                    target,
                    exc,
                )
            else:
                logger.debug("Renamed %s to %s", self._path, target)
                return
            if self._same_file(target):
                return
        self.copy(target)
        self.remove()

    def remove(self) -> None:
        """Delete the file.

        Raises:
            DeleteError: If the host refuses or fails to delete it.
        """
        try:
            self._path.host.unlink(str(self._path))
        except (OSError, ValueError) as exc:
            raise DeleteError.from_os_error("remove", str(self._path), exc) from exc
        logger.debug("Deleted %s", self._path)
