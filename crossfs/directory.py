"""Directory creation, enumeration and removal."""

from __future__ import annotations

import logging
from typing import Any

from .errors import CreateError, RemoveError
from .file import File
from .path import Path, PathLike, as_path

logger = logging.getLogger(__name__)


class Directory:
    """A directory at a given path.

    Args:
        path: Location of the directory, as a Path or anything Path accepts.
        host: Host for a plain string ``path``. A Path keeps its own host.
    """

    def __init__(self, path: PathLike, host: Any = None) -> None:
        self._path = as_path(path, host)

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"Directory({str(self._path)!r})"

    def exists(self) -> bool:
        """True only for an existing directory."""
        return self._path.exists() and self._path.is_directory()

    def create(self) -> None:
        """Create the directory. Missing parents are not created.

        Succeeds if a directory is already there.

        Raises:
            CreateError: On any other failure, including a file occupying
                the path.
        """
        try:
            self._path.host.mkdir(str(self._path))
        except FileExistsError as exc:
            if self._path.is_directory():
                return
            raise CreateError.from_os_error("create", str(self._path), exc) from exc
        except (OSError, ValueError) as exc:
            raise CreateError.from_os_error("create", str(self._path), exc) from exc
        logger.debug("Created directory %s", self._path)

    def remove(self, recursive: bool = False) -> None:
        """Remove the directory.

        Without ``recursive`` the directory must be empty. With it, every
        child is removed first, depth first, then the directory itself.
        There is no rollback: on the first failure the error propagates and
        whatever was already deleted stays deleted. Symbolic links are
        deleted, never followed. A directory that is itself a symbolic
        link is not descended into, so its target is left intact.

        Raises:
            RemoveError: If the directory itself cannot be removed.
            DeleteError: If a file inside it cannot be deleted.
        """
        if recursive and not self._path.is_link():
            for entry in self.list():
                if entry.is_directory() and not entry.is_link():
                    logger.debug("Descending into %s", entry)
                    Directory(entry).remove(recursive=True)
                else:
                    File(entry).remove()
        try:
            self._path.host.rmdir(str(self._path))
        except (OSError, ValueError) as exc:
            raise RemoveError.from_os_error("remove", str(self._path), exc) from exc
        logger.debug("Removed directory %s", self._path)

    def list(self, recursive: bool = False) -> list[Path]:
        """List children in host enumeration order.

        With ``recursive``, each subdirectory's own listing follows its
        entry (depth-first pre-order), so the result mixes files and
        directories from every level.

        A missing or unreadable directory lists as empty.
        """
        try:
            entries = self._path.host.scandir(str(self._path))
        except (OSError, ValueError):
            return []

        result: list[Path] = []
        for name, is_dir in entries:
            if name in (".", ".."):
                continue
            child = self._path.joinpath(name)
            result.append(child)
            if recursive and is_dir:
                result.extend(Directory(child).list(recursive=True))
        return result
