"""Path value type.

A Path is an immutable, normalized path string bound to the host that will
answer questions about it. String derivations (parent, filename, extension,
joining) never touch the filesystem; existence and type predicates ask the
host and answer False instead of raising.
"""

from __future__ import annotations

import os
import stat as stat_mod
from typing import Any, Callable, Union

from .context import get_host
from .errors import FileSystemUnavailable
from .flavours import PathFlavour

PathLike = Union["Path", str, bytes, os.PathLike]


class Path:
    """A filesystem location spelled with the host's native separator.

    Args:
        raw: Path string in any separator convention, a PathLike, or another
            Path (whose host is reused unless ``host`` is given).
        host: Host answering queries about this path. Defaults to the host
            active in the current context (see ``crossfs.context``).

    Construction never fails on malformed input; such paths simply report
    that they do not exist.
    """

    __slots__ = ("_path", "_host")

    def __init__(self, raw: PathLike = "", host: Any = None) -> None:
        if isinstance(raw, Path):
            if host is None:
                host = raw._host
            raw = raw._path
        if host is None:
            host = get_host()
        self._host = host
        self._path = host.flavour.normalize(os.fsdecode(raw))

    @property
    def host(self) -> Any:
        return self._host

    @property
    def flavour(self) -> PathFlavour:
        return self._host.flavour

    def __str__(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"Path({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._path == other._path and self.flavour is other.flavour

    def __hash__(self) -> int:
        return hash((self._path, self.flavour.name))

    def __truediv__(self, name: str) -> Path:
        return self.joinpath(name)

    # -------------------------------------------------------------------------
    # Host queries (never raise)
    # -------------------------------------------------------------------------

    def _probe(self, lookup: Callable[[str], os.stat_result]) -> os.stat_result | None:
        try:
            return lookup(self._path)
        except (OSError, ValueError):
            return None

    def exists(self) -> bool:
        return self._probe(self._host.stat) is not None

    def is_directory(self) -> bool:
        st = self._probe(self._host.stat)
        return st is not None and stat_mod.S_ISDIR(st.st_mode)

    def is_file(self) -> bool:
        st = self._probe(self._host.stat)
        return st is not None and stat_mod.S_ISREG(st.st_mode)

    def is_link(self) -> bool:
        st = self._probe(self._host.lstat)
        return st is not None and stat_mod.S_ISLNK(st.st_mode)

    # -------------------------------------------------------------------------
    # String derivations
    # -------------------------------------------------------------------------

    def parent(self) -> Path:
        """Path up to the last separator.

        A root is its own parent; a path without any separator has "." as
        parent on every flavour.
        """
        return Path(self.flavour.parent(self._path), self._host)

    def filename(self) -> str:
        return self.flavour.filename(self._path)

    def extension(self) -> str:
        """Suffix of filename() from the last "." inclusive, or ""."""
        return self.flavour.extension(self._path)

    def joinpath(self, *names: str) -> Path:
        path = self._path
        for name in names:
            path = self.flavour.join(path, os.fsdecode(name))
        return Path(path, self._host)

    # -------------------------------------------------------------------------
    # Well-known locations
    # -------------------------------------------------------------------------

    @staticmethod
    def temp_directory(host: Any = None) -> Path:
        host = host if host is not None else get_host()
        location = host.temp_directory()
        if not location:
            raise FileSystemUnavailable(
                "temp_directory", "", "no temporary directory configured"
            )
        return Path(location, host)

    @staticmethod
    def home_directory(host: Any = None) -> Path:
        host = host if host is not None else get_host()
        location = host.home_directory()
        if not location:
            raise FileSystemUnavailable(
                "home_directory", "", "no home directory configured"
            )
        return Path(location, host)

    @staticmethod
    def current_directory(host: Any = None) -> Path:
        host = host if host is not None else get_host()
        try:
            location = host.getcwd()
        except OSError as exc:
            raise FileSystemUnavailable.from_os_error(
                "current_directory", "", exc
            ) from exc
        return Path(location, host)

    @staticmethod
    def separator(host: Any = None) -> str:
        host = host if host is not None else get_host()
        return host.flavour.separator


def as_path(value: PathLike, host: Any = None) -> Path:
    """Coerce ``value`` to a Path.

    An existing Path is returned as is, keeping its own host; ``host`` only
    applies to plain strings.
    """
    if isinstance(value, Path):
        return value
    return Path(value, host)
