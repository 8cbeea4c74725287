"""In-memory host implementation."""

from __future__ import annotations

import errno as _errno
import os
import stat as stat_mod
from collections.abc import Mapping
from io import BytesIO
from typing import Any

from .flavours import WINDOWS, PathFlavour, get_flavour


class MemoryHost:
    """Simple in-memory host.

    Stores files as ``bytes`` in a plain dict and tracks directories
    in a set. Implements the full ``Host`` protocol, so Path, File and
    Directory work against it exactly as they do against the real disk.

    Useful for tests, and for exercising Windows path rules on a POSIX
    machine (and vice versa): the root is ``/`` for the posix flavour and
    ``C:\\`` for the windows flavour.
    """

    def __init__(
        self,
        flavour: str | PathFlavour = "posix",
        environ: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> None:
        self.flavour = get_flavour(flavour) if isinstance(flavour, str) else flavour
        self._drive = "C:" if self.flavour is WINDOWS else ""
        self.root = self._drive + self.flavour.separator
        self.files: dict[str, bytes] = {}
        self.dirs: set[str] = {self.root}
        self._environ: Mapping[str, str] = {} if environ is None else environ
        self._cwd = self.root
        if cwd is not None:
            self._cwd = self.makedirs(cwd)

    def __repr__(self) -> str:
        return f"MemoryHost(flavour={self.flavour.name!r})"

    def stat(self, path: str) -> Any:
        path = self._resolve(path)
        if path in self.files:
            size = len(self.files[path])
            return os.stat_result((
                stat_mod.S_IFREG | 0o644,
                0, 0, 1, 1000, 1000,
                size,
                0, 0, 0,
            ))
        if path in self.dirs:
            return os.stat_result((
                stat_mod.S_IFDIR | 0o755,
                0, 0, 2, 1000, 1000,
                0, 0, 0, 0,
            ))
        raise FileNotFoundError(_errno.ENOENT, "No such file or directory", path)

    def lstat(self, path: str) -> Any:
        # No symbolic links in memory.
        return self.stat(path)

    def scandir(self, path: str) -> list[tuple[str, bool]]:
        """List immediate children of a directory, sorted by name."""
        path = self._resolve(path)
        if path in self.files:
            raise NotADirectoryError(_errno.ENOTDIR, "Not a directory", path)
        if path not in self.dirs:
            raise FileNotFoundError(_errno.ENOENT, "No such directory", path)
        sep = self.flavour.separator
        prefix = path.rstrip(sep) + sep
        entries: dict[str, bool] = {}
        for f in self.files:
            if f.startswith(prefix):
                rest = f[len(prefix):]
                name = rest.split(sep)[0]
                entries.setdefault(name, sep in rest)
        for d in self.dirs:
            if d.startswith(prefix) and d != path:
                rest = d[len(prefix):]
                if rest:
                    entries[rest.split(sep)[0]] = True
        return sorted(entries.items())

    def open(self, path: str, mode: str = "rb") -> Any:
        path = self._resolve(path)
        if path in self.dirs:
            raise IsADirectoryError(_errno.EISDIR, "Is a directory", path)
        if mode == "rb":
            if path not in self.files:
                raise FileNotFoundError(_errno.ENOENT, "No such file", path)
            return BytesIO(self.files[path])
        elif mode == "wb":
            parent = self.flavour.pathmod.dirname(path)
            if parent not in self.dirs:
                raise FileNotFoundError(_errno.ENOENT, "No such directory", parent)
            self.files[path] = b""
            buf = BytesIO()
            original_close = buf.close

            def close_and_save() -> None:
                if not buf.closed:
                    self.files[path] = buf.getvalue()
                original_close()

            buf.close = close_and_save  # type: ignore[method-assign]
            return buf
        raise ValueError(f"Unsupported mode: {mode}")

    def mkdir(self, path: str) -> None:
        path = self._resolve(path)
        if path in self.dirs or path in self.files:
            raise FileExistsError(_errno.EEXIST, "File exists", path)
        parent = self.flavour.pathmod.dirname(path)
        if parent in self.files:
            raise NotADirectoryError(_errno.ENOTDIR, "Not a directory", parent)
        if parent not in self.dirs:
            raise FileNotFoundError(_errno.ENOENT, "No such directory", parent)
        self.dirs.add(path)

    def makedirs(self, path: str) -> str:
        """Create a directory and any missing parents; return its resolved form.

        Setup helper for tests, not part of the Host protocol.
        """
        path = self._resolve(path)
        pending = []
        current = path
        while current not in self.dirs:
            pending.append(current)
            current = self.flavour.pathmod.dirname(current)
        for directory in reversed(pending):
            self.mkdir(directory)
        return path

    def rmdir(self, path: str) -> None:
        path = self._resolve(path)
        if path in self.files:
            raise NotADirectoryError(_errno.ENOTDIR, "Not a directory", path)
        if path not in self.dirs:
            raise FileNotFoundError(_errno.ENOENT, "No such directory", path)
        if path == self.root:
            raise OSError(_errno.EBUSY, "Device or resource busy", path)
        if self.scandir(path):
            raise OSError(_errno.ENOTEMPTY, "Directory not empty", path)
        self.dirs.discard(path)

    def unlink(self, path: str) -> None:
        path = self._resolve(path)
        if path in self.dirs:
            raise IsADirectoryError(_errno.EISDIR, "Is a directory", path)
        if path not in self.files:
            raise FileNotFoundError(_errno.ENOENT, "No such file", path)
        del self.files[path]

    def rename(self, src: str, dst: str) -> None:
        src = self._resolve(src)
        dst = self._resolve(dst)
        if src not in self.files:
            raise FileNotFoundError(_errno.ENOENT, "No such file", src)
        if dst in self.dirs:
            raise IsADirectoryError(_errno.EISDIR, "Is a directory", dst)
        parent = self.flavour.pathmod.dirname(dst)
        if parent not in self.dirs:
            raise FileNotFoundError(_errno.ENOENT, "No such directory", parent)
        self.files[dst] = self.files.pop(src)

    def getcwd(self) -> str:
        return self._cwd

    def temp_directory(self) -> str | None:
        return self.flavour.temp_directory(self._environ)

    def home_directory(self) -> str | None:
        return self.flavour.home_directory(self._environ)

    def _resolve(self, path: str) -> str:
        """Resolve a path relative to cwd and normalize . and .. components."""
        mod = self.flavour.pathmod
        sep = self.flavour.separator
        drive, rest = mod.splitdrive(path)
        if rest[:1] not in (mod.sep, mod.altsep or mod.sep):
            path = self._cwd.rstrip(sep) + sep + rest
        elif not drive:
            path = self._drive + path
        return mod.normpath(path)
