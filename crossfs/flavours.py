"""Path string rules for each supported platform family.

A flavour knows how paths are spelled on a host: which separator is native,
what a root looks like, and where the temp and home directories are
advertised in the environment. Nothing here touches the filesystem.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
from collections.abc import Mapping
from types import ModuleType

# Returned by parent() for a path with no separator at all.
CURRENT_DIRECTORY = "."


class PathFlavour:
    """Separator and root conventions shared by a family of hosts."""

    name: str = ""
    separator: str = ""
    altsep: str = ""
    pathmod: ModuleType = posixpath

    def __repr__(self) -> str:
        return f"<PathFlavour {self.name}>"

    def normalize(self, raw: str) -> str:
        """Convert every separator to the native one and drop trailing ones.

        Roots keep their separator. Never fails, whatever the input.
        """
        path = raw.replace(self.altsep, self.separator)
        while (
            len(path) > 1
            and path.endswith(self.separator)
            and not self.is_root(path)
        ):
            path = path[:-1]
        return path

    def is_root(self, path: str) -> bool:
        raise NotImplementedError

    def parent(self, path: str) -> str:
        if self.is_root(path):
            return path
        pos = path.rfind(self.separator)
        if pos < 0:
            # A drive-relative path such as "C:a" lives under its drive.
            return self.pathmod.splitdrive(path)[0] or CURRENT_DIRECTORY
        head = path[: pos + 1]
        if self.is_root(head):
            return head
        return path[:pos]

    def filename(self, path: str) -> str:
        pos = path.rfind(self.separator)
        if pos < 0:
            drive = self.pathmod.splitdrive(path)[0]
            return path[len(drive) :]
        return path[pos + 1 :]

    def extension(self, path: str) -> str:
        name = self.filename(path)
        pos = name.rfind(".")
        if pos < 0:
            return ""
        return name[pos:]

    def join(self, base: str, name: str) -> str:
        """Append a child name to a normalized base path."""
        if not base:
            return self.normalize(name)
        drive, rest = self.pathmod.splitdrive(base)
        if base.endswith(self.separator) or (drive.endswith(":") and not rest):
            return self.normalize(base + name)
        return self.normalize(base + self.separator + name)

    def temp_directory(self, environ: Mapping[str, str]) -> str | None:
        raise NotImplementedError

    def home_directory(self, environ: Mapping[str, str]) -> str | None:
        raise NotImplementedError


def _first_set(environ: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


class PosixFlavour(PathFlavour):
    name = "posix"
    separator = "/"
    altsep = "\\"
    pathmod = posixpath

    # Used when TMPDIR is not set.
    TEMP_FALLBACK = "/tmp"

    def is_root(self, path: str) -> bool:
        return path == "/"

    def temp_directory(self, environ: Mapping[str, str]) -> str | None:
        return _first_set(environ, "TMPDIR") or self.TEMP_FALLBACK

    def home_directory(self, environ: Mapping[str, str]) -> str | None:
        return _first_set(environ, "HOME")


class WindowsFlavour(PathFlavour):
    name = "windows"
    separator = "\\"
    altsep = "/"
    pathmod = ntpath

    def is_root(self, path: str) -> bool:
        drive, rest = ntpath.splitdrive(path)
        if rest == "\\":
            return True
        return bool(drive) and rest == ""

    def temp_directory(self, environ: Mapping[str, str]) -> str | None:
        # Same lookup order as GetTempPath.
        return _first_set(environ, "TMP", "TEMP", "USERPROFILE", "SystemRoot", "windir")

    def home_directory(self, environ: Mapping[str, str]) -> str | None:
        profile = _first_set(environ, "USERPROFILE")
        if profile:
            return profile
        drive = _first_set(environ, "HOMEDRIVE")
        home = _first_set(environ, "HOMEPATH")
        if drive and home:
            return drive + home
        return None


POSIX = PosixFlavour()
WINDOWS = WindowsFlavour()

_FLAVOURS = {POSIX.name: POSIX, WINDOWS.name: WINDOWS}


def native_flavour() -> PathFlavour:
    """Return the flavour of the running interpreter's host."""
    return WINDOWS if os.name == "nt" else POSIX


def get_flavour(name: str) -> PathFlavour:
    """Look up a flavour by name ("posix" or "windows")."""
    try:
        return _FLAVOURS[name]
    except KeyError:
        raise ValueError(
            f"Unsupported path flavour: {name}. Use 'posix' or 'windows'."
        ) from None
