"""Host interface and the implementation backed by the running OS.

Defines the primitive operations every host must provide (NativeHost,
MemoryHost). Higher layers (Path, File, Directory) only ever talk to a host
through this interface, so swapping hosts never touches call sites.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import BinaryIO, Protocol, runtime_checkable

from .flavours import POSIX, PathFlavour, native_flavour


@runtime_checkable
class Host(Protocol):
    """Primitive filesystem operations of one host.

    Every method except the directory lookups raises an OSError subclass on
    failure; translating those into crossfs error kinds is the caller's job.
    """

    flavour: PathFlavour

    def stat(self, path: str) -> os.stat_result:
        """Get metadata, following symbolic links."""
        ...

    def lstat(self, path: str) -> os.stat_result:
        """Get metadata of the entry itself."""
        ...

    def scandir(self, path: str) -> list[tuple[str, bool]]:
        """List immediate children as (name, is_directory) pairs.

        Never includes the "." and ".." self references.
        """
        ...

    def open(self, path: str, mode: str = "rb") -> BinaryIO:
        """Open a file in binary mode ("rb" or "wb")."""
        ...

    def mkdir(self, path: str) -> None:
        """Create a single directory. Parents are never created."""
        ...

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        ...

    def unlink(self, path: str) -> None:
        """Delete a single file."""
        ...

    def rename(self, src: str, dst: str) -> None:
        """Rename a file in one host call."""
        ...

    def getcwd(self) -> str:
        """Get the current working directory."""
        ...

    def temp_directory(self) -> str | None:
        """Resolve the temp directory, or None if nothing is configured."""
        ...

    def home_directory(self) -> str | None:
        """Resolve the user's home directory, or None."""
        ...


def _passwd_home() -> str | None:
    try:
        import pwd
    except ImportError:
        return None
    try:
        return pwd.getpwuid(os.getuid()).pw_dir or None
    except KeyError:
        return None


class NativeHost:
    """Host backed by the operating system the interpreter runs on.

    Args:
        flavour: Path conventions to use. Must match the running OS;
            anything else raises ValueError.
        environ: Environment used to resolve the temp and home directories.
            Defaults to ``os.environ``.
    """

    def __init__(
        self,
        flavour: PathFlavour | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        native = native_flavour()
        if flavour is not None and flavour is not native:
            raise ValueError(
                f"NativeHost cannot use the {flavour.name} flavour on a {native.name} host"
            )
        self.flavour = native
        self._environ = os.environ if environ is None else environ

    def __repr__(self) -> str:
        return f"NativeHost(flavour={self.flavour.name!r})"

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)

    def scandir(self, path: str) -> list[tuple[str, bool]]:
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                if entry.name in (".", ".."):
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                entries.append((entry.name, is_dir))
        return entries

    def open(self, path: str, mode: str = "rb") -> BinaryIO:
        if mode not in ("rb", "wb"):
            raise ValueError(f"Unsupported mode: {mode}")
        return open(path, mode)

    def mkdir(self, path: str) -> None:
        os.mkdir(path, 0o755)

    def rmdir(self, path: str) -> None:
        os.rmdir(path)

    def unlink(self, path: str) -> None:
        os.unlink(path)

    def rename(self, src: str, dst: str) -> None:
        os.rename(src, dst)

    def getcwd(self) -> str:
        return os.getcwd()

    def temp_directory(self) -> str | None:
        return self.flavour.temp_directory(self._environ)

    def home_directory(self) -> str | None:
        home = self.flavour.home_directory(self._environ)
        if home is None and self.flavour is POSIX:
            home = _passwd_home()
        return home
