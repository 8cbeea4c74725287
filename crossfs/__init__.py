"""crossfs: One filesystem API for POSIX and Windows hosts."""

from .config import HostConfig, MemoryHostConfig, NativeHostConfig, connect_host, create_host
from .context import current_host, get_host, use_host
from .directory import Directory
from .errors import (
    CreateError,
    DeleteError,
    FileSystemError,
    FileSystemUnavailable,
    MetadataError,
    OpenError,
    ReadError,
    RemoveError,
    WriteError,
)
from .file import File
from .flavours import POSIX, WINDOWS, PathFlavour, get_flavour, native_flavour
from .host import Host, NativeHost
from .memory import MemoryHost
from .path import Path

__all__ = [
    "connect_host",
    "create_host",
    "CreateError",
    "current_host",
    "DeleteError",
    "Directory",
    "File",
    "FileSystemError",
    "FileSystemUnavailable",
    "get_flavour",
    "get_host",
    "Host",
    "HostConfig",
    "MemoryHost",
    "MemoryHostConfig",
    "MetadataError",
    "native_flavour",
    "NativeHost",
    "NativeHostConfig",
    "OpenError",
    "Path",
    "PathFlavour",
    "POSIX",
    "ReadError",
    "RemoveError",
    "use_host",
    "WINDOWS",
    "WriteError",
]
