"""Configuration for host selection.

Provides configuration dataclasses, the connect_host factory that validates
them, and create_host, which builds the host a configuration describes.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from .flavours import get_flavour, native_flavour
from .host import NativeHost
from .memory import MemoryHost


@dataclass
class NativeHostConfig:
    """Configuration for the host backed by the running OS.

    Attributes:
        type: Always "native".
        flavour: Path conventions ("posix" or "windows"). Must match the
            running interpreter; None means detect it.
    """

    type: Literal["native"] = "native"
    flavour: Optional[str] = None


@dataclass
class MemoryHostConfig:
    """Configuration for the in-memory host.

    Attributes:
        type: Always "memory".
        flavour: Path conventions ("posix" or "windows").
        cwd: Initial working directory, created on demand. None means root.
    """

    type: Literal["memory"] = "memory"
    flavour: str = "posix"
    cwd: Optional[str] = None


# Type alias for all host configs
HostConfig = NativeHostConfig | MemoryHostConfig


def connect_host(
    type: Literal["native", "memory"] = "native",
    **kwargs,
) -> HostConfig:
    """Configure host access.

    Args:
        type: Host type.
            - "native": The operating system the interpreter runs on.
            - "memory": In-memory host, nothing touches the disk.
        **kwargs: Additional configuration for the host type.
            For type="native":
                - flavour (str): Optional, must name the running OS flavour.
            For type="memory":
                - flavour (str): "posix" or "windows".

                - cwd (str): Optional initial working directory.

    Returns:
        HostConfig for create_host().

    Examples:
        Native host:
        >>> connect_host(type="native", flavour="posix")
        NativeHostConfig(type='native', flavour='posix')

        Memory host:
        >>> connect_host(type="memory", flavour="windows", cwd="C:/work")
        MemoryHostConfig(type='memory', flavour='windows', cwd='C:/work')
    """
    if type == "native":
        flavour = kwargs.pop("flavour", None)
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for native host: {list(kwargs.keys())}"
            )
        if flavour is not None and get_flavour(flavour) is not native_flavour():
            raise ValueError(
                f"Native host flavour must be '{native_flavour().name}', got '{flavour}'"
            )
        return NativeHostConfig(flavour=flavour)

    elif type == "memory":
        flavour = kwargs.pop("flavour", "posix")
        cwd = kwargs.pop("cwd", None)
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for memory host: {list(kwargs.keys())}"
            )
        get_flavour(flavour)
        return MemoryHostConfig(flavour=flavour, cwd=cwd)

    else:
        raise ValueError(
            f"Unsupported host type: {type}. Use 'native' or 'memory'."
        )


def create_host(config: HostConfig):
    """Build the host described by ``config``."""
    if isinstance(config, NativeHostConfig):
        flavour = (
            get_flavour(config.flavour) if config.flavour else native_flavour()
        )
        return NativeHost(flavour)
    if isinstance(config, MemoryHostConfig):
        return MemoryHost(config.flavour, cwd=config.cwd)
    raise TypeError(f"Unsupported host config: {config!r}")
