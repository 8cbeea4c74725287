"""Context variables selecting the active host.

Path, File and Directory built without an explicit ``host=`` resolve it here,
so a whole block of code can be pointed at another host at once.
"""

import contextvars
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .host import NativeHost

# Context variable holding the host overriding the process default
current_host: contextvars.ContextVar[Any] = contextvars.ContextVar(
    "crossfs_current_host", default=None
)

_default_host: Optional[NativeHost] = None
_default_lock = threading.Lock()


def get_host() -> Any:
    """Return the host active in the current context.

    Falls back to a process-wide NativeHost, created on first use.
    """
    global _default_host
    host = current_host.get()
    if host is not None:
        return host
    if _default_host is None:
        with _default_lock:
            if _default_host is None:
                _default_host = NativeHost()
    return _default_host


@contextmanager
def use_host(host: Any) -> Iterator[Any]:
    """Route every Path built in this context to ``host``.

    Example::

        with use_host(MemoryHost("windows")):
            Directory("C:/work").create()
    """
    token = current_host.set(host)
    try:
        yield host
    finally:
        current_host.reset(token)
