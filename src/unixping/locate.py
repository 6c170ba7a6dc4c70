from __future__ import annotations

import os
import pathlib
from typing import Optional

from .lazy import Lazy

# Ubuntu ships ping in /bin, macOS in /sbin, Arch in /usr/bin, Android in /system/bin.
# PATH is never consulted so an arbitrary ping earlier on the search path is not picked up.
BIN_DIRS = ("/bin/", "/sbin/", "/usr/bin/", "/system/bin")
PING4_NAME = "ping"
PING6_NAME = "ping6"
BUSYBOX_NAME = "busybox"


def _exists(path: str) -> bool:
    return pathlib.Path(path).exists()


def _read_link(path: str) -> Optional[str]:
    try:
        return os.readlink(path)
    except OSError:
        return None


def find_ping_utility(ipv4: bool) -> Optional[str]:
    name = PING4_NAME if ipv4 else PING6_NAME
    for folder in BIN_DIRS:
        path = os.path.join(folder, name)
        if _exists(path):
            return path
    return None


def is_busybox_ping(path: Optional[str]) -> bool:
    """
    True if ``path`` is a symlink to a BusyBox multi-call binary
    (e.g. Alpine's /bin/ping -> /bin/busybox).
    """
    if path is None:
        return False
    target = _read_link(path)
    if not target:
        return False
    return os.path.basename(target) == BUSYBOX_NAME


_PING4_PATH: Lazy[Optional[str]] = Lazy(lambda: find_ping_utility(ipv4=True))
_PING6_PATH: Lazy[Optional[str]] = Lazy(lambda: find_ping_utility(ipv4=False))
# Decided from the IPv4 binary only and assumed for ping6 as well.
_IS_BUSYBOX: Lazy[bool] = Lazy(lambda: is_busybox_ping(_PING4_PATH.value))


def ping4_utility_path() -> Optional[str]:
    return _PING4_PATH.value


def ping6_utility_path() -> Optional[str]:
    return _PING6_PATH.value


def ping_utility_path(ipv4: bool) -> Optional[str]:
    return ping4_utility_path() if ipv4 else ping6_utility_path()


def is_busybox() -> bool:
    return _IS_BUSYBOX.value
