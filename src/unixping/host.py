from __future__ import annotations

import platform
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .lazy import Lazy


class OSFamily(str, Enum):
    LINUX = "linux"  # Linux, Android, BusyBox systems and anything unrecognized
    FREEBSD = "freebsd"
    MACOS = "macos"


@dataclass(frozen=True)
class HostOS:
    family: OSFamily
    major_version: int = 0


def _major(release: str) -> int:
    m = re.match(r"\s*(\d+)", release)
    return int(m.group(1)) if m else 0


def detect_host_os(
    platform_name: Optional[str] = None, release: Optional[str] = None
) -> HostOS:
    name = sys.platform if platform_name is None else platform_name
    rel = platform.release() if release is None else release

    if name.startswith("freebsd"):
        return HostOS(OSFamily.FREEBSD, _major(rel))
    if name == "darwin":
        return HostOS(OSFamily.MACOS, _major(rel))
    return HostOS(OSFamily.LINUX, _major(rel))


_HOST_OS: Lazy[HostOS] = Lazy(detect_host_os)


def current_host_os() -> HostOS:
    return _HOST_OS.value
