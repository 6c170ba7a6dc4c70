from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from .host import HostOS, OSFamily


class FragmentOption(str, Enum):
    DEFAULT = "default"
    DO = "do"
    DONT = "dont"


class TimeoutUnit(str, Enum):
    MILLISECONDS = "ms"
    SECONDS = "s"

    def convert(self, timeout_ms: int) -> int:
        if self is TimeoutUnit.MILLISECONDS:
            return timeout_ms
        # Round up: a shorter timeout than requested causes spurious failures.
        secs, rem = divmod(timeout_ms, 1000)
        return secs + 1 if rem else secs


class Dialect(str, Enum):
    LINUX = "linux"
    BUSYBOX = "busybox"
    FREEBSD = "freebsd"  # FreeBSD <= 12
    FREEBSD13 = "freebsd13"  # FreeBSD >= 13 unified ping/ping6 options
    MACOS = "macos"


@dataclass(frozen=True)
class DialectOptions:
    timeout_flag: Optional[str]  # None: no timeout option exists
    timeout_unit: TimeoutUnit
    ttl_flag: str
    fragment_flags: Mapping[FragmentOption, tuple[str, ...]] = field(
        default_factory=dict
    )


FREEBSD_NEW_SYNTAX_MAJOR = 13

_LINUX_FRAG = {
    FragmentOption.DO: ("-M", "do"),
    FragmentOption.DONT: ("-M", "dont"),
}
# The DF bit is off by default on BSDs and there is no flag to force fragmentation.
_BSD_FRAG = {FragmentOption.DONT: ("-D",)}

_LINUX = DialectOptions("-W", TimeoutUnit.SECONDS, "-t", _LINUX_FRAG)
_BUSYBOX = DialectOptions("-W", TimeoutUnit.SECONDS, "-t")

# (dialect, ipv4) -> options
DIALECTS: dict[tuple[Dialect, bool], DialectOptions] = {
    (Dialect.LINUX, True): _LINUX,
    (Dialect.LINUX, False): _LINUX,
    (Dialect.BUSYBOX, True): _BUSYBOX,
    (Dialect.BUSYBOX, False): _BUSYBOX,
    (Dialect.FREEBSD, True): DialectOptions(
        "-W", TimeoutUnit.MILLISECONDS, "-m", _BSD_FRAG
    ),
    (Dialect.FREEBSD, False): DialectOptions(
        "-x", TimeoutUnit.MILLISECONDS, "-h", _BSD_FRAG
    ),
    (Dialect.FREEBSD13, True): DialectOptions(
        "-W", TimeoutUnit.MILLISECONDS, "-m", _BSD_FRAG
    ),
    (Dialect.FREEBSD13, False): DialectOptions(
        "-W", TimeoutUnit.MILLISECONDS, "-m", _BSD_FRAG
    ),
    (Dialect.MACOS, True): DialectOptions(
        "-W", TimeoutUnit.MILLISECONDS, "-m", _BSD_FRAG
    ),
    (Dialect.MACOS, False): DialectOptions(
        None, TimeoutUnit.MILLISECONDS, "-h", _BSD_FRAG
    ),
}


def resolve_dialect(host: HostOS, busybox: bool) -> Dialect:
    if host.family is OSFamily.FREEBSD:
        if host.major_version >= FREEBSD_NEW_SYNTAX_MAJOR:
            return Dialect.FREEBSD13
        return Dialect.FREEBSD
    if host.family is OSFamily.MACOS:
        return Dialect.MACOS
    return Dialect.BUSYBOX if busybox else Dialect.LINUX


def dialect_options(dialect: Dialect, ipv4: bool) -> DialectOptions:
    return DIALECTS[(dialect, bool(ipv4))]
