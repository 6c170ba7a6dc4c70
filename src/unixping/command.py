from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .dialect import FragmentOption, dialect_options, resolve_dialect
from .host import HostOS, OSFamily, current_host_os
from .locate import is_busybox

# ping/ping6 do not report timing information for payloads below 16 bytes.
MIN_PACKET_SIZE = 16
# Some ping implementations hang forever on an unreachable target with timeout 0.
MIN_TIMEOUT_MS = 1


@dataclass(frozen=True)
class PingRequest:
    packet_size: int
    timeout_ms: int
    address: str
    ipv4: bool = True
    ttl: int = 0
    fragment_option: FragmentOption = FragmentOption.DEFAULT


def build_arguments(request: PingRequest, host: HostOS, busybox: bool) -> list[str]:
    """
    Argument tokens for a single probe, in the order
    count, timeout, ttl, fragmentation, size, address.
    """
    opts = dialect_options(resolve_dialect(host, busybox), request.ipv4)

    args = ["-c", "1"]

    timeout = max(int(request.timeout_ms), MIN_TIMEOUT_MS)
    if opts.timeout_flag is not None:
        args += [opts.timeout_flag, str(opts.timeout_unit.convert(timeout))]

    if request.ttl > 0:
        args += [opts.ttl_flag, str(request.ttl)]

    if request.fragment_option is not FragmentOption.DEFAULT:
        args += opts.fragment_flags.get(request.fragment_option, ())

    args += ["-s", str(max(int(request.packet_size), MIN_PACKET_SIZE))]
    args.append(request.address)
    return args


def build_command_line(request: PingRequest, host: HostOS, busybox: bool) -> str:
    return " ".join(build_arguments(request, host, busybox))


def supports_fragment_option(
    option: FragmentOption, host: HostOS, busybox: bool
) -> bool:
    """
    Whether ``option`` ends up on the command line for this host.
    DEFAULT is always supported since it emits nothing.
    """
    if option is FragmentOption.DEFAULT:
        return True
    opts = dialect_options(resolve_dialect(host, busybox), True)
    return bool(opts.fragment_flags.get(option))


def _needs_busybox_check(host: HostOS, fragment_option: FragmentOption) -> bool:
    return (
        host.family is OSFamily.LINUX and fragment_option is not FragmentOption.DEFAULT
    )


def construct_command_line(
    packet_size: int,
    timeout: int,
    address: str,
    ipv4: bool,
    ttl: int = 0,
    fragment_option: FragmentOption = FragmentOption.DEFAULT,
    *,
    host: Optional[HostOS] = None,
    busybox: Optional[bool] = None,
) -> str:
    """
    Build the ping/ping6 arguments for the current machine.

    ``timeout`` is in milliseconds. The packet size only approximates the
    payload; the utilities do not allow exact control. ``host`` and
    ``busybox`` default to the detected host OS and the cached BusyBox check,
    which is only performed when the fragmentation option depends on it.
    """
    host = host if host is not None else current_host_os()
    fragment_option = FragmentOption(fragment_option)
    if busybox is None:
        busybox = _needs_busybox_check(host, fragment_option) and is_busybox()

    request = PingRequest(
        packet_size=packet_size,
        timeout_ms=timeout,
        address=address,
        ipv4=ipv4,
        ttl=ttl,
        fragment_option=fragment_option,
    )
    return build_command_line(request, host, busybox)
