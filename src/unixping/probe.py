from __future__ import annotations

import ipaddress
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional

from .command import construct_command_line
from .dialect import FragmentOption
from .locate import ping_utility_path
from .parse import parse_round_trip_time

# Slack on top of ping's own timeout before we kill it.
_GRACE_S = 2.0


@dataclass(frozen=True)
class PingRun:
    returncode: Optional[int]  # None: killed after the wall-clock timeout
    stdout: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def is_ipv6(target: str) -> bool:
    try:
        return isinstance(ipaddress.ip_address(target), ipaddress.IPv6Address)
    except ValueError:
        return ":" in target  # best-effort for hostnames


def run_ping(utility: str, command_line: str, timeout_ms: int) -> PingRun:
    cmd = [utility, *shlex.split(command_line)]
    # C locale: untranslated markers and a "." decimal separator in "time=".
    env = {**os.environ, "LC_ALL": "C"}
    try:
        cp = subprocess.run(
            cmd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env=env,
            timeout=max(timeout_ms, 1) / 1000 + _GRACE_S,
        )
    except subprocess.TimeoutExpired:
        return PingRun(returncode=None, stdout="")
    # Host names from reverse DNS may carry arbitrary bytes.
    stdout = (cp.stdout or b"").decode("ascii", errors="replace")
    return PingRun(returncode=cp.returncode, stdout=stdout)


def probe_rtt(
    address: str,
    *,
    packet_size: int = 56,
    timeout_ms: int = 1000,
    ttl: int = 0,
    fragment_option: FragmentOption = FragmentOption.DEFAULT,
    ipv4: Optional[bool] = None,
) -> Optional[int]:
    """
    Send one echo request through the system ping utility.

    Returns the round-trip time in ms, or None if no utility exists for the
    address family or the probe got no reply. Unparseable output raises
    PingOutputFormatError.
    """
    v4 = (not is_ipv6(address)) if ipv4 is None else ipv4
    utility = ping_utility_path(v4)
    if utility is None:
        return None

    cmdline = construct_command_line(
        packet_size, timeout_ms, address, v4, ttl, fragment_option
    )
    run = run_ping(utility, cmdline, timeout_ms)
    if not run.ok:
        return None
    return parse_round_trip_time(run.stdout)
