# src/unixping/output.py
from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Optional

from .host import HostOS


@dataclass(frozen=True)
class OutputMode:
    print_rtt: bool
    print_cmd: bool
    print_json: bool

    @property
    def machine(self) -> bool:
        return bool(self.print_rtt or self.print_cmd or self.print_json)

    def validate(self) -> Optional[str]:
        if sum(map(bool, (self.print_rtt, self.print_cmd, self.print_json))) > 1:
            return "--print-rtt, --print-cmd and --print-json are mutually exclusive."
        return None


class Logger:
    """
    Routes logs to stderr when in machine mode, so stdout can be cleanly parsed.
    """

    def __init__(self, machine_mode: bool) -> None:
        self._machine = bool(machine_mode)

    def log(self, msg: str) -> None:
        if self._machine:
            print(msg, file=sys.stderr)
        else:
            print(msg)


def emit_command(mode: OutputMode, *, utility: str, command_line: str) -> bool:
    """
    Returns True if it emitted output (and caller should return).
    """
    if not mode.print_cmd:
        return False
    print(f"{utility} {command_line}")
    return True


def emit_rtt(mode: OutputMode, *, rtt_ms: Optional[int]) -> bool:
    """
    Returns True if it emitted output (and caller should return).
    Nothing is printed for a missing RTT; the exit code carries the failure.
    """
    if not mode.print_rtt:
        return False
    if rtt_ms is not None:
        print(int(rtt_ms))
    return True


def emit_json(
    mode: OutputMode,
    *,
    address: str,
    ipv4: bool,
    utility: Optional[str],
    command_line: Optional[str],
    host: HostOS,
    busybox: bool,
    rtt_ms: Optional[int],
    returncode: Optional[int],
    dry_run: bool,
) -> bool:
    """
    Returns True if it emitted output (and caller should return).
    """
    if not mode.print_json:
        return False

    payload = {
        "address": address,
        "ipv4": bool(ipv4),
        "utility": utility,
        "command_line": command_line,
        "host": {
            "os": host.family.value,
            "major": int(host.major_version),
        },
        "busybox": bool(busybox),
        "rtt_ms": int(rtt_ms) if rtt_ms is not None else None,
        "returncode": returncode,
        "dry_run": bool(dry_run),
    }

    print(json.dumps(payload, sort_keys=True))
    return True
