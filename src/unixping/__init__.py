from __future__ import annotations

from .command import (
    PingRequest,
    build_command_line,
    construct_command_line,
    supports_fragment_option,
)
from .dialect import FragmentOption
from .host import HostOS, OSFamily, current_host_os, detect_host_os
from .locate import is_busybox, ping4_utility_path, ping6_utility_path
from .parse import PingOutputFormatError, parse_round_trip_time
from .probe import probe_rtt

__version__ = "0.1.0"

__all__ = [
    "FragmentOption",
    "HostOS",
    "OSFamily",
    "PingOutputFormatError",
    "PingRequest",
    "__version__",
    "build_command_line",
    "construct_command_line",
    "current_host_os",
    "detect_host_os",
    "is_busybox",
    "parse_round_trip_time",
    "ping4_utility_path",
    "ping6_utility_path",
    "probe_rtt",
    "supports_fragment_option",
]
