from __future__ import annotations

import argparse
import os

from .dialect import FragmentOption
from .host import OSFamily


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="unixping",
        description="Send one echo request via the system ping utility and report the round-trip time.",
    )

    ap.add_argument("address", help="Target hostname or IP address.")
    ap.add_argument(
        "-6",
        "--ipv6",
        action="store_true",
        help="Use ping6 / IPv6 options (implied for IPv6 literals).",
    )

    ap.add_argument(
        "-s",
        "--packet-size",
        type=int,
        default=int(os.environ.get("UNIXPING_PACKET_SIZE", "56")),
        help="Packet size in bytes, at least 16 is sent (default: 56).",
    )
    ap.add_argument(
        "-W",
        "--timeout-ms",
        type=int,
        default=int(os.environ.get("UNIXPING_TIMEOUT_MS", "1000")),
        help="Reply timeout in milliseconds (default: 1000).",
    )
    ap.add_argument(
        "-t", "--ttl", type=int, default=0, help="Time to live / hop limit (0 = unset)."
    )
    ap.add_argument(
        "--fragment",
        choices=[o.value for o in FragmentOption],
        default=FragmentOption.DEFAULT.value,
        help="Don't-fragment policy (default: leave the utility's default).",
    )

    # --- Host dialect overrides ---
    ap.add_argument(
        "--os",
        choices=[f.value for f in OSFamily],
        default=os.environ.get("UNIXPING_OS") or None,
        help="Build arguments for this OS instead of the detected one.",
    )
    ap.add_argument(
        "--os-major",
        type=int,
        help="OS major version to assume (selects the FreeBSD 13+ syntax).",
    )
    ap.add_argument(
        "--busybox",
        choices=["auto", "yes", "no"],
        default="auto",
        help="Whether ping is BusyBox (default: detect from the ping symlink).",
    )

    ap.add_argument(
        "--dry-run", action="store_true", help="Show the ping command without running it."
    )

    # --- Machine-readable output modes ---
    ap.add_argument(
        "--print-rtt",
        action="store_true",
        help="Print only the round-trip time in ms (stdout).",
    )
    ap.add_argument(
        "--print-cmd",
        action="store_true",
        help="Print only the ping command (stdout) and exit without running it.",
    )
    ap.add_argument(
        "--print-json",
        action="store_true",
        help="Print a JSON object with the command and result (stdout).",
    )

    return ap
