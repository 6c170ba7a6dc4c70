from __future__ import annotations

import sys
from typing import Optional

from .command import PingRequest, build_command_line, supports_fragment_option
from .dialect import FragmentOption, resolve_dialect
from .host import HostOS, OSFamily, current_host_os
from .locate import PING4_NAME, PING6_NAME, is_busybox, ping_utility_path
from .output import Logger, OutputMode, emit_command, emit_json, emit_rtt
from .parse import PingOutputFormatError, parse_round_trip_time
from .probe import is_ipv6, run_ping

EXIT_OK = 0
EXIT_NO_REPLY = 1
EXIT_NO_UTILITY = 2
EXIT_BAD_OUTPUT = 3
EXIT_USAGE = 4


def _host_from_args(args) -> HostOS:
    detected = current_host_os()
    os_name = getattr(args, "os", None)
    major = getattr(args, "os_major", None)
    if os_name is None and major is None:
        return detected

    family = OSFamily(os_name) if os_name else detected.family
    if major is None:
        major = detected.major_version if family is detected.family else 0
    return HostOS(family, int(major))


def _busybox_from_args(args, host: HostOS, fragment: FragmentOption) -> bool:
    choice = getattr(args, "busybox", "auto")
    if choice == "yes":
        return True
    if choice == "no":
        return False
    # Only the Linux dialect cares, and only for an explicit fragment policy.
    if host.family is OSFamily.LINUX and fragment is not FragmentOption.DEFAULT:
        return is_busybox()
    return False


def run_unixping(args) -> int:
    mode = OutputMode(
        print_rtt=bool(getattr(args, "print_rtt", False)),
        print_cmd=bool(getattr(args, "print_cmd", False)),
        print_json=bool(getattr(args, "print_json", False)),
    )
    err = mode.validate()
    if err:
        print(f"[unixping][ERROR] {err}", file=sys.stderr)
        return EXIT_USAGE

    log = Logger(mode.machine).log

    address = args.address
    ipv4 = not (args.ipv6 or is_ipv6(address))
    family = "IPv4" if ipv4 else "IPv6"

    executes = not (args.dry_run or mode.print_cmd)

    utility = ping_utility_path(ipv4)
    if utility is None and not executes:
        # Previewing another host's syntax does not need a local binary.
        utility = PING4_NAME if ipv4 else PING6_NAME
        log(f"[unixping][WARN] No {family} ping utility found; showing bare '{utility}'.")
    elif utility is None:
        print(
            f"[unixping][ERROR] No {family} ping utility found; probing unavailable.",
            file=sys.stderr,
        )
        return EXIT_NO_UTILITY
    else:
        log(f"[unixping] Using {family} ping utility: {utility}")

    fragment = FragmentOption(getattr(args, "fragment", "default"))
    host = _host_from_args(args)
    busybox = _busybox_from_args(args, host, fragment)
    dialect = resolve_dialect(host, busybox)
    log(
        f"[unixping] Host: {host.family.value} (major={host.major_version}), dialect={dialect.value}"
    )

    if not supports_fragment_option(fragment, host, busybox):
        log(
            f"[unixping][WARN] --fragment {fragment.value} is not supported by the {dialect.value} ping; ignoring."
        )

    request = PingRequest(
        packet_size=args.packet_size,
        timeout_ms=args.timeout_ms,
        address=address,
        ipv4=ipv4,
        ttl=args.ttl,
        fragment_option=fragment,
    )
    cmdline = build_command_line(request, host, busybox)
    log(f"[unixping] Command: {utility} {cmdline}")

    if emit_command(mode, utility=utility, command_line=cmdline):
        return EXIT_OK

    rtt: Optional[int] = None
    returncode: Optional[int] = None

    if args.dry_run:
        log("[unixping] DRY-RUN: not running ping.")
        rc = EXIT_OK
    else:
        run = run_ping(utility, cmdline, args.timeout_ms)
        returncode = run.returncode
        if not run.ok:
            reason = (
                "timed out"
                if run.returncode is None
                else f"exit status {run.returncode}"
            )
            log(f"[unixping] WARNING: No reply from {address} ({reason}).")
            rc = EXIT_NO_REPLY
        else:
            try:
                rtt = parse_round_trip_time(run.stdout)
            except PingOutputFormatError as e:
                print(
                    f"[unixping][ERROR] Could not parse ping output: {e}",
                    file=sys.stderr,
                )
                return EXIT_BAD_OUTPUT
            log(f"[unixping] Reply from {address}: time={rtt} ms")
            rc = EXIT_OK

    if emit_rtt(mode, rtt_ms=rtt):
        return rc

    emit_json(
        mode,
        address=address,
        ipv4=ipv4,
        utility=utility,
        command_line=cmdline,
        host=host,
        busybox=busybox,
        rtt_ms=rtt,
        returncode=returncode,
        dry_run=bool(args.dry_run),
    )
    return rc
