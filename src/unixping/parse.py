from __future__ import annotations

import re

_TIME_MARKER = "time="
_MS_MARKER = "ms"
# Plain decimal only: no sign, exponent, padding or "," separator, which ping never prints.
_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class PingOutputFormatError(ValueError):
    """Raised when ping output carries no parseable round-trip time."""


def parse_round_trip_time(output: str) -> int:
    """
    Round-trip time in whole milliseconds from the stdout of a ping run,
    e.g. ``... icmp_seq=1 ttl=64 time=23.4 ms`` -> 23.

    The number sits between ``time=`` and the next ``ms``, minus the single
    separator character in front of ``ms``.
    """
    start = output.find(_TIME_MARKER)
    if start < 0:
        raise PingOutputFormatError(f"no '{_TIME_MARKER}' in ping output")
    start += len(_TIME_MARKER)

    end = output.find(_MS_MARKER, start)
    if end < 0:
        raise PingOutputFormatError(f"no '{_MS_MARKER}' after '{_TIME_MARKER}'")

    text = output[start : end - 1]
    if not _NUMBER_RE.fullmatch(text):
        raise PingOutputFormatError(f"invalid round-trip time: {text!r}")

    return int(round(float(text)))
