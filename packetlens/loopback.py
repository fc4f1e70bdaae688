"""BSD loopback (null) link-layer header decoding."""

from __future__ import annotations

import sys

from .context import DecodeContext, Verbosity
from .utils import NameValue, lookup

LOOPBACK_IP = 2
LOOPBACK_IP6_1 = 24
LOOPBACK_IP6_2 = 28
LOOPBACK_IP6_3 = 30
LOOPBACK_OSI = 7
LOOPBACK_IPX = 23

LOOPBACK_HEADER_SIZE = 4

BSD_LO_PROTOCOLS = (
    NameValue(LOOPBACK_IP, "IPv4"),
    NameValue(LOOPBACK_IP6_1, "IPv6"),
    NameValue(LOOPBACK_IP6_2, "IPv6"),
    NameValue(LOOPBACK_IP6_3, "IPv6"),
    NameValue(LOOPBACK_OSI, "OSI"),
    NameValue(LOOPBACK_IPX, "IPX"),
)


def print_loopback_header(ctx: DecodeContext, data: bytes) -> int:
    """Print a loopback header and return the protocol family it names.

    The family is stored in the byte order of the host that captured it,
    read here in the byte order of the running host.
    """
    if len(data) < LOOPBACK_HEADER_SIZE:
        raise ValueError(
            f"truncated loopback header: {len(data)} bytes, need {LOOPBACK_HEADER_SIZE}"
        )
    family = int.from_bytes(data[:LOOPBACK_HEADER_SIZE], sys.byteorder)
    entry = lookup(family & 0xFFFF, BSD_LO_PROTOCOLS)

    ctx.write(f" {entry.name}")
    if ctx.verbosity == Verbosity.HIGH:
        ctx.write(f" ({family})")

    return entry.value