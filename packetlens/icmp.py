"""ICMP (IPv4) decoding."""

from __future__ import annotations

import struct

from .context import DecodeContext, Verbosity
from .packet_utils import validate_checksum

ICMP_ECHOREPLY = 0
ICMP_UNREACH = 3
ICMP_ECHO = 8

_HEADER = struct.Struct("!BBHHH")


def print_icmp_frame(ctx: DecodeContext, data: bytes, length: int) -> None:
    """Print an ICMP message of ``length`` bytes."""
    if len(data) < _HEADER.size:
        raise ValueError(f"truncated ICMP header: {len(data)} bytes")
    icmp_type, _code, checksum, ident, seq = _HEADER.unpack_from(data)

    ctx.protocol_spacing()
    ctx.write("ICMP")

    if icmp_type == ICMP_ECHOREPLY:
        ctx.write(", echo reply")
    elif icmp_type == ICMP_ECHO:
        ctx.write(", echo request")
    else:
        ctx.write(f", type {icmp_type}")

    ctx.write(f", id {ident}, seq {seq}")

    if ctx.verbosity >= Verbosity.MEDIUM:
        message = bytes(data[:max(length, 0)])
        verdict = "bad!" if validate_checksum(None, message, (len(message) + 3) // 4) else "ok"
        ctx.write(f", icmp cksum 0x{checksum:04x} {verdict}")