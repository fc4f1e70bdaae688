"""ICMPv6 decoding, including neighbour discovery messages."""

from __future__ import annotations

import ipaddress

from .context import DecodeContext, Verbosity
from .packet_utils import pseudo_ip6_header, validate_checksum

IPPROTO_ICMPV6 = 58

ND_ROUTER_SOLICIT = 133
ND_ROUTER_ADVERT = 134
ND_NEIGHBOR_SOLICIT = 135
ND_NEIGHBOR_ADVERT = 136

ND_RA_FLAG_MANAGED = 0x80
ND_RA_FLAG_OTHER = 0x40
ND_RA_FLAG_HA = 0x20

ND_NA_FLAG_ROUTER = 0x80
ND_NA_FLAG_SOLICITED = 0x40
ND_NA_FLAG_OVERRIDE = 0x20

_RA_FLAGS = (("H", ND_RA_FLAG_HA), ("O", ND_RA_FLAG_OTHER), ("M", ND_RA_FLAG_MANAGED))
_NA_FLAGS = (("O", ND_NA_FLAG_OVERRIDE), ("S", ND_NA_FLAG_SOLICITED), ("R", ND_NA_FLAG_ROUTER))


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"truncated {what}: {len(data)} bytes, need {size}")


def _flags(value: int, table: tuple[tuple[str, int], ...], any_set: bool) -> str:
    letters = "".join(letter for letter, bit in table if value & bit)
    return f", flags [{letters if any_set else 'none'}]"


def _target(data: bytes) -> str:
    return str(ipaddress.IPv6Address(bytes(data[8:24])))


def print_icmp6_frame(ctx: DecodeContext, data: bytes, ip6_header: bytes, length: int) -> None:
    """Print an ICMPv6 message of ``length`` bytes found after ``ip6_header``."""
    _require(data, 4, "ICMPv6 header")
    icmp6_type = data[0]
    checksum = int.from_bytes(data[2:4], "big")

    ctx.protocol_spacing()
    ctx.write("ICMP6")

    if ctx.verbosity >= Verbosity.MEDIUM:
        message = bytes(data[:max(length, 0)])
        pseudo = pseudo_ip6_header(ip6_header[8:24], ip6_header[24:40], length, IPPROTO_ICMPV6)
        verdict = "bad!" if validate_checksum(pseudo, message, (len(message) + 3) // 4) else "ok"
        ctx.write(f", icmp6 cksum 0x{checksum:04x} {verdict}")

    if icmp6_type == ND_ROUTER_SOLICIT:
        ctx.write(", router solicitation")
    elif icmp6_type == ND_ROUTER_ADVERT:
        _require(data, 6, "router advertisement")
        ctx.write(", router advertisement")
        if ctx.verbosity == Verbosity.LOW:
            return
        ctx.write(_flags(data[5], _RA_FLAGS, bool(data[5])))
    elif icmp6_type == ND_NEIGHBOR_SOLICIT:
        _require(data, 24, "neighbor solicitation")
        ctx.write(f", neighbor solicitation, who has {_target(data)}")
    elif icmp6_type == ND_NEIGHBOR_ADVERT:
        _require(data, 24, "neighbor advertisement")
        ctx.write(", neighbor advertisement")
        if ctx.verbosity == Verbosity.LOW:
            return
        ctx.write(f", target is {_target(data)}")
        ctx.write(_flags(data[4], _NA_FLAGS, any(data[4:8])))
    else:
        ctx.write(f", unsupported type {icmp6_type}")