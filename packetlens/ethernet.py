"""Ethernet II and IEEE 802.3 frame header decoding."""

from __future__ import annotations

from .context import DecodeContext, Verbosity
from .utils import NameValue, lookup

ETHERTYPE_IP = 0x0800
ETHERTYPE_ARP = 0x0806
ETHERTYPE_REVARP = 0x8035
ETHERTYPE_IPV6 = 0x86DD
ETHERTYPE_LOOPBACK = 0x9000
ETHERTYPE_DECMOP = 0x6002

# Values up to this one are IEEE 802.3 lengths rather than EtherTypes.
ETH_FRAME_TYPE_THRESHOLD = 0x0600

LSAP_NULL = 0x0000
LSAP_ISIS = 0xFEFE
LSAP_SNAP = 0xAAAA

ETHER_HEADER_SIZE = 14
_LSAP_SIZE = 2

ETHER_TYPES = (
    NameValue(ETHERTYPE_IP, "IPv4"),
    NameValue(ETHERTYPE_IPV6, "IPv6"),
    NameValue(ETHERTYPE_ARP, "ARP"),
    NameValue(ETHERTYPE_REVARP, "RARP"),
    NameValue(ETHERTYPE_LOOPBACK, "Loopback"),
    NameValue(ETHERTYPE_DECMOP, "DEC MOP RC"),
)

LSAPS = (
    NameValue(LSAP_NULL, "NULL"),
    NameValue(LSAP_ISIS, "IS-IS"),
    NameValue(LSAP_SNAP, "SNAP"),
)


def _ether_ntoa(mac: bytes) -> str:
    return ":".join(f"{octet:x}" for octet in mac[:6])


def print_ethernet_header(ctx: DecodeContext, frame: bytes, length: int) -> int:
    """Print an Ethernet header and return the EtherType or LSAP it carries."""
    if len(frame) < ETHER_HEADER_SIZE:
        raise ValueError(
            f"truncated Ethernet header: {len(frame)} bytes, need {ETHER_HEADER_SIZE}"
        )
    dhost = bytes(frame[0:6])
    shost = bytes(frame[6:12])
    ether_type = int.from_bytes(frame[12:14], "big")
    is_802_3 = ether_type <= ETH_FRAME_TYPE_THRESHOLD

    if not is_802_3:
        ctx.write(" Ethernet")
        entry = lookup(ether_type, ETHER_TYPES)
    else:
        if len(frame) < ETHER_HEADER_SIZE + _LSAP_SIZE:
            raise ValueError(f"truncated IEEE 802.3 frame: {len(frame)} bytes")
        ctx.write(" IEEE 802.3")
        lsap = int.from_bytes(frame[ETHER_HEADER_SIZE:ETHER_HEADER_SIZE + _LSAP_SIZE], "big")
        entry = lookup(lsap, LSAPS)

    high = ctx.verbosity == Verbosity.HIGH
    if high:
        ctx.write(f" {_ether_ntoa(shost)} >")
        ctx.write(f" {_ether_ntoa(dhost)},")
        ctx.write(" ethertype" if not is_802_3 else " IEEE 802.3,")
        if entry.value == LSAP_ISIS:
            ctx.write(" OSI")

    ctx.write(f" {entry.name}")
    if high:
        ctx.write(f" (0x{entry.value:04x}), length {length}")

    return entry.value