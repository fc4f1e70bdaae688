"""ARP and RARP decoding."""

from __future__ import annotations

import ipaddress
import struct

from .context import DecodeContext, Verbosity
from .ethernet import ETHER_TYPES, ETHERTYPE_IP
from .packet_utils import get_oui
from .utils import NameValue, lookup

ARPHRD_ETHER = 1
ARPHRD_IEEE802 = 6
ARPHRD_FRELAY = 15
ARPHRD_IEEE1394 = 24
ARPHRD_IEEE1394_EUI64 = 27

ARPOP_REQUEST = 1
ARPOP_REPLY = 2
ARPOP_REVREQUEST = 3
ARPOP_REVREPLY = 4

ARP_HARDWARES = (
    NameValue(ARPHRD_ETHER, "Ethernet"),
    NameValue(ARPHRD_IEEE802, "Token-Ring"),
    NameValue(ARPHRD_FRELAY, "Frame Relay"),
    NameValue(ARPHRD_IEEE1394, "IEEE1394"),
    NameValue(ARPHRD_IEEE1394_EUI64, "IEEE1394 EUI-64"),
)

# ARP protocol types share their numbering with EtherTypes.
ARP_PROTOCOLS = ETHER_TYPES

_HEADER = struct.Struct("!HHBBH")


def _unpack(data: bytes) -> tuple[int, int, int, int, int]:
    if len(data) < _HEADER.size:
        raise ValueError(f"truncated ARP header: {len(data)} bytes, need {_HEADER.size}")
    return _HEADER.unpack_from(data)


def _ipv4(raw: bytes) -> str:
    return str(ipaddress.IPv4Address(bytes(raw[:4]).ljust(4, b"\x00")))


def _mac(raw: bytes) -> str:
    return ":".join(f"{octet:x}" for octet in bytes(raw[:6]).ljust(6, b"\x00"))


def print_arp_header(ctx: DecodeContext, data: bytes) -> None:
    """Print the hardware and protocol types of an ARP message."""
    hrd, pro, hln, pln, _op = _unpack(data)
    hardware = lookup(hrd, ARP_HARDWARES)
    ctx.write(f", {hardware.name} (len {hln})")
    protocol = lookup(pro, ARP_PROTOCOLS)
    suffix = "v4" if protocol.value == ETHERTYPE_IP else ""
    ctx.write(f", {protocol.name}{suffix} (len {pln})")


def print_arp_frame(ctx: DecodeContext, data: bytes) -> None:
    """Print an ARP or RARP message."""
    _hrd, _pro, hln, pln, op = _unpack(data)
    sha_at = _HEADER.size
    spa_at = sha_at + hln
    tha_at = spa_at + pln
    tpa_at = tha_at + hln
    if len(data) < tpa_at + pln:
        raise ValueError(
            f"truncated ARP message: {len(data)} bytes, need {tpa_at + pln}"
        )

    if ctx.verbosity >= Verbosity.MEDIUM:
        print_arp_header(ctx, data)

    sha = bytes(data[sha_at:sha_at + 6])
    spa = bytes(data[spa_at:spa_at + 4])
    tha = bytes(data[tha_at:tha_at + 6])
    tpa = bytes(data[tpa_at:tpa_at + 4])

    is_gratuitous = (
        data[spa_at:spa_at + pln] == data[tpa_at:tpa_at + pln]
        and op in (ARPOP_REPLY, ARPOP_REQUEST)
    )
    if is_gratuitous and ctx.verbosity == Verbosity.LOW:
        announced = spa if op == ARPOP_REQUEST else tpa
        ctx.write(f", Announcement {_ipv4(announced)}")
        return

    oui = get_oui(sha)
    if op == ARPOP_REQUEST:
        ctx.write(f", {'Announcement' if is_gratuitous else 'Request'}")
        ctx.write(f" who-has {_ipv4(tpa)}")
        ctx.write(f" tell {_ipv4(spa)}")
    elif op == ARPOP_REPLY:
        ctx.write(f", {'Announcement' if is_gratuitous else 'Reply'}")
        ctx.write(f" {_ipv4(spa)}")
        ctx.write(f" is-at {_mac(sha)} (oui {oui})")
    elif op == ARPOP_REVREQUEST:
        ctx.write(f", Reverse Request who-is {_mac(sha)} (oui {oui})")
        ctx.write(f" tell {_mac(tha)} (oui {oui})")
    elif op == ARPOP_REVREPLY:
        ctx.write(f", Reverse Reply {_mac(tha)}")
        ctx.write(f" is-at {_mac(sha)} (oui {oui})")
    else:
        ctx.write(f", Unsupported ARP operation (0x{op:04X})")