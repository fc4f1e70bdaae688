"""Linux cooked capture (SLL and SLL2) header decoding."""

from __future__ import annotations

import struct

from .context import DecodeContext, Verbosity
from .ethernet import ETHER_TYPES
from .utils import lookup

ARPHRD_IEEE80211_RADIOTAP = 803
ARPHRD_IPGRE = 778
ARPHRD_FRAD = 770
ARPHRD_NETLINK = 824

_UNSUPPORTED_ARPHRD = frozenset(
    (ARPHRD_IEEE80211_RADIOTAP, ARPHRD_IPGRE, ARPHRD_FRAD, ARPHRD_NETLINK)
)

PACKET_TYPE_DIRECTED = 0
PACKET_TYPE_BROADCAST = 1
PACKET_TYPE_MULTICAST = 2
PACKET_TYPE_OTHER_TO_OTHER = 3
PACKET_TYPE_OWN = 4

_PACKET_TYPE_LABELS = {
    PACKET_TYPE_DIRECTED: "to us",
    PACKET_TYPE_BROADCAST: "broadcast",
    PACKET_TYPE_MULTICAST: "multicast",
    PACKET_TYPE_OTHER_TO_OTHER: "other to other",
    PACKET_TYPE_OWN: "by us",
}

# pkttype, hatype, halen, addr, protocol
_SLL = struct.Struct("!HHH8sH")
# protocol, reserved, if_index, hatype, pkttype, halen, addr
_SLL2 = struct.Struct("!HHIHBB8s")

SLL_HEADER_SIZE = _SLL.size
SLL2_HEADER_SIZE = _SLL2.size


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"truncated {what} header: {len(data)} bytes, need {size}")


def _unsupported(ctx: DecodeContext, halen: int) -> bool:
    if halen in _UNSUPPORTED_ARPHRD:
        ctx.write(f" Unsupported ARPHRD_ type ({halen})")
        return True
    return False


def _print_protocol(ctx: DecodeContext, protocol: int) -> int:
    entry = lookup(protocol, ETHER_TYPES)
    ctx.write(f" {entry.name}")
    if ctx.verbosity == Verbosity.HIGH:
        ctx.write(f" ({protocol})")
    return entry.value


def print_linux_cooked_header(ctx: DecodeContext, data: bytes) -> int:
    """Print an SLL header and return its EtherType, or 0 if unsupported."""
    _require(data, SLL_HEADER_SIZE, "Linux cooked capture")
    _pkttype, _hatype, halen, _addr, protocol = _SLL.unpack_from(data)
    if _unsupported(ctx, halen):
        return 0
    return _print_protocol(ctx, protocol)


def print_linux_cooked_2_header(ctx: DecodeContext, data: bytes) -> int:
    """Print an SLL2 header and return its EtherType, or 0 if unsupported."""
    _require(data, SLL2_HEADER_SIZE, "Linux cooked capture v2")
    protocol, _reserved, if_index, _hatype, pkttype, halen, _addr = _SLL2.unpack_from(data)
    if _unsupported(ctx, halen):
        return 0

    if ctx.verbosity >= Verbosity.MEDIUM:
        ctx.write(f" (if_index {if_index}")
        ctx.write(f", halen {halen}")
        ctx.write(f", packet_type {pkttype}")
        if ctx.verbosity == Verbosity.HIGH:
            ctx.write(format_sll_packet_type(pkttype))
        ctx.write(")")

    return _print_protocol(ctx, protocol)


def format_sll_packet_type(packet_type: int) -> str:
    """Describe an SLL packet type as `` [label]``; unknown types give `` []``."""
    return f" [{_PACKET_TYPE_LABELS.get(packet_type, '')}]"