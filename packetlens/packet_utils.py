"""Formatting and checksum helpers used across the protocol decoders."""

from __future__ import annotations

import ipaddress
import time
from typing import Union

from .context import DecodeContext

Address = Union[bytes, bytearray, ipaddress.IPv4Address, ipaddress.IPv6Address]

_BYTES_PER_ROW = 16

OUI_NAMES = {
    "00:00:0c": "Cisco Systems, Inc.",
    "00:00:5e": "IANA",
    "01:00:5e": "IANA",
}


def format_timestamp(seconds: int, microseconds: int) -> str:
    """Format a capture time as ``[HH:MM:SS.uuuuuu]`` in local time."""
    clock = time.strftime("%H:%M:%S", time.localtime(seconds))
    return f"[{clock}.{microseconds:06d}]"


def _printable(byte: int) -> bool:
    return 0x20 <= byte < 0x7F


def format_packet_bytes(data: bytes) -> str:
    """Render ``data`` as a hex dump with an ASCII column, 16 bytes per row."""
    lines = []
    for offset in range(0, len(data), _BYTES_PER_ROW):
        row = data[offset:offset + _BYTES_PER_ROW]
        hex_part = " " + row.hex(" ", -2)
        padding = " " * int((_BYTES_PER_ROW - len(row)) * 2.5)
        text = "".join(chr(b) if _printable(b) else "." for b in row)
        lines.append(f"\n\t0x{offset:04x}: {hex_part} {padding} {text}")
    return "".join(lines)


def get_oui(mac: Union[bytes, str]) -> str:
    """Return the vendor registered for the first three octets of ``mac``."""
    if isinstance(mac, str):
        prefix = mac[:8].lower()
    else:
        prefix = bytes(mac[:3]).hex(":")
    return OUI_NAMES.get(prefix, "Unknown")


def print_clear_text(ctx: DecodeContext, payload: bytes) -> None:
    """Write the payload as text if every byte of it is plain ASCII."""
    text = bytes(payload[:max(ctx.payload_length, 0)])
    if any(b > 126 for b in text):
        return
    ctx.write("\n\t\t" + text.decode("ascii").replace("\n", "\n\t\t"))


def _sum_words(data: bytes) -> int:
    if len(data) % 2:
        data += b"\x00"
    return sum(int.from_bytes(data[i:i + 2], "big") for i in range(0, len(data), 2))


def validate_checksum(pseudo_header: bytes | None, data: bytes, num_32bit_words: int) -> int:
    """Compute the Internet checksum over a pseudo header and ``data``.

    Only the first ``num_32bit_words`` 32-bit words of ``data`` are summed.
    A result of zero means the embedded checksum is correct.
    """
    total = _sum_words(bytes(pseudo_header or b""))
    total += _sum_words(bytes(data[:max(num_32bit_words, 0) * 4]))
    return ~((total + (total >> 16)) & 0xFFFF) & 0xFFFF


def _packed(address: Address) -> bytes:
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return address.packed
    return bytes(address)


def pseudo_ip_header(src: Address, dst: Address, protocol: int, payload_len: int) -> bytes:
    """Build the 12-byte IPv4 pseudo header used by TCP and UDP checksums."""
    return (
        _packed(src)
        + _packed(dst)
        + bytes((0, protocol & 0xFF))
        + (payload_len & 0xFFFF).to_bytes(2, "big")
    )


def pseudo_ip6_header(src: Address, dst: Address, plen: int, nxt: int) -> bytes:
    """Build the 40-byte IPv6 pseudo header used by upper-layer checksums."""
    return (
        _packed(src)
        + _packed(dst)
        + (plen & 0xFFFFFFFF).to_bytes(4, "big")
        + bytes((0, 0, 0, nxt & 0xFF))
    )