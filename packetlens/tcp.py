"""TCP decoding: header fields, options, relative sequence numbers and dispatch by port."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from typing import Union

from .application import (
    print_ftp_frame,
    print_http_frame,
    print_imap_frame,
    print_pop3_frame,
    print_smtp_frame,
)
from .context import DecodeContext, Verbosity
from .packet_utils import pseudo_ip6_header, pseudo_ip_header, validate_checksum

FTP_PORT = 21
TELNET_PORT = 23
SMTP_PORT = 25
DNS_PORT = 53
HTTP_PORT = 80
HTTP_ALT_PORT = 8080
POP3_PORT = 110
IMAP_PORT = 143

MAX_N_TCP_SESSIONS = 100

TH_FIN = 0x01
TH_SYN = 0x02
TH_RST = 0x04
TH_PUSH = 0x08
TH_ACK = 0x10
TH_URG = 0x20
TH_ECE = 0x40
TH_CWR = 0x80

TCPOPT_EOL = 0
TCPOPT_NOP = 1
TCPOPT_MAXSEG = 2
TCPOPT_WINDOW = 3
TCPOPT_SACK_PERMITTED = 4
TCPOPT_SACK = 5
TCPOPT_TIMESTAMP = 8

TCPOLEN_MAXSEG = 4
TCPOLEN_WINDOW = 3
TCPOLEN_SACK_PERMITTED = 2
TCPOLEN_TIMESTAMP = 10

_HEADER = struct.Struct("!HHIIBBHHH")
TCP_HEADER_SIZE = _HEADER.size

_FLAG_NAMES = (
    (TH_FIN, "FIN"),
    (TH_SYN, "SYN"),
    (TH_RST, "RST"),
    (TH_PUSH, "PSH"),
    (TH_ACK, "ACK"),
    (TH_URG, "URG"),
    (TH_ECE, "ECE"),
    (TH_CWR, "CWR"),
)

Address = Union[bytes, bytearray, ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class TcpHeader:
    """The fixed 20-byte part of a TCP header."""

    sport: int
    dport: int
    seq: int
    ack: int
    offset: int
    reserved: int
    flags: int
    window: int
    checksum: int
    urgent: int

    @property
    def header_length(self) -> int:
        """Length of the header, options included, in bytes."""
        return self.offset * 4

    @classmethod
    def from_bytes(cls, data: bytes) -> "TcpHeader":
        """Parse the fixed part of a TCP header."""
        if len(data) < _HEADER.size:
            raise ValueError(
                f"truncated TCP header: {len(data)} bytes, need at least {_HEADER.size}"
            )
        sport, dport, seq, ack, offset_byte, flags, window, checksum, urgent = (
            _HEADER.unpack_from(data)
        )
        return cls(
            sport=sport,
            dport=dport,
            seq=seq,
            ack=ack,
            offset=offset_byte >> 4,
            reserved=offset_byte & 0x0F,
            flags=flags,
            window=window,
            checksum=checksum,
            urgent=urgent,
        )


@dataclass
class TcpSession:
    """Initial sequence and acknowledgement numbers remembered for a connection."""

    session_id: int = 0
    seq_offset: int = 0
    ack_offset: int = 0


class SessionTable:
    """A fixed number of remembered connections used for relative numbering."""

    def __init__(self, size: int = MAX_N_TCP_SESSIONS) -> None:
        self._slots = [TcpSession() for _ in range(size)]

    def get(self, session_id: int, flags: int, seq: int, ack: int) -> TcpSession:
        """Look up a session, recording it when ``flags`` open a connection.

        For a segment that does not open a connection and whose session is
        unknown, the returned session has an id of zero.
        """
        index = next(
            (i for i, slot in enumerate(self._slots) if slot.session_id == session_id),
            None,
        )
        if not is_session_start(flags):
            if index is None:
                return TcpSession()
            found = self._slots[index]
            return TcpSession(session_id, found.seq_offset, found.ack_offset)

        # An unknown connection takes the first slot.
        self._slots[index if index is not None else 0] = TcpSession(session_id, seq, ack)
        return TcpSession(session_id, seq, ack)


_SESSIONS = SessionTable()


def format_tcp_flags(flags: int) -> str:
    """Render TCP flags as ``[SYN, ACK]``, or ``[none]`` when no flag is set."""
    if not flags:
        return "[none]"
    return "[" + ", ".join(name for bit, name in _FLAG_NAMES if flags & bit) + "]"


def is_session_start(flags: int) -> bool:
    """Tell whether a segment opens a connection (SYN or SYN+ACK alone)."""
    return flags in (TH_SYN | TH_ACK, TH_SYN)


def _swap16(value: int) -> int:
    return int.from_bytes((value & 0xFFFF).to_bytes(2, "big"), "little")


def _packed(address: Address) -> bytes:
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return address.packed
    return bytes(address)


def session_id(sport: int, dport: int, src: Address, dst: Address) -> int:
    """Derive a 32-bit connection identifier from ports and addresses."""
    value = _swap16(sport) ^ _swap16(dport)
    for address in (src, dst):
        raw = _packed(address)
        for start in range(0, len(raw), 4):
            value ^= int.from_bytes(raw[start:start + 4], "little")
    return (value - _swap16(sport)) & 0xFFFFFFFF


def format_tcp_options(options: bytes) -> str:
    """Render the TCP options area as a bracketed, comma-separated list."""
    parts: list[str] = []
    delimiter = ""
    pos = 0
    remaining = len(options)

    while remaining > 0:
        kind = options[pos]
        if kind == TCPOPT_EOL:
            parts.append(f"{delimiter}eol")
            break
        if kind == TCPOPT_NOP:
            parts.append(f"{delimiter}nop")
            pos += 1
            remaining -= 1
        else:
            if remaining < 2:
                break
            length = options[pos + 1]
            if length < 2 or length > remaining:
                break
            body = options[pos + 2:pos + length]
            if kind == TCPOPT_MAXSEG:
                if length == TCPOLEN_MAXSEG:
                    parts.append(f"{delimiter}mss {int.from_bytes(body, 'big')}")
            elif kind == TCPOPT_WINDOW:
                if length == TCPOLEN_WINDOW:
                    parts.append(f"{delimiter}ws {body[0]}")
            elif kind == TCPOPT_SACK_PERMITTED:
                if length == TCPOLEN_SACK_PERMITTED:
                    parts.append(f"{delimiter}sack perm")
            elif kind == TCPOPT_SACK:
                parts.append(f"{delimiter}sack")
            elif kind == TCPOPT_TIMESTAMP:
                if length == TCPOLEN_TIMESTAMP:
                    tsval, tsecr = struct.unpack("!II", body)
                    parts.append(f"{delimiter}TS val {tsval} ecr {tsecr}")
            else:
                parts.append(f"{delimiter}unsupported option {kind}")
            pos += length
            remaining -= length
        delimiter = ", "

    return "[" + "".join(parts) + "]"


def match_port_to_protocol(ctx: DecodeContext, port: int, payload: bytes) -> bool:
    """Print the application protocol known to use ``port``; False if none is."""
    if port == FTP_PORT:
        print_ftp_frame(ctx, payload)
    elif port in (TELNET_PORT, DNS_PORT):
        pass
    elif port == SMTP_PORT:
        print_smtp_frame(ctx, payload)
    elif port == HTTP_PORT:
        print_http_frame(ctx, payload, False)
    elif port == HTTP_ALT_PORT:
        print_http_frame(ctx, payload, True)
    elif port == POP3_PORT:
        print_pop3_frame(ctx, payload)
    elif port == IMAP_PORT:
        print_imap_frame(ctx, payload)
    else:
        return False
    return True


def _print_encapsulated(ctx: DecodeContext, header: TcpHeader, segment: bytes) -> None:
    payload = bytes(segment[TCP_HEADER_SIZE:])
    if not match_port_to_protocol(ctx, header.sport, payload):
        match_port_to_protocol(ctx, header.dport, payload)


def _addresses(ip_header: bytes, is_ipv6: bool) -> tuple[bytes, bytes]:
    if is_ipv6:
        return bytes(ip_header[8:24]), bytes(ip_header[24:40])
    return bytes(ip_header[12:16]), bytes(ip_header[16:20])


def _print_seq_ack(ctx: DecodeContext, header: TcpHeader, ip_header: bytes, is_ipv6: bool) -> None:
    src, dst = _addresses(ip_header, is_ipv6)
    ident = session_id(header.sport, header.dport, src, dst)
    session = _SESSIONS.get(ident, header.flags, header.seq, header.ack)

    if not session.session_id:
        ctx.write(f", seq {header.seq}")
        ctx.write(f", ack {header.ack}")
        return

    ctx.write(f", relative seq {(header.seq - session.seq_offset) & 0xFFFFFFFF}")
    if ctx.verbosity == Verbosity.HIGH:
        ctx.write(f" ({header.seq})")
    ctx.write(f", relative ack {(header.ack - session.ack_offset + 1) & 0xFFFFFFFF}")
    if ctx.verbosity == Verbosity.HIGH:
        ctx.write(f" ({header.ack})")


def _print_tcp_cksum(ctx: DecodeContext, header: TcpHeader, segment: bytes,
                     ip_header: bytes, is_ipv6: bool) -> None:
    src, dst = _addresses(ip_header, is_ipv6)
    if is_ipv6:
        plen = int.from_bytes(ip_header[4:6], "big")
        pseudo = pseudo_ip6_header(src, dst, plen, ip_header[6])
        words = plen // 4
    else:
        total_length = int.from_bytes(ip_header[2:4], "big")
        tcp_length = total_length - (ip_header[0] & 0x0F) * 4
        pseudo = pseudo_ip_header(src, dst, ip_header[9], tcp_length)
        words = tcp_length // 4
    verdict = "bad!" if validate_checksum(pseudo, bytes(segment), words) else "ok"
    ctx.write(f", tcp cksum 0x{header.checksum:04x} {verdict}")


def print_tcp_frame(ctx: DecodeContext, segment: bytes, ip_header: bytes, is_ipv6: bool) -> None:
    """Print a TCP segment found after ``ip_header`` and the protocol it carries."""
    header = TcpHeader.from_bytes(segment)
    ctx.protocol_spacing()
    ctx.write("TCP")
    ctx.write(f", ports [src:{header.sport}, dst:{header.dport}]")

    if ctx.verbosity <= Verbosity.LOW:
        ctx.payload_length -= header.header_length
        _print_encapsulated(ctx, header, segment)
        return

    _print_seq_ack(ctx, header, ip_header, is_ipv6)
    ctx.write(f", offset {header.offset}")
    ctx.write(f", reserved 0x{header.reserved:x}")
    ctx.write(", flags " + format_tcp_flags(header.flags))
    ctx.write(f", win {header.window}")
    _print_tcp_cksum(ctx, header, segment, ip_header, is_ipv6)
    ctx.write(", options " + format_tcp_options(bytes(segment[TCP_HEADER_SIZE:header.header_length])))

    ctx.payload_length -= header.header_length
    _print_encapsulated(ctx, header, segment)