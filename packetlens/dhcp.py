"""DHCP option decoding."""

from __future__ import annotations

import ipaddress
from enum import IntEnum
from typing import Callable

from .context import DecodeContext, Verbosity


class DhcpOption(IntEnum):
    """DHCP option codes understood by the decoder."""

    PAD = 0x00
    SUBNET_MASK = 0x01
    TIME_OFFSET = 0x02
    ROUTER = 0x03
    DOMAIN_NAME_SERVER = 0x06
    HOST_NAME = 0x0C
    DOMAIN_NAME = 0x0F
    BROADCAST_ADDRESS = 0x1C
    REQUESTED_IP_ADDRESS = 0x32
    IP_ADDRESS_LEASE_TIME = 0x33
    MESSAGE_TYPE = 0x35
    SERVER_IDENTIFIER = 0x36
    PARAMETER_REQUEST_LIST = 0x37
    RENEWAL_TIME = 0x3A
    REBINDING_TIME = 0x3B
    CLIENT_IDENTIFIER = 0x3D
    END = 0xFF


class DhcpMessageType(IntEnum):
    """Values of the DHCP message type option."""

    DISCOVER = 1
    OFFER = 2
    REQUEST = 3
    DECLINE = 4
    ACK = 5
    NAK = 6
    RELEASE = 7
    INFORM = 8


def _word(content: bytes) -> bytes:
    return bytes(content[:4]).ljust(4, b"\x00")


def _address(content: bytes) -> str:
    return str(ipaddress.IPv4Address(_word(content)))


def _integer(content: bytes) -> str:
    return str(int.from_bytes(_word(content), "big", signed=True))


def _text(content: bytes) -> str:
    return bytes(content).split(b"\x00", 1)[0].decode("latin-1")


_VALUED_OPTIONS: dict[int, tuple[str, Callable[[bytes], str]]] = {
    DhcpOption.SUBNET_MASK: ("subnet mask", _address),
    DhcpOption.TIME_OFFSET: ("time offset", _integer),
    DhcpOption.ROUTER: ("router", _address),
    DhcpOption.DOMAIN_NAME_SERVER: ("dns", _address),
    DhcpOption.HOST_NAME: ("hostname", _text),
    DhcpOption.DOMAIN_NAME: ("domain name", _text),
    DhcpOption.BROADCAST_ADDRESS: ("broadcast address", _address),
    DhcpOption.REQUESTED_IP_ADDRESS: ("requested IP address", _address),
    DhcpOption.IP_ADDRESS_LEASE_TIME: ("IP address lease time", _integer),
    DhcpOption.SERVER_IDENTIFIER: ("server identifier", _address),
    DhcpOption.RENEWAL_TIME: ("renewal time", _integer),
    DhcpOption.REBINDING_TIME: ("rebinding time", _integer),
    DhcpOption.CLIENT_IDENTIFIER: ("client identifier", _text),
}


def print_dhcp_frame(ctx: DecodeContext, data: bytes) -> None:
    """Print the options of a DHCP message, stopping at the end option."""
    ctx.protocol_spacing()
    ctx.write("DHCP")

    end = min(ctx.payload_length, len(data))
    pos = 0
    while pos < end:
        code = data[pos]
        if code == DhcpOption.END or pos + 1 >= len(data):
            break
        length = data[pos + 1]
        print_dhcp_option(ctx, data[pos + 2:pos + 2 + length], code)
        pos += length + 2


def print_dhcp_option(ctx: DecodeContext, content: bytes, option: int) -> None:
    """Print one DHCP option; only its code unless verbosity is high."""
    if ctx.verbosity <= Verbosity.MEDIUM:
        ctx.write(f", option {option}")
        return

    if option == DhcpOption.PAD:
        ctx.write(f", pad ({DhcpOption.PAD.value})")
    elif option == DhcpOption.MESSAGE_TYPE:
        kind = content[0] if content else 0
        ctx.write(f", message type {get_dhcp_message_type_name(kind)} ({kind})")
    elif option == DhcpOption.PARAMETER_REQUEST_LIST:
        ctx.write(f", parameter request list ({DhcpOption.PARAMETER_REQUEST_LIST.value})")
    elif option in _VALUED_OPTIONS:
        label, render = _VALUED_OPTIONS[option]
        ctx.write(f", {label} ({option}) {render(content)}")
    else:
        ctx.write(f", unsupported option {option}")


def get_dhcp_message_type_name(message_type: int) -> str:
    """Return the lower-case name of a DHCP message type, or ``unknown``."""
    try:
        return DhcpMessageType(message_type).name.lower()
    except ValueError:
        return "unknown"