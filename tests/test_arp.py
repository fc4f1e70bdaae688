import ipaddress
import struct

import pytest

from packetlens.arp import (
    ARPHRD_ETHER,
    ARPOP_REPLY,
    ARPOP_REQUEST,
    ARPOP_REVREPLY,
    ARPOP_REVREQUEST,
    print_arp_frame,
    print_arp_header,
)
from packetlens.context import DecodeContext, Verbosity
from packetlens.ethernet import ETHERTYPE_IP

SENDER_MAC = bytes.fromhex("020000000001")
TARGET_MAC = bytes.fromhex("020000000002")
SENDER_IP = "192.0.2.1"
TARGET_IP = "192.0.2.2"


def arp(op, spa=SENDER_IP, tpa=TARGET_IP, hrd=ARPHRD_ETHER, pro=ETHERTYPE_IP):
    return (
        struct.pack("!HHBBH", hrd, pro, 6, 4, op)
        + SENDER_MAC
        + ipaddress.IPv4Address(spa).packed
        + TARGET_MAC
        + ipaddress.IPv4Address(tpa).packed
    )


def decode(data, verbosity):
    ctx = DecodeContext(verbosity=verbosity)
    print_arp_frame(ctx, data)
    return ctx.getvalue()


def test_request():
    out = decode(arp(ARPOP_REQUEST), Verbosity.LOW)
    assert out.startswith(", Request")
    assert f"who-has {TARGET_IP}" in out
    assert out.endswith(f"tell {SENDER_IP}")


def test_reply():
    out = decode(arp(ARPOP_REPLY), Verbosity.LOW)
    assert out.startswith(", Reply")
    assert "is-at 2:0:0:0:0:1" in out
    assert "(oui Unknown)" in out


def test_gratuitous_at_low_verbosity():
    out = decode(arp(ARPOP_REQUEST, tpa=SENDER_IP), Verbosity.LOW)
    assert out == f", Announcement {SENDER_IP}"


def test_gratuitous_at_medium_verbosity():
    out = decode(arp(ARPOP_REPLY, tpa=SENDER_IP), Verbosity.MEDIUM)
    assert ", Announcement " in out
    assert "is-at" in out


def test_reverse_request_and_reply():
    assert "Reverse Request who-is" in decode(arp(ARPOP_REVREQUEST), Verbosity.LOW)
    assert "Reverse Reply" in decode(arp(ARPOP_REVREPLY), Verbosity.LOW)


def test_unsupported_operation():
    out = decode(arp(9), Verbosity.LOW)
    assert out == f", Unsupported ARP operation (0x{9:04X})"


def test_header_printed_at_medium():
    out = decode(arp(ARPOP_REQUEST), Verbosity.MEDIUM)
    assert out.startswith(", Ethernet (len 6)")
    assert "(len 4)" in out


def test_header_not_printed_at_low():
    assert "Ethernet" not in decode(arp(ARPOP_REQUEST), Verbosity.LOW)


def test_print_arp_header_unknown_hardware():
    ctx = DecodeContext(verbosity=Verbosity.MEDIUM)
    print_arp_header(ctx, arp(ARPOP_REQUEST, hrd=99, pro=0x9999))
    out = ctx.getvalue()
    assert out.count("UNKNOWN") == 2


def test_truncated_raises():
    with pytest.raises(ValueError):
        print_arp_frame(DecodeContext(), arp(ARPOP_REQUEST)[:12])
    with pytest.raises(ValueError):
        print_arp_header(DecodeContext(), b"\x00\x01")