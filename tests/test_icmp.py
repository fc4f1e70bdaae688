import struct

import pytest

from packetlens.context import DecodeContext, Verbosity
from packetlens.icmp import print_icmp_frame
from packetlens.packet_utils import validate_checksum


def icmp_message(icmp_type, ident=1, seq=2, payload=b"ping", valid=True):
    raw = struct.pack("!BBHHH", icmp_type, 0, 0, ident, seq) + payload
    if not valid:
        return raw[:2] + b"\x12\x34" + raw[4:]
    checksum = validate_checksum(None, raw, (len(raw) + 3) // 4)
    return raw[:2] + checksum.to_bytes(2, "big") + raw[4:]


def test_echo_request_low():
    ctx = DecodeContext()
    data = icmp_message(8)
    print_icmp_frame(ctx, data, len(data))
    assert ctx.getvalue() == ": ICMP, echo request, id 1, seq 2"


def test_echo_reply_low():
    ctx = DecodeContext(verbosity=Verbosity.LOW)
    data = icmp_message(0, ident=7, seq=9)
    print_icmp_frame(ctx, data, len(data))
    assert ctx.getvalue() == ": ICMP, echo reply, id 7, seq 9"


def test_other_type_reports_number():
    ctx = DecodeContext()
    data = icmp_message(3)
    print_icmp_frame(ctx, data, len(data))
    assert ctx.getvalue().startswith(": ICMP, type 3,")


def test_medium_checksum_ok():
    ctx = DecodeContext(verbosity=Verbosity.MEDIUM)
    data = icmp_message(8)
    print_icmp_frame(ctx, data, len(data))
    out = ctx.getvalue()
    assert out.startswith("\n\tICMP, echo request")
    assert out.endswith(f", icmp cksum 0x{data[2:4].hex()} ok")


def test_medium_checksum_ok_with_odd_length():
    ctx = DecodeContext(verbosity=Verbosity.MEDIUM)
    data = icmp_message(8, payload=b"abc")
    print_icmp_frame(ctx, data, len(data))
    assert ctx.getvalue().endswith(" ok")


def test_medium_checksum_bad():
    ctx = DecodeContext(verbosity=Verbosity.HIGH)
    data = icmp_message(8, valid=False)
    print_icmp_frame(ctx, data, len(data))
    assert ctx.getvalue().endswith(", icmp cksum 0x1234 bad!")


def test_truncated_raises():
    with pytest.raises(ValueError):
        print_icmp_frame(DecodeContext(), b"\x08\x00", 2)