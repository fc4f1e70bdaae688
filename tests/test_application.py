import pytest

from packetlens.application import (
    print_dns_frame,
    print_ftp_frame,
    print_http_frame,
    print_imap_frame,
    print_pop3_frame,
    print_smtp_frame,
)
from packetlens.context import SUPPRESS_PAYLOAD_LENGTH, DecodeContext, Verbosity

TEXT_PRINTERS = [
    (print_ftp_frame, "FTP"),
    (print_smtp_frame, "SMTP"),
    (print_pop3_frame, "POP3"),
    (print_imap_frame, "IMAP"),
]


@pytest.mark.parametrize("printer, name", TEXT_PRINTERS)
def test_low_verbosity_prints_name_only(printer, name):
    ctx = DecodeContext(verbosity=Verbosity.LOW, payload_length=5)
    printer(ctx, b"hello")
    assert ctx.getvalue() == ": " + name
    assert ctx.payload_length == 5


@pytest.mark.parametrize("printer, name", TEXT_PRINTERS)
def test_medium_verbosity_prints_text(printer, name):
    payload = b"220 ready"
    ctx = DecodeContext(verbosity=Verbosity.MEDIUM, payload_length=len(payload))
    printer(ctx, payload)
    out = ctx.getvalue()
    assert out.startswith("\n\t" + name + ", length 9")
    assert out.endswith("\n\t\t220 ready")
    assert ctx.payload_length == SUPPRESS_PAYLOAD_LENGTH


def test_empty_payload_prints_nothing_more():
    ctx = DecodeContext(verbosity=Verbosity.HIGH, payload_length=0)
    print_ftp_frame(ctx, b"")
    assert ctx.getvalue() == "\n\tFTP"
    assert ctx.payload_length == 0


def test_binary_payload_reports_length_without_text():
    ctx = DecodeContext(verbosity=Verbosity.MEDIUM, payload_length=3)
    print_smtp_frame(ctx, b"\x90\x91\x92")
    assert ctx.getvalue().endswith(", length 3")
    assert ctx.payload_length == SUPPRESS_PAYLOAD_LENGTH


@pytest.mark.parametrize("payload, suffix", [(b"GET / HTTP/1.1", "/GET"), (b"POST /x", "/POST")])
def test_http_method_at_low_verbosity(payload, suffix):
    ctx = DecodeContext(verbosity=Verbosity.LOW, payload_length=len(payload))
    print_http_frame(ctx, payload, False)
    assert ctx.getvalue() == ": HTTP" + suffix


def test_http_alternative_port():
    ctx = DecodeContext(verbosity=Verbosity.NONE)
    print_http_frame(ctx, b"HTTP/1.1 200 OK", True)
    assert ctx.getvalue() == ": HTTP (alternative)"


def test_http_medium_shows_request_text():
    payload = b"GET / HTTP/1.1\nHost: example.com"
    ctx = DecodeContext(verbosity=Verbosity.MEDIUM, payload_length=len(payload))
    print_http_frame(ctx, payload, False)
    out = ctx.getvalue()
    assert "/GET" not in out
    assert "\n\t\tHost: example.com" in out


def test_dns_writes_nothing():
    ctx = DecodeContext(verbosity=Verbosity.HIGH, payload_length=12)
    print_dns_frame(ctx)
    assert ctx.getvalue() == ""
    assert ctx.payload_length == 12