"""Printers for the clear-text application protocols carried over TCP and UDP."""

from __future__ import annotations

from .context import SUPPRESS_PAYLOAD_LENGTH, DecodeContext, Verbosity
from .packet_utils import print_clear_text


def _print_clear_text_protocol(ctx: DecodeContext, name: str, payload: bytes) -> None:
    ctx.protocol_spacing()
    ctx.write(name)
    _print_payload(ctx, payload)


def _print_payload(ctx: DecodeContext, payload: bytes) -> None:
    if ctx.verbosity >= Verbosity.MEDIUM and ctx.payload_length:
        ctx.write(f", length {ctx.payload_length}")
        print_clear_text(ctx, payload)
        ctx.payload_length = SUPPRESS_PAYLOAD_LENGTH


def print_ftp_frame(ctx: DecodeContext, payload: bytes) -> None:
    """Print an FTP control segment."""
    _print_clear_text_protocol(ctx, "FTP", payload)


def print_http_frame(ctx: DecodeContext, payload: bytes, is_http_alt: bool) -> None:
    """Print an HTTP segment, noting the method at low verbosity."""
    ctx.protocol_spacing()
    ctx.write("HTTP")
    if is_http_alt:
        ctx.write(" (alternative)")
    if ctx.verbosity <= Verbosity.LOW:
        first = payload[:1]
        if first == b"G":
            ctx.write("/GET")
        elif first == b"P":
            ctx.write("/POST")
    _print_payload(ctx, payload)


def print_imap_frame(ctx: DecodeContext, payload: bytes) -> None:
    """Print an IMAP segment."""
    _print_clear_text_protocol(ctx, "IMAP", payload)


def print_pop3_frame(ctx: DecodeContext, payload: bytes) -> None:
    """Print a POP3 segment."""
    _print_clear_text_protocol(ctx, "POP3", payload)


def print_smtp_frame(ctx: DecodeContext, payload: bytes) -> None:
    """Print an SMTP segment."""
    _print_clear_text_protocol(ctx, "SMTP", payload)


def print_dns_frame(ctx: DecodeContext) -> None:
    """Print a DNS message; DNS adds nothing to the transport summary."""