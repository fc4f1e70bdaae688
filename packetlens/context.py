"""Decoding state shared by every protocol printer."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import IntEnum

SNAPLEN = 65535

# Marker written to ``payload_length`` by a protocol that already reported it.
SUPPRESS_PAYLOAD_LENGTH = -1


class Verbosity(IntEnum):
    """How much detail the decoders print."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


@dataclass
class DecodeContext:
    """Collects the decoded text of one packet and the bytes left to decode."""

    verbosity: Verbosity = Verbosity.NONE
    payload_length: int = 0
    _buffer: io.StringIO = field(default_factory=io.StringIO, init=False, repr=False)

    def write(self, text: str) -> None:
        """Append ``text`` to the output."""
        self._buffer.write(text)

    def protocol_spacing(self) -> None:
        """Separate the next protocol from the previous one."""
        self.write(": " if self.verbosity <= Verbosity.LOW else "\n\t")

    def getvalue(self) -> str:
        """Return everything written so far."""
        return self._buffer.getvalue()