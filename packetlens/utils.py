"""Small lookup helpers shared by the protocol decoders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

UNKNOWN_NAME = "UNKNOWN"


@dataclass(frozen=True)
class NameValue:
    """A numeric protocol value paired with its human-readable name."""

    value: int
    name: str


def lookup(value: int, table: Iterable[NameValue]) -> NameValue:
    """Return the first entry of ``table`` whose value matches.

    When no entry matches, an entry named ``UNKNOWN`` carrying ``value``
    is returned instead.
    """
    return next(
        (entry for entry in table if entry.value == value),
        NameValue(value, UNKNOWN_NAME),
    )