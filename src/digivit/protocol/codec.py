"""Command frame encoding and reply decoding for the digiVIT ASCII protocol."""

from __future__ import annotations

import math
import re
from typing import Union

SEQUENCE_CHAR = "u"
COMMAND_CODE = "MD"

# Full-scale output of the digiVIT: 4.0 mm over 100,000 counts.
VOLTAGE_RANGE = 4.0
COUNT_RANGE = 100000

# One lowercase letter, whitespace, then the signed position terminated by '#'.
_REPLY_RE = re.compile(r"[a-z]\s+(-?[0-9]+)#")


class ParseError(ValueError):
    """Raised when a reply arrived but carries no position field."""


def checksum(payload: bytes) -> int:
    """Return the one's complement of the byte sum of ``payload`` (mod 256)."""
    return ~(sum(payload) & 0xFF) & 0xFF


def _build_command(sequence_char: str, command_code: str) -> bytes:
    body = (sequence_char + command_code).encode("ascii")
    return b"$" + body + b"#" + format(checksum(body), "X").encode("ascii")


COMMAND = _build_command(SEQUENCE_CHAR, COMMAND_CODE)


def encode_command() -> bytes:
    """Return the fixed position-read frame (``$uMD#F9``)."""
    return COMMAND


def decode_reply(data: Union[bytes, str]) -> int:
    """
    Extract the signed position (in counts) from a sensor reply.

    Parameters
    ----------
    data:
        Raw datagram payload, or already-decoded text.

    Returns
    -------
    int
        The position in counts, nominally 0 to 100,000.

    Raises
    ------
    ParseError
        If the reply does not contain the position pattern.
    """
    if isinstance(data, (bytes, bytearray)):
        text = bytes(data).decode("ascii", errors="replace")
    else:
        text = str(data)
    match = _REPLY_RE.search(text)
    if match is None:
        raise ParseError(f"No position field in reply: {text!r}")
    return int(match.group(1))


def counts_to_mm(counts: float) -> float:
    """Convert a raw count reading to millimetres (NaN passes through)."""
    value = float(counts)
    if math.isnan(value):
        return math.nan
    return value * (VOLTAGE_RANGE / COUNT_RANGE)
