"""Wire protocol for the digiVIT sensor: command codec and UDP transport."""

from .codec import COMMAND, ParseError, checksum, counts_to_mm, decode_reply, encode_command
from .transport import ReplyTimeout, Transport, UdpTransport

__all__ = [
    "COMMAND",
    "ParseError",
    "checksum",
    "counts_to_mm",
    "decode_reply",
    "encode_command",
    "ReplyTimeout",
    "Transport",
    "UdpTransport",
]
