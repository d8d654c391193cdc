from __future__ import annotations

import math

import pytest

from digivit.protocol.codec import (
    COMMAND,
    ParseError,
    checksum,
    counts_to_mm,
    decode_reply,
    encode_command,
)


def test_encode_command_frame() -> None:
    assert encode_command() == b"$uMD#F9"
    assert encode_command() is COMMAND


def test_checksum_complements_payload_sum() -> None:
    frame = encode_command()
    body, hex_sum = frame[1:].split(b"#")
    assert body == b"uMD"
    assert (sum(body) + int(hex_sum, 16)) % 256 == 255
    assert checksum(body) == int(hex_sum, 16)


def test_checksum_wraps_large_sums() -> None:
    assert checksum(b"\xff\xff") == 0x01
    assert checksum(b"") == 0xFF


@pytest.mark.parametrize(
    "reply, expected",
    [
        (b"x -1234#", -1234),
        (b"x 5000#", 5000),
        ("x 5000#", 5000),
        (b"$r   100000#3A", 100000),
        (b"m\t0#", 0),
    ],
)
def test_decode_reply_extracts_signed_counts(reply, expected) -> None:
    assert decode_reply(reply) == expected


@pytest.mark.parametrize("reply", [b"garbage", b"", b"X 12#", b"x 12", b"x-12#"])
def test_decode_reply_rejects_unmatched_text(reply) -> None:
    with pytest.raises(ParseError):
        decode_reply(reply)


def test_decode_reply_tolerates_non_ascii_bytes() -> None:
    assert decode_reply(b"\xfe\xffa 42#") == 42


def test_decode_reply_is_pure() -> None:
    data = b"q -77#"
    assert decode_reply(data) == decode_reply(data) == -77


def test_parse_error_is_value_error() -> None:
    assert issubclass(ParseError, ValueError)


@pytest.mark.parametrize(
    "counts, mm",
    [(100000, 4.0), (0, 0.0), (-50000, -2.0), (1000, 0.04)],
)
def test_counts_to_mm(counts, mm) -> None:
    assert counts_to_mm(counts) == pytest.approx(mm)


def test_counts_to_mm_passes_nan_through() -> None:
    assert math.isnan(counts_to_mm(math.nan))
