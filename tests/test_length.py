import pytest

from klv_core.errors import LengthOverflow, MalformedLength
from klv_core.length import decode_length, encode_length


@pytest.mark.parametrize(
    "n, wire",
    [
        (0, b"\x00"),
        (127, b"\x7f"),
        (128, b"\x81\x80"),
        (255, b"\x81\xff"),
        (256, b"\x82\x01\x00"),
        (65536, b"\x83\x01\x00\x00"),
        (2**64 - 1, b"\x88" + b"\xff" * 8),
    ],
)
def test_boundaries_round_trip(n, wire):
    assert encode_length(n) == wire
    assert decode_length(wire) == (n, len(wire))


def test_decode_at_offset_ignores_trailing_bytes():
    assert decode_length(b"\xaa\x81\xc8\x00\x00", 1) == (200, 2)


def test_non_minimal_long_form_is_accepted():
    assert decode_length(b"\x82\x00\x05") == (5, 3)


@pytest.mark.parametrize("wire", [b"", b"\x82\x01", b"\x84\x00\x00", b"\x80", b"\xff"])
def test_malformed_headers(wire):
    with pytest.raises(MalformedLength):
        decode_length(wire)


def test_long_form_wider_than_64_bits_overflows():
    with pytest.raises(LengthOverflow):
        decode_length(b"\x89" + b"\x01" * 9)
    with pytest.raises(LengthOverflow):
        encode_length(2**64)


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        encode_length(-1)
