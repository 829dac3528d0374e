"""BER-style variable-length integers, used for both lengths and tags."""
from __future__ import annotations

from .errors import LengthOverflow, MalformedLength
from .protocol import (
    INDEFINITE_OCTET,
    LONG_FORM_FLAG,
    LONG_FORM_MASK,
    MAX_LONG_FORM_OCTETS,
    MAX_VARLEN_VALUE,
    RESERVED_OCTET,
    SHORT_FORM_MAX,
)


def encode_length(n: int) -> bytes:
    """Encode ``n`` in short form (one byte) or minimal long form."""
    if n < 0:
        raise ValueError(f"Length must be non-negative, got {n}")
    if n > MAX_VARLEN_VALUE:
        raise LengthOverflow(f"Length {n} exceeds {MAX_LONG_FORM_OCTETS}-byte limit")
    if n <= SHORT_FORM_MAX:
        return bytes((n,))
    k = (n.bit_length() + 7) // 8
    return bytes((LONG_FORM_FLAG | k,)) + n.to_bytes(k, "big")


def decode_length(buf: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a length starting at ``offset``.

    Returns ``(value, bytes_consumed)``.
    """
    if offset >= len(buf):
        raise MalformedLength(f"No length octet at offset {offset}")

    first = buf[offset]
    if first <= SHORT_FORM_MAX:
        return first, 1
    if first == INDEFINITE_OCTET:
        raise MalformedLength(f"Indefinite length octet at offset {offset}")
    if first == RESERVED_OCTET:
        raise MalformedLength(f"Reserved length octet at offset {offset}")

    k = first & LONG_FORM_MASK
    if k > MAX_LONG_FORM_OCTETS:
        raise LengthOverflow(
            f"Long-form length of {k} bytes at offset {offset} exceeds {MAX_LONG_FORM_OCTETS}"
        )

    body = buf[offset + 1 : offset + 1 + k]
    if len(body) < k:
        raise MalformedLength(
            f"Long-form length at offset {offset} declares {k} bytes, {len(body)} available"
        )
    return int.from_bytes(body, "big"), 1 + k
