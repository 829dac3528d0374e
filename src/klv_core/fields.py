"""Tag-Length-Value field bodies.

A field body is a run of ``Tag | Length | Value`` entries with no framing
of its own. Tags use the same variable-length rules as lengths.
"""
from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple
from warnings import warn

from .errors import DuplicateTag, MalformedLength, MalformedTag, TruncatedUniversalKey, TruncatedValue
from .length import decode_length, encode_length
from .protocol import DEFAULT_STRICT


class RawField(NamedTuple):
    """One undecoded entry. ``offset`` is where its tag starts."""

    tag: int
    offset: int
    length: int
    value: bytes


def pack_field(tag: int, value: bytes) -> bytes:
    return encode_length(tag) + encode_length(len(value)) + bytes(value)


def pack_fields(fields: Iterable[tuple]) -> bytes:
    """Concatenate entries in the order given.

    Accepts ``(tag, value)`` pairs or ``(tag, is_present, value)`` triples;
    absent triples are skipped, so an empty value is only written when the
    field is present with zero-length data.
    """
    out = bytearray()
    for item in fields:
        if len(item) == 3:
            tag, present, value = item
            if not present:
                continue
        else:
            tag, value = item
        out += pack_field(tag, value)
    return bytes(out)


def iter_fields(buf: bytes, offset: int = 0, end: int | None = None) -> Iterator[RawField]:
    """Walk entries in ``buf[offset:end]`` without interpreting them."""
    if end is not None:
        buf = buf[:end]
    end = len(buf)
    pos = offset
    while pos < end:
        start = pos
        try:
            tag, used = decode_length(buf, pos)
        except MalformedLength as e:
            raise MalformedTag(f"Bad tag at offset {start}: {e}") from e
        pos += used

        length, used = decode_length(buf, pos)
        pos += used

        available = end - pos
        if length > available:
            raise TruncatedValue(tag, length, available)
        yield RawField(tag, start, length, bytes(buf[pos : pos + length]))
        pos += length


def unpack_fields(buf: bytes, strict: bool = DEFAULT_STRICT) -> tuple[dict[int, bytes], int]:
    """Decode a whole field body into ``{tag: value}``.

    The caller hands over an exact slice, so the consumed count always
    equals ``len(buf)`` on success. A repeated tag keeps its last value and
    emits a warning, or raises :class:`DuplicateTag` when ``strict``.
    """
    values: dict[int, bytes] = {}
    for raw in iter_fields(buf):
        if raw.tag in values:
            if strict:
                raise DuplicateTag(raw.tag)
            warn(f"Duplicate tag {raw.tag} at offset {raw.offset}; keeping the later value")
        values[raw.tag] = raw.value
    return values, len(buf)


def inspect_packet(buf: bytes, key_length: int) -> tuple[bytes, list[RawField]]:
    """Split a payload into its universal key and every raw entry, schema-free."""
    if len(buf) < key_length:
        raise TruncatedUniversalKey(key_length, len(buf))
    return bytes(buf[:key_length]), list(iter_fields(buf, key_length))
