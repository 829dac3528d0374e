"""Envelope: ``Payload | Checksum``.

The envelope knows nothing about fields. It only appends a fixed-width
trailer and checks it before anything downstream parses the payload.
"""
from __future__ import annotations

from .checksum import Checksum, default_checksum
from .errors import TruncatedEnvelope


def seal_envelope(payload: bytes, checksum: Checksum | None = None) -> bytes:
    checksum = checksum or default_checksum()
    trailer = checksum.compute(payload)
    if len(trailer) != checksum.width:
        raise ValueError(
            f"{checksum.name} produced {len(trailer)} bytes, declared width {checksum.width}"
        )
    return bytes(payload) + trailer


def split_envelope(buf: bytes, width: int) -> tuple[bytes, bytes]:
    if len(buf) < width:
        raise TruncatedEnvelope(width, len(buf))
    cut = len(buf) - width
    return bytes(buf[:cut]), bytes(buf[cut:])


def open_envelope(buf: bytes, checksum: Checksum | None = None) -> bytes:
    """Verify the trailer and return the payload; raises on mismatch."""
    checksum = checksum or default_checksum()
    payload, trailer = split_envelope(buf, checksum.width)
    checksum.verify(payload, trailer)
    return payload
