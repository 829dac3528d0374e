"""Pluggable checksum strategies for the envelope trailer."""
from __future__ import annotations

import hashlib
import hmac
import zlib
from abc import ABC, abstractmethod

from .errors import ChecksumMismatch
from .protocol import CRC32_WIDTH, DEFAULT_CHECKSUM


class Checksum(ABC):
    """Fixed-width trailer computed over a payload.

    Subclasses set ``name`` and ``width`` and implement :meth:`compute`.
    """

    name = "checksum"
    width = 0

    @abstractmethod
    def compute(self, payload: bytes) -> bytes:
        ...

    def verify(self, payload: bytes, trailer: bytes) -> None:
        computed = self.compute(payload)
        if not hmac.compare_digest(computed, bytes(trailer)):
            raise ChecksumMismatch(trailer, computed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width})"


class Crc32(Checksum):
    name = "crc32"
    width = CRC32_WIDTH

    def compute(self, payload: bytes) -> bytes:
        return (zlib.crc32(payload) & 0xFFFFFFFF).to_bytes(self.width, "big")


class Crc16A(Checksum):
    """CRC-16/ISO-IEC-14443-3-A (poly 0x1021, init 0xC6C6, reflected in and out)."""

    name = "crc16-a"
    width = 2

    def compute(self, payload: bytes) -> bytes:
        crc = 0x6363  # 0xC6C6 bit-reversed for the shift-right form
        for b in payload:
            crc ^= b
            for _ in range(8):
                crc = (crc >> 1) ^ 0x8408 if crc & 1 else crc >> 1
        return crc.to_bytes(self.width, "big")


class MisbBcc(Checksum):
    """MISB ST 0601 running 16-bit sum: even offsets weigh the high byte."""

    name = "misb-bcc"
    width = 2

    def compute(self, payload: bytes) -> bytes:
        bcc = 0
        for i, b in enumerate(payload):
            bcc = (bcc + (b << (8 * ((i + 1) % 2)))) & 0xFFFF
        return bcc.to_bytes(self.width, "big")


class Sha256Digest(Checksum):
    """SHA-256, optionally truncated to its first ``width`` bytes."""

    name = "sha256"

    def __init__(self, width: int = 32):
        if not 1 <= width <= 32:
            raise ValueError(f"SHA-256 width must be 1..32, got {width}")
        self.width = width

    def compute(self, payload: bytes) -> bytes:
        return hashlib.sha256(payload).digest()[: self.width]


CHECKSUMS = {
    Crc32.name: Crc32,
    Crc16A.name: Crc16A,
    MisbBcc.name: MisbBcc,
    Sha256Digest.name: Sha256Digest,
}


def get_checksum(name: str) -> Checksum:
    try:
        return CHECKSUMS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown checksum {name!r}; choose from {sorted(CHECKSUMS)}") from None


def default_checksum() -> Checksum:
    return get_checksum(DEFAULT_CHECKSUM)
