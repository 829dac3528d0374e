"""Universal key helpers."""
from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s.:\-]")


def universal_key(value: str | bytes) -> bytes:
    """Key from raw bytes or from its text form (ASCII/UTF-8 characters)."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return value.encode("utf-8")


def key_from_hex(text: str) -> bytes:
    """Parse ``06.0E.2B.34...``, ``060e2b34...`` or space separated hex."""
    cleaned = _SEPARATORS.sub("", text)
    if not cleaned:
        raise ValueError("Empty universal key")
    return bytes.fromhex(cleaned)


def format_key(key: bytes) -> str:
    """Dotted upper-case hex, the way SMPTE labels are usually written."""
    return ".".join(f"{b:02X}" for b in key)
