"""Domain value <-> field value bytes.

All multi-byte numbers are big-endian. Converters raise ``ValueError``
(or ``TypeError``) on bad input; the record codec turns that into
:class:`~klv_core.errors.FieldConversionError` with the field's tag.
"""
from __future__ import annotations

import struct
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Converter(Protocol):
    def to_bytes(self, value: Any) -> bytes: ...

    def from_bytes(self, data: bytes) -> Any: ...


class Fixed:
    """Fixed-width value described by a :mod:`struct` format."""

    def __init__(self, fmt: str, name: str):
        self._struct = struct.Struct(">" + fmt)
        self.width = self._struct.size
        self.name = name

    def to_bytes(self, value: Any) -> bytes:
        try:
            return self._struct.pack(value)
        except (struct.error, OverflowError) as e:
            raise ValueError(f"{self.name} cannot hold {value!r}: {e}") from e

    def from_bytes(self, data: bytes) -> Any:
        if len(data) != self.width:
            raise ValueError(f"{self.name} needs {self.width} bytes, got {len(data)}")
        return self._struct.unpack(data)[0]

    def __repr__(self) -> str:
        return self.name


class Bool(Fixed):
    def __init__(self):
        super().__init__("B", "BOOL")

    def to_bytes(self, value: Any) -> bytes:
        if not isinstance(value, int):
            raise TypeError(f"BOOL expects bool or int, got {type(value).__name__}")
        return b"\x01" if value else b"\x00"

    def from_bytes(self, data: bytes) -> bool:
        return super().from_bytes(data) != 0


class Str:
    name = "STR"

    def to_bytes(self, value: str) -> bytes:
        if not isinstance(value, str):
            raise TypeError(f"STR expects str, got {type(value).__name__}")
        return value.encode("utf-8")

    def from_bytes(self, data: bytes) -> str:
        return bytes(data).decode("utf-8")

    def __repr__(self) -> str:
        return self.name


class Bytes:
    name = "BYTES"

    def to_bytes(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"BYTES expects bytes, got {type(value).__name__}")
        return bytes(value)

    def from_bytes(self, data: bytes) -> bytes:
        return bytes(data)

    def __repr__(self) -> str:
        return self.name


class TimestampMicro:
    """UTC datetime as unsigned 64-bit microseconds since the Unix epoch."""

    name = "TIMESTAMP_MICRO"
    _u64 = Fixed("Q", "TIMESTAMP_MICRO")

    def to_bytes(self, value: datetime) -> bytes:
        if not isinstance(value, datetime):
            raise TypeError(f"TIMESTAMP_MICRO expects datetime, got {type(value).__name__}")
        # Decode yields aware UTC
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("TIMESTAMP_MICRO needs a timezone-aware datetime")
        delta = value - EPOCH
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return self._u64.to_bytes(micros)

    def from_bytes(self, data: bytes) -> datetime:
        return EPOCH + timedelta(microseconds=self._u64.from_bytes(data))

    def __repr__(self) -> str:
        return self.name


class Char(Fixed):
    """One code point as a 4-byte big-endian integer."""

    def __init__(self):
        super().__init__("I", "CHAR")

    def to_bytes(self, value: str) -> bytes:
        if not isinstance(value, str) or len(value) != 1:
            raise TypeError(f"CHAR expects a single character, got {value!r}")
        return super().to_bytes(ord(value))

    def from_bytes(self, data: bytes) -> str:
        code = super().from_bytes(data)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            raise ValueError(f"CHAR {code:#x} is not a valid code point")
        return chr(code)


class Seq:
    """Fixed-width elements concatenated with no per-element length."""

    def __init__(self, converter):
        width = getattr(converter, "width", None)
        if not width:
            raise ValueError(f"Seq needs a fixed-width element converter, got {converter!r}")
        self.converter = converter
        self.name = f"Seq({converter!r})"

    def to_bytes(self, value: Any) -> bytes:
        if isinstance(value, (str, bytes, bytearray)):
            raise TypeError(f"{self.name} expects a list, got {type(value).__name__}")
        return b"".join(self.converter.to_bytes(v) for v in value)

    def from_bytes(self, data: bytes) -> list:
        w = self.converter.width
        if len(data) % w:
            raise ValueError(f"{self.name} body of {len(data)} bytes is not a multiple of {w}")
        return [self.converter.from_bytes(data[i : i + w]) for i in range(0, len(data), w)]

    def __repr__(self) -> str:
        return self.name


class Tuple:
    """Heterogeneous elements back to back.

    Every element but the last must be fixed-width; the last one takes
    whatever remains of the value.
    """

    def __init__(self, *converters):
        if not converters:
            raise ValueError("Tuple needs at least one converter")
        for c in converters[:-1]:
            if not getattr(c, "width", None):
                raise ValueError(f"Tuple element {c!r} is not fixed-width and is not last")
        self.converters = converters
        self.name = "Tuple(" + ", ".join(repr(c) for c in converters) + ")"

    def to_bytes(self, value: Any) -> bytes:
        value = tuple(value)
        if len(value) != len(self.converters):
            raise ValueError(f"{self.name} expects {len(self.converters)} items, got {len(value)}")
        return b"".join(c.to_bytes(v) for c, v in zip(self.converters, value))

    def from_bytes(self, data: bytes) -> tuple:
        out = []
        pos = 0
        for c in self.converters[:-1]:
            if pos + c.width > len(data):
                raise ValueError(f"{self.name} is truncated at item {len(out)}")
            out.append(c.from_bytes(data[pos : pos + c.width]))
            pos += c.width
        out.append(self.converters[-1].from_bytes(data[pos:]))
        return tuple(out)

    def __repr__(self) -> str:
        return self.name


class Nested:
    """Sub-record encoded as a bare field body (no universal key)."""

    def __init__(self, schema):
        self.schema = schema
        self.name = f"Nested({schema.name})"

    def to_bytes(self, value: Any) -> bytes:
        from .record import encode_body

        return encode_body(self.schema, value)

    def from_bytes(self, data: bytes) -> Any:
        from .record import decode_body

        return decode_body(self.schema, data)

    def __repr__(self) -> str:
        return self.name


U8 = Fixed("B", "U8")
U16 = Fixed("H", "U16")
U32 = Fixed("I", "U32")
U64 = Fixed("Q", "U64")
I8 = Fixed("b", "I8")
I16 = Fixed("h", "I16")
I32 = Fixed("i", "I32")
I64 = Fixed("q", "I64")
F32 = Fixed("f", "F32")
F64 = Fixed("d", "F64")
BOOL = Bool()
STR = Str()
BYTES = Bytes()
CHAR = Char()
TIMESTAMP_MICRO = TimestampMicro()
