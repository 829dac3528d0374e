"""Record framing: ``UniversalKey | Field*``.

Decoding is a single pass: verify the key, unpack the body, then resolve
each declared field against the unpacked tags. Tags the schema does not
declare are skipped so newer producers stay readable.
"""
from __future__ import annotations

from typing import Any

from .checksum import Checksum, default_checksum
from .envelope import open_envelope, seal_envelope
from .errors import (
    DuplicateTag,
    FieldConversionError,
    MissingRequiredField,
    TruncatedUniversalKey,
    UniversalKeyMismatch,
)
from .fields import pack_fields, unpack_fields
from .protocol import DEFAULT_STRICT
from .schema import CONVERSION_ERRORS, RecordSchema, schema_of


def _checked_fields(schema: RecordSchema, record: Any) -> list[tuple[int, bool, bytes | None]]:
    out = []
    seen: set[int] = set()
    for item in schema.enumerate_fields(record):
        if item[0] in seen:
            raise DuplicateTag(item[0])
        seen.add(item[0])
        out.append(item)
    return out


def encode_body(schema: RecordSchema, record: Any) -> bytes:
    """Field body only, as carried by nested records."""
    return pack_fields(_checked_fields(schema, record))


def encode_record(schema: RecordSchema, record: Any) -> bytes:
    return schema.universal_key + encode_body(schema, record)


def decode_body(schema: RecordSchema, body: bytes, strict: bool = DEFAULT_STRICT) -> Any:
    values, _ = unpack_fields(body, strict=strict)

    bound: dict[str, Any] = {}
    for spec in schema.fields():
        if spec.tag not in values:
            if not spec.optional:
                raise MissingRequiredField(spec.tag, spec.name)
            bound[spec.name] = None
            continue
        try:
            bound[spec.name] = spec.converter.from_bytes(values[spec.tag])
        except CONVERSION_ERRORS as e:
            raise FieldConversionError(spec.tag, e) from e
    return schema.build_record(bound)


def decode_record(schema: RecordSchema, data: bytes, strict: bool = DEFAULT_STRICT) -> Any:
    key = schema.universal_key
    if len(data) < len(key):
        raise TruncatedUniversalKey(len(key), len(data))
    observed = bytes(data[: len(key)])
    if observed != key:
        raise UniversalKeyMismatch(key, observed)
    return decode_body(schema, data[len(key) :], strict=strict)


def to_bytes(record: Any, schema: RecordSchema | None = None) -> bytes:
    """Serialize a record whose class was declared with ``@klv_record``."""
    return encode_record(schema or schema_of(record), record)


def from_bytes(data: bytes, cls: Any, strict: bool = DEFAULT_STRICT) -> Any:
    """Deserialize into ``cls`` (a ``@klv_record`` class or a schema)."""
    return decode_record(schema_of(cls), data, strict=strict)


def to_bytes_with_checksum(
    record: Any, checksum: Checksum | None = None, schema: RecordSchema | None = None
) -> bytes:
    return seal_envelope(to_bytes(record, schema), checksum or default_checksum())


def from_bytes_with_checksum(
    data: bytes, cls: Any, checksum: Checksum | None = None, strict: bool = DEFAULT_STRICT
) -> Any:
    payload = open_envelope(data, checksum or default_checksum())
    return from_bytes(payload, cls, strict=strict)
