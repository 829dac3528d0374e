"""KLV Core - tagged-field codec, record framing and checksum envelope."""
from .checksum import Checksum, Crc16A, Crc32, MisbBcc, Sha256Digest, default_checksum, get_checksum
from .envelope import open_envelope, seal_envelope
from .errors import (
    ChecksumMismatch,
    DuplicateTag,
    FieldConversionError,
    KLVError,
    LengthOverflow,
    MalformedLength,
    MalformedTag,
    MissingRequiredField,
    SchemaError,
    TruncatedEnvelope,
    TruncatedUniversalKey,
    TruncatedValue,
    UniversalKeyMismatch,
)
from .fields import RawField, inspect_packet, iter_fields, pack_fields, unpack_fields
from .length import decode_length, encode_length
from .record import (
    decode_record,
    encode_record,
    from_bytes,
    from_bytes_with_checksum,
    to_bytes,
    to_bytes_with_checksum,
)
from .schema import DataclassSchema, FieldSpec, RecordSchema, klv_field, klv_record, schema_of

__all__ = [
    "Checksum", "Crc16A", "Crc32", "MisbBcc", "Sha256Digest", "default_checksum", "get_checksum",
    "open_envelope", "seal_envelope",
    "ChecksumMismatch", "DuplicateTag", "FieldConversionError", "KLVError", "LengthOverflow",
    "MalformedLength", "MalformedTag", "MissingRequiredField", "SchemaError", "TruncatedEnvelope",
    "TruncatedUniversalKey", "TruncatedValue", "UniversalKeyMismatch",
    "RawField", "inspect_packet", "iter_fields", "pack_fields", "unpack_fields",
    "decode_length", "encode_length",
    "decode_record", "encode_record", "from_bytes", "from_bytes_with_checksum", "to_bytes",
    "to_bytes_with_checksum",
    "DataclassSchema", "FieldSpec", "RecordSchema", "klv_field", "klv_record", "schema_of",
]
