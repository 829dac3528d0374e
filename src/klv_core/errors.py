"""KLV error kinds.

Every failure is raised as exactly one subclass of :class:`KLVError`. The
``code`` attribute is stable and is what verification reports emit.
"""
from __future__ import annotations

from typing import Any


class KLVError(ValueError):
    code = "E_KLV"


class MalformedLength(KLVError):
    """Variable-length header is truncated, indefinite or reserved."""

    code = "E_MALFORMED_LENGTH"


class MalformedTag(KLVError):
    """Tag could not be decoded with the variable-length rules."""

    code = "E_MALFORMED_TAG"


class LengthOverflow(KLVError):
    """Length or tag does not fit in the supported integer width."""

    code = "E_LENGTH_OVERFLOW"


class TruncatedValue(KLVError):
    code = "E_TRUNCATED_VALUE"

    def __init__(self, tag: int, declared: int, available: int):
        self.tag = tag
        self.declared = declared
        self.available = available
        super().__init__(
            f"Field {tag} declares {declared} bytes but only {available} remain"
        )


class TruncatedUniversalKey(KLVError):
    code = "E_TRUNCATED_KEY"

    def __init__(self, expected_len: int, available: int):
        self.expected_len = expected_len
        self.available = available
        super().__init__(
            f"Universal key needs {expected_len} bytes but only {available} available"
        )


class TruncatedEnvelope(KLVError):
    code = "E_TRUNCATED_ENVELOPE"

    def __init__(self, width: int, available: int):
        self.width = width
        self.available = available
        super().__init__(
            f"Envelope of {available} bytes is shorter than the {width}-byte checksum"
        )


class UniversalKeyMismatch(KLVError):
    code = "E_KEY_MISMATCH"

    def __init__(self, expected: bytes, actual: bytes):
        self.expected = bytes(expected)
        self.actual = bytes(actual)
        super().__init__(
            f"Universal key mismatch: expected {self.expected.hex()}, got {self.actual.hex()}"
        )


class MissingRequiredField(KLVError):
    code = "E_MISSING_FIELD"

    def __init__(self, tag: int, name: str | None = None):
        self.tag = tag
        self.name = name
        label = f"{tag} ({name})" if name else str(tag)
        super().__init__(f"Required field {label} is absent")


class FieldConversionError(KLVError):
    code = "E_FIELD_CONVERSION"

    def __init__(self, tag: int, cause: Any):
        self.tag = tag
        self.cause = cause
        super().__init__(f"Field {tag} could not be converted: {cause}")


class ChecksumMismatch(KLVError):
    code = "E_CHECKSUM_MISMATCH"

    def __init__(self, expected: bytes, computed: bytes | None):
        self.expected = bytes(expected)
        self.computed = None if computed is None else bytes(computed)
        shown = "<not recomputable>" if self.computed is None else self.computed.hex()
        super().__init__(
            f"Checksum mismatch: packet carries {self.expected.hex()}, computed {shown}"
        )


class DuplicateTag(KLVError):
    code = "E_DUPLICATE_TAG"

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"Tag {tag} occurs more than once")


class SchemaError(KLVError):
    """Record type is not usable as a KLV schema."""

    code = "E_SCHEMA"
