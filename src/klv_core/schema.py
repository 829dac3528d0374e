"""Field visitor: how a record type exposes its tagged fields to the codec."""
from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Iterator, NamedTuple, Sequence

from .converters import Converter
from .errors import DuplicateTag, FieldConversionError, MissingRequiredField, SchemaError
from .keys import universal_key as _as_key

TAG_KEY = "klv_tag"
CONVERTER_KEY = "klv_converter"
OPTIONAL_KEY = "klv_optional"
SCHEMA_ATTR = "__klv_schema__"

# Converters signal bad input with these; codec code re-raises them tagged
CONVERSION_ERRORS = (ValueError, TypeError, OverflowError)


class FieldSpec(NamedTuple):
    tag: int
    name: str
    converter: Converter
    optional: bool


class RecordSchema(ABC):
    """Maps one record type to an ordered ``(tag, bytes)`` sequence and back."""

    name: str = "record"
    universal_key: bytes = b""

    @abstractmethod
    def fields(self) -> Sequence[FieldSpec]:
        ...

    @abstractmethod
    def build_record(self, values: dict[str, Any]) -> Any:
        """Construct a record from decoded values keyed by field name."""

    def enumerate_fields(self, record: Any) -> Iterator[tuple[int, bool, bytes | None]]:
        """Yield ``(tag, is_present, value_bytes)`` in declaration order."""
        for spec in self.fields():
            value = getattr(record, spec.name)
            if value is None:
                if not spec.optional:
                    raise MissingRequiredField(spec.tag, spec.name)
                yield spec.tag, False, None
                continue
            try:
                data = spec.converter.to_bytes(value)
            except CONVERSION_ERRORS as e:
                raise FieldConversionError(spec.tag, e) from e
            yield spec.tag, True, data


class DataclassSchema(RecordSchema):
    """Schema read from a dataclass declared with :func:`klv_field`."""

    def __init__(self, cls: type, universal_key: str | bytes):
        if not dataclasses.is_dataclass(cls):
            raise SchemaError(f"{cls.__name__} is not a dataclass")
        self.cls = cls
        self.name = cls.__name__
        self.universal_key = _as_key(universal_key)

        specs: list[FieldSpec] = []
        seen: set[int] = set()
        for f in dataclasses.fields(cls):
            if TAG_KEY not in f.metadata:
                continue
            tag = f.metadata[TAG_KEY]
            if tag < 0:
                raise SchemaError(f"{self.name}.{f.name}: tag must be non-negative, got {tag}")
            if tag in seen:
                raise DuplicateTag(tag)
            seen.add(tag)
            optional = f.metadata.get(OPTIONAL_KEY, False)
            specs.append(FieldSpec(tag, f.name, f.metadata[CONVERTER_KEY], optional))
        self._fields = tuple(specs)

    def fields(self) -> Sequence[FieldSpec]:
        return self._fields

    def build_record(self, values: dict[str, Any]) -> Any:
        return self.cls(**values)

    def __repr__(self) -> str:
        return f"DataclassSchema({self.name}, key={self.universal_key!r})"


def klv_field(tag: int, converter: Converter, optional: bool = False, **kwargs: Any) -> Any:
    """Declare a dataclass field carried under ``tag``.

    Optional fields default to ``None`` and are omitted from the wire when
    unset.
    """
    metadata = dict(kwargs.pop("metadata", {}))
    metadata[TAG_KEY] = tag
    metadata[CONVERTER_KEY] = converter
    metadata[OPTIONAL_KEY] = optional
    if optional:
        kwargs.setdefault("default", None)
    return dataclasses.field(metadata=metadata, **kwargs)


def klv_record(universal_key: str | bytes):
    """Class decorator: make a dataclass and attach its :class:`DataclassSchema`."""

    def wrap(cls: type) -> type:
        if not dataclasses.is_dataclass(cls):
            cls = dataclasses.dataclass(cls)
        setattr(cls, SCHEMA_ATTR, DataclassSchema(cls, universal_key))
        return cls

    return wrap


def schema_of(obj: Any) -> RecordSchema:
    """Schema attached to a record class or instance."""
    if isinstance(obj, RecordSchema):
        return obj
    schema = getattr(obj, SCHEMA_ATTR, None)
    if schema is None:
        name = obj.__name__ if isinstance(obj, type) else type(obj).__name__
        raise SchemaError(f"{name} has no KLV schema; decorate it with @klv_record")
    return schema
