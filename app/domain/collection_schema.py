"""
app/domain/collection_schema.py

Inferred field-level contract for one document collection.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType


class FieldType:
    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    DATE = "date"
    BOOLEAN = "boolean"
    OBJECT = "object"


FIELD_TYPES: tuple[str, ...] = (
    FieldType.STRING,
    FieldType.NUMBER,
    FieldType.ARRAY,
    FieldType.DATE,
    FieldType.BOOLEAN,
    FieldType.OBJECT,
)

ARRAY_ELEMENT_TYPES: tuple[str, ...] = (FieldType.STRING, FieldType.NUMBER)

# Stamped on every canonical record by the transformer.
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"
SYSTEM_TIMESTAMP_FIELDS: tuple[str, ...] = (CREATED_AT_FIELD, UPDATED_AT_FIELD)


@dataclass(frozen=True)
class FieldSchema:
    """
    Contract for one field name, derived from sampled documents.
    """

    type: str
    required: bool = False
    array_element_type: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_value: float | None = None
    max_value: float | None = None
    pattern: re.Pattern[str] | None = None
    allowed_values: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unsupported field type: {self.type!r}.")
        if self.array_element_type is not None and self.array_element_type not in ARRAY_ELEMENT_TYPES:
            raise ValueError(f"Unsupported array element type: {self.array_element_type!r}.")

    def with_changes(self, **changes: object) -> "FieldSchema":
        return replace(self, **changes)


class CollectionSchema(Mapping[str, FieldSchema]):
    """
    Read-only, insertion-ordered mapping of field name to FieldSchema.

    Built once per upload and passed unchanged through validation and
    transformation.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, FieldSchema] | None = None) -> None:
        self._fields: Mapping[str, FieldSchema] = MappingProxyType(dict(fields or {}))

    def __getitem__(self, name: str) -> FieldSchema:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"CollectionSchema({dict(self._fields)!r})"
