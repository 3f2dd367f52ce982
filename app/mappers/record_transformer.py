"""
app/mappers/record_transformer.py

Coerces validated raw records into canonical, schema-typed documents.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Mapping

from app.domain.collection_schema import (
    CREATED_AT_FIELD,
    UPDATED_AT_FIELD,
    CollectionSchema,
    FieldSchema,
    FieldType,
)
from app.validators.value_parsing import TRUTHY_LITERALS, is_empty, is_number, parse_date


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordTransformer:
    """
    Lenient coercion of records that already passed RecordValidator.
    """

    def __init__(self, *, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def transform(self, record: Mapping[str, Any], schema: CollectionSchema) -> dict[str, Any]:
        """
        Build the canonical document for one record.

        Only schema fields are carried over. Missing required fields receive
        the zero value of their type; missing optional fields are omitted.
        ``createdAt`` and ``updatedAt`` are always stamped with the current
        time, replacing any values supplied by the caller.
        """

        now = self._clock()
        transformed: dict[str, Any] = {}

        for field, field_schema in schema.items():
            value = record.get(field)
            if is_empty(value):
                if field_schema.required:
                    transformed[field] = self._zero_value(field_schema, now)
                continue
            transformed[field] = self._coerce(value, field_schema)

        transformed[CREATED_AT_FIELD] = now
        transformed[UPDATED_AT_FIELD] = now
        return transformed

    def transform_all(
        self,
        records: list[Mapping[str, Any]],
        schema: CollectionSchema,
    ) -> list[dict[str, Any]]:
        return [self.transform(record, schema) for record in records]

    @staticmethod
    def _zero_value(field_schema: FieldSchema, now: datetime) -> Any:
        if field_schema.type == FieldType.STRING:
            return ""
        if field_schema.type == FieldType.NUMBER:
            return 0
        if field_schema.type == FieldType.ARRAY:
            return []
        if field_schema.type == FieldType.BOOLEAN:
            return False
        if field_schema.type == FieldType.DATE:
            return now
        return None

    @staticmethod
    def _coerce(value: Any, field_schema: FieldSchema) -> Any:
        if field_schema.type == FieldType.STRING:
            return str(value)

        if field_schema.type == FieldType.NUMBER:
            if is_number(value):
                return value
            return float(str(value).strip())

        if field_schema.type == FieldType.ARRAY:
            if isinstance(value, str):
                try:
                    return json.loads(value)
                except (json.JSONDecodeError, ValueError):
                    return [part.strip() for part in value.split(",")]
            return value if isinstance(value, list) else [value]

        if field_schema.type == FieldType.DATE:
            if isinstance(value, datetime):
                return value
            parsed = parse_date(value)
            if parsed is None:
                raise ValueError(f"Cannot interpret {value!r} as a date.")
            return parsed

        if field_schema.type == FieldType.BOOLEAN:
            if isinstance(value, str):
                return value.lower() in TRUTHY_LITERALS
            return bool(value)

        return value
