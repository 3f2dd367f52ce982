"""
app/repositories/document_codec.py

JSON-column encoding for documents whose values may include datetimes.

Datetimes are stored as ``{"$date": "<iso-8601>"}`` so sampled documents
come back with native datetime values and infer as ``date`` fields. An
uploaded object that already has that single-key shape is wrapped as
``{"$literal": {...}}`` on the way in, so it is never mistaken for a date.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

DATE_TAG = "$date"
LITERAL_TAG = "$literal"
_RESERVED_TAGS = (DATE_TAG, LITERAL_TAG)


def encode_document(document: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _encode_value(value) for key, value in document.items()}


def decode_document(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _decode_value(value) for key, value in payload.items()}


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {DATE_TAG: value.isoformat()}
    if isinstance(value, date):
        return {DATE_TAG: datetime(value.year, value.month, value.day, tzinfo=timezone.utc).isoformat()}
    if isinstance(value, Mapping):
        encoded = {str(key): _encode_value(item) for key, item in value.items()}
        if len(encoded) == 1 and next(iter(encoded)) in _RESERVED_TAGS:
            return {LITERAL_TAG: encoded}
        return encoded
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict):
        if len(value) == 1 and isinstance(value.get(LITERAL_TAG), dict):
            return {key: _decode_value(item) for key, item in value[LITERAL_TAG].items()}
        if len(value) == 1 and isinstance(value.get(DATE_TAG), str):
            try:
                return datetime.fromisoformat(value[DATE_TAG])
            except ValueError:
                return value
        return {key: _decode_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_decode_value(item) for item in value]
    return value
