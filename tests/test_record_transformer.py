"""
tests/test_record_transformer.py

Coercion of validated records into canonical documents.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.domain.collection_schema import CollectionSchema, FieldSchema, FieldType
from app.mappers.record_transformer import RecordTransformer


@pytest.fixture()
def schema() -> CollectionSchema:
    return CollectionSchema(
        {
            "name": FieldSchema(type=FieldType.STRING, required=True),
            "age": FieldSchema(type=FieldType.NUMBER, required=True),
            "crops": FieldSchema(type=FieldType.ARRAY, required=True),
            "registered": FieldSchema(type=FieldType.DATE, required=True),
            "active": FieldSchema(type=FieldType.BOOLEAN, required=True),
            "location": FieldSchema(type=FieldType.OBJECT, required=True),
            "notes": FieldSchema(type=FieldType.STRING, required=False),
        }
    )


@pytest.fixture()
def transformer(fixed_clock) -> RecordTransformer:
    return RecordTransformer(clock=fixed_clock)


class TestRecordTransformer:
    def test_coerces_csv_strings_to_schema_types(self, transformer, schema) -> None:
        document = transformer.transform(
            {
                "name": "Ana",
                "age": " 30 ",
                "crops": '["maize", "beans"]',
                "registered": "2025-03-01",
                "active": "Yes",
                "location": "Nakuru",
            },
            schema,
        )

        assert document["name"] == "Ana"
        assert document["age"] == 30.0
        assert document["crops"] == ["maize", "beans"]
        assert document["registered"] == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert document["active"] is True
        assert document["location"] == "Nakuru"

    def test_required_missing_fields_get_zero_values(self, transformer, schema, fixed_clock) -> None:
        document = transformer.transform({}, schema)

        assert document["name"] == ""
        assert document["age"] == 0
        assert document["crops"] == []
        assert document["registered"] == fixed_clock()
        assert document["active"] is False
        assert document["location"] is None

    def test_optional_missing_fields_are_omitted(self, transformer, schema) -> None:
        document = transformer.transform({"name": "Ana", "notes": ""}, schema)
        assert "notes" not in document

    def test_non_schema_fields_are_dropped(self, transformer, schema) -> None:
        document = transformer.transform({"name": "Ana", "county": ""}, schema)
        assert "county" not in document

    def test_stamps_created_and_updated_at(self, transformer, schema, fixed_clock) -> None:
        supplied = datetime(2020, 1, 1, tzinfo=timezone.utc)
        document = transformer.transform({"name": "Ana", "createdAt": supplied}, schema)

        assert document["createdAt"] == fixed_clock()
        assert document["updatedAt"] == fixed_clock()

    def test_stamps_timestamps_declared_in_schema(self, transformer, fixed_clock) -> None:
        schema = CollectionSchema(
            {
                "name": FieldSchema(type=FieldType.STRING, required=True),
                "createdAt": FieldSchema(type=FieldType.DATE, required=False),
            }
        )
        document = transformer.transform({"name": "Ana", "createdAt": "2020-01-01"}, schema)
        assert document["createdAt"] == fixed_clock()

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("maize, beans ,sorghum", ["maize", "beans", "sorghum"]),
            ("[1, 2]", [1, 2]),
            (["a"], ["a"]),
        ],
    )
    def test_array_coercion(self, transformer, schema, raw, expected) -> None:
        document = transformer.transform({"crops": raw}, schema)
        assert document["crops"] == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [("true", True), ("TRUE", True), ("1", True), ("no", False), ("0", False), (1, True), (0, False), (False, False)],
    )
    def test_boolean_coercion(self, transformer, schema, raw, expected) -> None:
        assert transformer.transform({"active": raw}, schema)["active"] is expected

    def test_numeric_literals_are_kept(self, transformer, schema) -> None:
        assert transformer.transform({"age": 41}, schema)["age"] == 41

    def test_epoch_milliseconds_become_datetime(self, transformer, schema) -> None:
        document = transformer.transform({"registered": 0}, schema)
        assert document["registered"] == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_transform_is_idempotent_apart_from_timestamps(self, schema) -> None:
        record = {
            "name": "Ana",
            "age": "30",
            "crops": "maize,beans",
            "registered": "2025-03-01T08:00:00Z",
            "active": "false",
            "location": {"lat": -0.3},
        }
        first = RecordTransformer().transform(record, schema)
        second = RecordTransformer().transform(first, schema)

        for key in ("createdAt", "updatedAt"):
            first.pop(key)
            second.pop(key)
        assert first == second

    def test_transform_all_preserves_order(self, transformer, schema) -> None:
        documents = transformer.transform_all([{"name": "a"}, {"name": "b"}], schema)
        assert [document["name"] for document in documents] == ["a", "b"]
