"""
tests/test_document_repository.py

SQLAlchemyDocumentStore against an in-memory SQLite database.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.domain.collection_schema import FieldType
from app.repositories.document_codec import DATE_TAG, LITERAL_TAG, decode_document, encode_document
from app.repositories.document_repository import SQLAlchemyDocumentStore
from app.repositories.document_store import DocumentStoreError
from app.services.schema_inference_service import SchemaInferencer
from db.base import Base


@pytest.fixture()
def session() -> Iterator[Session]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    with factory() as db:
        yield db
    engine.dispose()


@pytest.fixture()
def store(session: Session) -> SQLAlchemyDocumentStore:
    return SQLAlchemyDocumentStore(session)


class TestDocumentCodec:
    def test_datetimes_are_tagged(self) -> None:
        stamp = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)
        assert encode_document({"at": stamp}) == {"at": {DATE_TAG: "2026-10-17T09:30:00+00:00"}}

    def test_naive_datetimes_and_dates_are_stored_as_utc(self) -> None:
        encoded = encode_document({"a": datetime(2026, 1, 2, 3, 4), "b": date(2026, 1, 2)})
        assert encoded["a"] == {DATE_TAG: "2026-01-02T03:04:00+00:00"}
        assert encoded["b"] == {DATE_TAG: "2026-01-02T00:00:00+00:00"}

    def test_nested_values_are_decoded(self) -> None:
        payload = {"visits": [{"on": {DATE_TAG: "2026-01-02T00:00:00+00:00"}}], "tag": {DATE_TAG: "not a date"}}

        decoded = decode_document(payload)

        assert decoded["visits"][0]["on"] == datetime(2026, 1, 2, tzinfo=timezone.utc)
        assert decoded["tag"] == {DATE_TAG: "not a date"}

    @pytest.mark.parametrize(
        "value",
        [
            {DATE_TAG: "2026-01-02T00:00:00+00:00"},
            {LITERAL_TAG: {"a": 1}},
            {"outer": {DATE_TAG: "2026-01-02"}},
        ],
    )
    def test_tag_shaped_user_objects_round_trip(self, value: dict) -> None:
        assert decode_document(encode_document({"meta": value})) == {"meta": value}


class TestSQLAlchemyDocumentStore:
    def test_batch_write_then_sample_round_trip(self, store: SQLAlchemyDocumentStore) -> None:
        stamp = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)
        store.batch_write(
            "farmers",
            [
                {"name": "Amina", "age": 34, "crops": ["maize"], "createdAt": stamp, "active": True},
                {"name": "Juma", "age": 51, "crops": [], "createdAt": stamp, "active": False},
            ],
        )

        sampled = store.sample("farmers", 5)

        assert len(sampled) == 2
        assert {document["name"] for document in sampled} == {"Amina", "Juma"}
        assert all(document["createdAt"] == stamp for document in sampled)

    def test_tag_shaped_value_is_not_read_back_as_date(self, store: SQLAlchemyDocumentStore) -> None:
        store.batch_write("farmers", [{"name": "Amina", "meta": {DATE_TAG: "2026-01-02T00:00:00+00:00"}}])

        sampled = store.sample("farmers", 1)

        assert sampled[0]["meta"] == {DATE_TAG: "2026-01-02T00:00:00+00:00"}

    def test_sample_is_bounded_and_scoped_to_collection(self, store: SQLAlchemyDocumentStore) -> None:
        store.batch_write("farmers", [{"name": f"F{index}"} for index in range(8)])
        store.batch_write("plots", [{"acres": 1}])

        assert len(store.sample("farmers", 5)) == 5
        assert store.sample("plots", 5) == [{"acres": 1}]
        assert store.sample("boreholes", 5) == []

    def test_empty_batch_writes_nothing(self, store: SQLAlchemyDocumentStore) -> None:
        store.batch_write("farmers", [{"name": "a"}, {"name": "b"}])
        store.batch_write("farmers", [])
        assert len(store.sample("farmers", 10)) == 2

    def test_inferred_schema_sees_stored_dates(self, store: SQLAlchemyDocumentStore) -> None:
        store.batch_write(
            "farmers",
            [{"name": "Amina", "registered": datetime(2025, 3, 1, tzinfo=timezone.utc)}],
        )

        schema = SchemaInferencer(store).infer("farmers")

        assert schema["registered"].type == FieldType.DATE
        assert schema["name"].required is True

    def test_write_failure_rolls_back_and_raises(self, store: SQLAlchemyDocumentStore, session: Session) -> None:
        Base.metadata.drop_all(session.get_bind())

        with pytest.raises(DocumentStoreError):
            store.batch_write("farmers", [{"name": "a"}])

        with pytest.raises(DocumentStoreError):
            store.sample("farmers", 5)
