"""
app/repositories/document_repository.py

SQLAlchemy-backed document store.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.document_codec import decode_document, encode_document
from app.repositories.document_store import DocumentStore, DocumentStoreError
from db.models.document import StoredDocument


class SQLAlchemyDocumentStore(DocumentStore):
    """
    Stores each document as a JSON payload row scoped by collection name.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def sample(self, collection_id: str, n: int) -> list[dict[str, Any]]:
        stmt = (
            select(StoredDocument.data)
            .where(StoredDocument.collection_name == collection_id)
            .limit(max(0, n))
        )
        try:
            payloads = self._session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise DocumentStoreError(
                f"Failed to sample collection {collection_id!r}."
            ) from exc
        return [decode_document(payload) for payload in payloads]

    def batch_write(self, collection_id: str, records: Sequence[Mapping[str, Any]]) -> None:
        """
        Insert one batch and commit it as a single transaction.
        """

        if not records:
            return

        rows = [
            {"collection_name": collection_id, "data": encode_document(record)}
            for record in records
        ]
        try:
            self._session.execute(insert(StoredDocument), rows)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise DocumentStoreError(
                f"Failed to write {len(rows)} documents to collection {collection_id!r}."
            ) from exc
