"""
Shared fixtures for upload pipeline tests.

All fixtures are in-memory; no database or network access.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

import pytest

from app.repositories.document_store import DocumentStore, DocumentStoreError

FIXED_NOW = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store that records every batch write it receives.

    ``fail_on_batch`` makes the n-th (0-based) batch write raise without
    persisting anything from that batch.
    """

    def __init__(
        self,
        collections: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
        *,
        fail_on_batch: int | None = None,
    ) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            name: [dict(document) for document in documents]
            for name, documents in (collections or {}).items()
        }
        self.batches: list[list[dict[str, Any]]] = []
        self.sample_calls: list[tuple[str, int]] = []
        self._fail_on_batch = fail_on_batch
        self._write_attempts = 0

    def sample(self, collection_id: str, n: int) -> list[dict[str, Any]]:
        self.sample_calls.append((collection_id, n))
        return copy.deepcopy(self.collections.get(collection_id, [])[:n])

    def batch_write(self, collection_id: str, records: Sequence[Mapping[str, Any]]) -> None:
        attempt = self._write_attempts
        self._write_attempts += 1
        if self._fail_on_batch is not None and attempt == self._fail_on_batch:
            raise DocumentStoreError(f"simulated failure on batch {attempt}")
        batch = [dict(record) for record in records]
        self.batches.append(batch)
        self.collections.setdefault(collection_id, []).extend(batch)

    def documents(self, collection_id: str) -> list[dict[str, Any]]:
        return self.collections.get(collection_id, [])


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture()
def farmers_store() -> InMemoryDocumentStore:
    """Store whose ``farmers`` collection has a typical mixed-type shape."""
    return InMemoryDocumentStore(
        {
            "farmers": [
                {
                    "name": "Amina",
                    "age": 34,
                    "email": "amina@example.org",
                    "crops": ["maize", "beans"],
                    "registered": datetime(2025, 3, 1, tzinfo=timezone.utc),
                    "active": True,
                    "notes": "",
                },
                {
                    "name": "Juma",
                    "age": 51,
                    "email": "juma@example.org",
                    "crops": ["sorghum"],
                    "registered": datetime(2025, 4, 12, tzinfo=timezone.utc),
                    "active": False,
                },
            ]
        }
    )


@pytest.fixture()
def store_factory() -> Callable[..., InMemoryDocumentStore]:
    return InMemoryDocumentStore
