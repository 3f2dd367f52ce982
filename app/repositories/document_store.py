"""
app/repositories/document_store.py

Document store contract consumed by the upload pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any


class DocumentStoreError(Exception):
    """Raised when the backing store cannot read or write documents."""


class DocumentStore(ABC):
    """
    Schema-less document collections addressed by name.
    """

    @abstractmethod
    def sample(self, collection_id: str, n: int) -> list[dict[str, Any]]:
        """
        Return up to ``n`` stored documents in the store's natural order.
        """

    @abstractmethod
    def batch_write(self, collection_id: str, records: Sequence[Mapping[str, Any]]) -> None:
        """
        Persist ``records`` as new documents, all or nothing.

        Raises DocumentStoreError when the batch could not be written; in that
        case none of its records are visible afterwards.
        """
