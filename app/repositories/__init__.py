"""
app/repositories package marker.
"""

from app.repositories.document_repository import SQLAlchemyDocumentStore
from app.repositories.document_store import DocumentStore, DocumentStoreError

__all__ = [
    "DocumentStore",
    "DocumentStoreError",
    "SQLAlchemyDocumentStore",
]
