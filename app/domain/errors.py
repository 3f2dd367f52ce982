"""
app/domain/errors.py

Exceptions raised by the collection upload pipeline.

Record-level validation problems are not exceptions; they are collected as
RecordValidationError values and reported together.
"""

from __future__ import annotations


class UploadError(Exception):
    """Base exception for upload pipeline failures."""


class SchemaInferenceError(UploadError):
    """Raised when no schema can be inferred for the target collection."""

    def __init__(self, message: str, *, collection_id: str) -> None:
        super().__init__(message)
        self.collection_id = collection_id


class UnsupportedFormatError(UploadError):
    """Raised when the upload file extension is neither CSV nor JSON."""

    def __init__(self, extension: str) -> None:
        super().__init__(f"Unsupported file format: {extension}")
        self.extension = extension


class EmptyFileError(UploadError):
    """Raised when a file parses into zero records."""


class FileFormatError(UploadError):
    """Raised when file content cannot be parsed in its declared format."""


class FileReadError(UploadError):
    """Raised when raw upload bytes cannot be decoded into text."""


class CommitError(UploadError):
    """
    Raised when a batch write fails part-way through a commit.

    Batches written before the failing one stay persisted.
    """

    def __init__(self, message: str, *, committed_count: int, batch_index: int) -> None:
        super().__init__(message)
        self.committed_count = committed_count
        self.batch_index = batch_index
