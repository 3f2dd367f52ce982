"""
app/domain package marker.
"""

from app.domain.collection_schema import CollectionSchema, FieldSchema, FieldType
from app.domain.errors import (
    CommitError,
    EmptyFileError,
    FileFormatError,
    FileReadError,
    SchemaInferenceError,
    UnsupportedFormatError,
    UploadError,
)
from app.domain.upload import RecordValidationError, UploadResult

__all__ = [
    "CollectionSchema",
    "CommitError",
    "EmptyFileError",
    "FieldSchema",
    "FieldType",
    "FileFormatError",
    "FileReadError",
    "RecordValidationError",
    "SchemaInferenceError",
    "UnsupportedFormatError",
    "UploadError",
    "UploadResult",
]
