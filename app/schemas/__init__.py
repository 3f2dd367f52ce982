"""
app/schemas package marker.
"""

from app.schemas.collection_upload import RecordValidationErrorResponse, UploadResultResponse

__all__ = [
    "RecordValidationErrorResponse",
    "UploadResultResponse",
]
