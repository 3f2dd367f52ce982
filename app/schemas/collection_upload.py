"""
app/schemas/collection_upload.py

Response schemas for collection upload endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.upload import UploadResult


class RecordValidationErrorResponse(BaseModel):
    """
    API response model for one record-level validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    record_index: int = Field(..., ge=0, alias="recordIndex")
    field: str
    message: str
    value: Any = None
    expected_type: str | None = Field(default=None, alias="expectedType")


class UploadResultResponse(BaseModel):
    """
    API response model for one upload outcome.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    success_count: int = Field(..., ge=0, alias="successCount")
    error_count: int = Field(..., ge=0, alias="errorCount")
    errors: list[str] | None = None
    validation_errors: list[RecordValidationErrorResponse] | None = Field(default=None, alias="validationErrors")
    total_records: int | None = Field(default=None, ge=0, alias="totalRecords")

    @classmethod
    def from_result(cls, result: UploadResult) -> "UploadResultResponse":
        return cls.model_validate(result.to_dict())
