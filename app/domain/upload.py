"""
app/domain/upload.py

Domain models returned by the collection upload flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RecordValidationError:
    """
    One field-level contract violation in one uploaded record.
    """

    record_index: int
    field: str
    message: str
    value: Any = None
    expected_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "recordIndex": self.record_index,
            "field": self.field,
            "message": self.message,
            "value": self.value,
        }
        if self.expected_type is not None:
            payload["expectedType"] = self.expected_type
        return payload


@dataclass(frozen=True)
class UploadResult:
    """
    Terminal outcome of one upload, consumed by the calling UI layer.
    """

    success: bool
    message: str
    success_count: int = 0
    error_count: int = 0
    errors: list[str] | None = None
    validation_errors: list[RecordValidationError] | None = None
    total_records: int | None = None

    def __post_init__(self) -> None:
        if self.success and (self.errors or self.validation_errors):
            raise ValueError("A successful upload result cannot carry errors.")

    def to_dict(self) -> dict[str, Any]:
        """
        Render the camelCase payload shape used by upload notifications.
        """

        payload: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "successCount": self.success_count,
            "errorCount": self.error_count,
        }
        if self.errors is not None:
            payload["errors"] = list(self.errors)
        if self.validation_errors is not None:
            payload["validationErrors"] = [error.to_dict() for error in self.validation_errors]
        if self.total_records is not None:
            payload["totalRecords"] = self.total_records
        return payload

