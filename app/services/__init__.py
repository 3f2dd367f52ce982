"""
app/services package marker.
"""

from app.services.batch_committer import BatchCommitter
from app.services.schema_inference_service import SchemaInferencer
from app.services.upload_orchestrator_service import (
    UploadOrchestrator,
    UploadStage,
    build_upload_orchestrator,
)
from app.services.validation_report import format_validation_errors

__all__ = [
    "BatchCommitter",
    "SchemaInferencer",
    "UploadOrchestrator",
    "UploadStage",
    "build_upload_orchestrator",
    "format_validation_errors",
]
