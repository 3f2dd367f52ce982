"""
app/api/routers/collection_upload.py

Collection upload HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Response, UploadFile, status

from app.api.dependencies import get_settings, get_upload_file, get_upload_orchestrator
from app.config import UploadSettings
from app.schemas.collection_upload import UploadResultResponse
from app.services.upload_orchestrator_service import UploadOrchestrator

router = APIRouter(tags=["uploads"])


@router.post("/collections/{collection_id}/uploads", response_model=UploadResultResponse)
def upload_to_collection(
    response: Response,
    collection_id: str = Path(..., min_length=1, max_length=255),
    file: UploadFile = Depends(get_upload_file),
    orchestrator: UploadOrchestrator = Depends(get_upload_orchestrator),
    settings: UploadSettings = Depends(get_settings),
) -> UploadResultResponse:
    """
    Validate one CSV/JSON file against the collection's inferred schema and
    commit it when every record passes.
    """

    try:
        content = file.file.read(settings.max_file_bytes + 1)
    finally:
        file.file.close()

    if len(content) > settings.max_file_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Upload exceeds the {settings.max_file_bytes} byte limit.",
        )

    result = orchestrator.upload(
        file_name=file.filename or "",
        content=content,
        collection_id=collection_id,
    )
    if not result.success:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return UploadResultResponse.from_result(result)
