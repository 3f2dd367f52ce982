"""
app/api/dependencies.py

Shared FastAPI dependencies for collection uploads.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.config import UploadSettings, get_upload_settings
from app.repositories.document_repository import SQLAlchemyDocumentStore
from app.repositories.document_store import DocumentStore
from app.services.upload_orchestrator_service import UploadOrchestrator, build_upload_orchestrator
from db.session import get_db


def get_upload_file(file: UploadFile = File(...)) -> UploadFile:
    """
    Require a named file part. Format checks happen in the orchestrator so
    unsupported extensions are reported in the upload result.
    """

    if not (file.filename or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file must have a name.",
        )
    return file


def get_document_store(db: Session = Depends(get_db)) -> DocumentStore:
    return SQLAlchemyDocumentStore(db)


def get_upload_orchestrator(
    store: DocumentStore = Depends(get_document_store),
) -> UploadOrchestrator:
    return build_upload_orchestrator(store)


def get_settings() -> UploadSettings:
    return get_upload_settings()
