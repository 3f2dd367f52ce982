"""
app/services/upload_orchestrator_service.py

Sequences one collection upload end to end:

    IDLE -> SCHEMA_INFERRED -> PARSED -> VALIDATED -> ABORTED | COMMITTED -> DONE

Every stage waits for the full output of the previous one. Validation covers
the whole file before anything is written, so a file with any invalid record
writes nothing and the caller receives every error in one result. Every
failure path ends in an UploadResult; no exception leaves ``upload``.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from app.config import get_upload_settings
from app.domain.collection_schema import CollectionSchema
from app.domain.errors import CommitError, EmptyFileError, SchemaInferenceError, UnsupportedFormatError
from app.domain.upload import RecordValidationError, UploadResult
from app.mappers.record_transformer import RecordTransformer
from app.parsers.file_parser import parse_upload, read_file_as_text
from app.repositories.document_store import DocumentStore
from app.services.batch_committer import DEFAULT_BATCH_SIZE, BatchCommitter
from app.services.schema_inference_service import DEFAULT_SAMPLE_SIZE, SchemaInferencer
from app.validators.record_validator import RecordValidator

logger = logging.getLogger(__name__)


class UploadStage(str, enum.Enum):
    IDLE = "idle"
    SCHEMA_INFERRED = "schema_inferred"
    PARSED = "parsed"
    VALIDATED = "validated"
    ABORTED = "aborted"
    COMMITTED = "committed"
    DONE = "done"


class UploadOrchestrator:
    """
    Coordinates schema inference, parsing, validation, transformation and
    batch commit for one uploaded file.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        batch_size: int = DEFAULT_BATCH_SIZE,
        log_validation_errors: bool = True,
        inferencer: SchemaInferencer | None = None,
        validator: RecordValidator | None = None,
        transformer: RecordTransformer | None = None,
        committer: BatchCommitter | None = None,
    ) -> None:
        self._sample_size = max(1, sample_size)
        self._batch_size = max(1, batch_size)
        self._log_validation_errors = log_validation_errors
        self._inferencer = inferencer or SchemaInferencer(store)
        self._validator = validator or RecordValidator()
        self._transformer = transformer or RecordTransformer()
        self._committer = committer or BatchCommitter(store)

    def upload(
        self,
        *,
        file_name: str,
        content: bytes | str,
        collection_id: str,
    ) -> UploadResult:
        """
        Validate the whole file against the collection's inferred schema and
        commit it only when every record is valid.
        """

        stage = UploadStage.IDLE
        try:
            try:
                schema = self._inferencer.infer(collection_id, self._sample_size)
            except SchemaInferenceError as exc:
                logger.warning("Schema inference failed collection=%s: %s", collection_id, exc)
                return self._finish(
                    stage,
                    collection_id,
                    UploadResult(
                        success=False,
                        message=(
                            f'Cannot determine schema for collection "{collection_id}". '
                            "The collection might be empty."
                        ),
                        errors=["No schema found"],
                    ),
                )
            stage = self._advance(stage, UploadStage.SCHEMA_INFERRED, collection_id)

            try:
                records = parse_upload(file_name, read_file_as_text(content))
                if not records:
                    raise EmptyFileError("No data found in the file")
            except UnsupportedFormatError as exc:
                logger.warning("Unsupported upload format collection=%s file=%s", collection_id, file_name)
                return self._finish(
                    stage,
                    collection_id,
                    UploadResult(
                        success=False,
                        message=f"Unsupported file format: {exc.extension}. Please use CSV or JSON.",
                        errors=[f"Unsupported format: {exc.extension}"],
                    ),
                )
            except EmptyFileError as exc:
                logger.warning("Empty upload collection=%s file=%s", collection_id, file_name)
                return self._finish(
                    stage,
                    collection_id,
                    UploadResult(success=False, message=str(exc), errors=["Empty file"]),
                )
            stage = self._advance(stage, UploadStage.PARSED, collection_id)
            total_records = len(records)

            validation_errors = self._validate(records, schema)
            stage = self._advance(stage, UploadStage.VALIDATED, collection_id)
            if validation_errors:
                stage = self._advance(stage, UploadStage.ABORTED, collection_id)
                return self._finish(
                    stage,
                    collection_id,
                    UploadResult(
                        success=False,
                        message="Data validation failed. Please update your data to match the database schema.",
                        success_count=0,
                        error_count=total_records,
                        validation_errors=validation_errors,
                        total_records=total_records,
                    ),
                )

            canonical_records = self._transformer.transform_all(records, schema)
            try:
                success_count = self._committer.commit(canonical_records, collection_id, self._batch_size)
            except CommitError as exc:
                return self._finish(
                    stage,
                    collection_id,
                    UploadResult(
                        success=False,
                        message=f"Upload failed: {exc}",
                        success_count=exc.committed_count,
                        error_count=total_records - exc.committed_count,
                        errors=[f"Commit error: {exc}"],
                        total_records=total_records,
                    ),
                )
            stage = self._advance(stage, UploadStage.COMMITTED, collection_id)

            return self._finish(
                stage,
                collection_id,
                UploadResult(
                    success=True,
                    message=f"Successfully uploaded {success_count} records that match the database schema.",
                    success_count=success_count,
                    error_count=0,
                    total_records=total_records,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Upload failed collection=%s stage=%s", collection_id, stage.value)
            return self._finish(
                stage,
                collection_id,
                UploadResult(
                    success=False,
                    message=f"Upload failed: {exc}",
                    errors=[f"Upload error: {exc}"],
                ),
            )

    def _validate(
        self,
        records: list[dict[str, Any]],
        schema: CollectionSchema,
    ) -> list[RecordValidationError]:
        errors = self._validator.validate_all(records, schema)
        if errors and self._log_validation_errors:
            for error in errors:
                logger.warning(
                    "Upload validation error record=%s field=%s message=%s value=%r",
                    error.record_index,
                    error.field,
                    error.message,
                    error.value,
                )
        return errors

    @staticmethod
    def _advance(current: UploadStage, target: UploadStage, collection_id: str) -> UploadStage:
        logger.debug("Upload stage collection=%s %s -> %s", collection_id, current.value, target.value)
        return target

    @staticmethod
    def _finish(stage: UploadStage, collection_id: str, result: UploadResult) -> UploadResult:
        logger.info(
            "Upload finished collection=%s %s -> %s success=%s success_count=%d error_count=%d",
            collection_id,
            stage.value,
            UploadStage.DONE.value,
            result.success,
            result.success_count,
            result.error_count,
        )
        return result


def build_upload_orchestrator(store: DocumentStore) -> UploadOrchestrator:
    """
    Build an orchestrator over ``store`` with env-driven settings.
    """

    settings = get_upload_settings()
    return UploadOrchestrator(
        store,
        sample_size=settings.sample_size,
        batch_size=settings.batch_size,
        log_validation_errors=settings.log_validation_errors,
    )
