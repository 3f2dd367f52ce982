"""
app/services/schema_inference_service.py

Derives a CollectionSchema from a sample of stored documents.

The sample is read in the store's natural order, so a collection whose
first documents are sparse can infer a different shape from run to run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from app.domain.collection_schema import (
    SYSTEM_TIMESTAMP_FIELDS,
    CollectionSchema,
    FieldSchema,
    FieldType,
)
from app.domain.errors import SchemaInferenceError
from app.mappers.field_name_rules import DEFAULT_FIELD_NAME_RULES, FieldNameRule, apply_field_name_rules
from app.repositories.document_store import DocumentStore
from app.validators.value_parsing import is_empty

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 5


def infer_field_type(value: Any) -> str:
    """
    Classify a stored value by its shape.
    """

    if isinstance(value, (list, tuple)):
        return FieldType.ARRAY
    if isinstance(value, date):
        return FieldType.DATE
    if isinstance(value, str):
        return FieldType.STRING
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    if isinstance(value, dict):
        return FieldType.OBJECT
    return FieldType.STRING


def build_schema(
    documents: Sequence[dict[str, Any]],
    *,
    rules: Sequence[FieldNameRule] = DEFAULT_FIELD_NAME_RULES,
) -> CollectionSchema:
    """
    Fold sampled documents into a schema.

    A field's type comes from the first document that declares it. A field
    is required once any sampled document holds a non-empty value for it.
    """

    fields: dict[str, FieldSchema] = {}

    for document in documents:
        for name, value in document.items():
            present = not is_empty(value)
            known = fields.get(name)
            if known is None:
                fields[name] = FieldSchema(type=infer_field_type(value), required=present)
            elif present and not known.required:
                fields[name] = known.with_changes(required=True)

    refined: dict[str, FieldSchema] = {}
    for name, field_schema in fields.items():
        # Always stamped by RecordTransformer, so uploads may omit them.
        if name in SYSTEM_TIMESTAMP_FIELDS:
            field_schema = field_schema.with_changes(required=False)
        refined[name] = apply_field_name_rules(name, field_schema, rules)
    return CollectionSchema(refined)


class SchemaInferencer:
    """
    Samples a collection through the document store and infers its schema.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        rules: Sequence[FieldNameRule] = DEFAULT_FIELD_NAME_RULES,
    ) -> None:
        self._store = store
        self._rules = tuple(rules)

    def infer(self, collection_id: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> CollectionSchema:
        """
        Read up to ``sample_size`` documents and build their schema.

        Raises:
            SchemaInferenceError: if the collection has no documents.
        """

        documents = self._store.sample(collection_id, max(1, sample_size))
        if not documents:
            raise SchemaInferenceError(
                f'No documents found in collection "{collection_id}". Cannot determine schema.',
                collection_id=collection_id,
            )

        schema = build_schema(documents, rules=self._rules)
        logger.info(
            "Inferred schema collection=%s sampled=%d fields=%d required=%d",
            collection_id,
            len(documents),
            len(schema),
            sum(1 for field_schema in schema.values() if field_schema.required),
        )
        return schema
