"""
app/validators/record_validator.py

Record-level validation against an inferred collection schema.
"""

from __future__ import annotations

from typing import Any, Mapping

from app.domain.collection_schema import CollectionSchema, FieldSchema, FieldType
from app.domain.upload import RecordValidationError
from app.validators.value_parsing import (
    BOOLEAN_LITERALS,
    is_empty,
    is_number,
    parse_date,
    parse_finite_float,
    parse_json_array,
)


class RecordValidator:
    """
    Checks raw records against a closed CollectionSchema.

    Validation is strict about shape; coercion happens later in
    RecordTransformer and only for records that pass here.
    """

    def validate(
        self,
        record: Mapping[str, Any],
        schema: CollectionSchema,
        index: int,
    ) -> list[RecordValidationError]:
        """
        Return every contract violation found in one record.
        """

        errors: list[RecordValidationError] = []

        for field, field_schema in schema.items():
            value = record.get(field)

            if is_empty(value):
                if field_schema.required:
                    errors.append(
                        RecordValidationError(
                            record_index=index,
                            field=field,
                            message=f'Required field "{field}" is missing',
                            value=None,
                            expected_type=field_schema.type,
                        )
                    )
                continue

            type_error = self._check_type(field=field, value=value, field_schema=field_schema, index=index)
            if type_error is not None:
                errors.append(type_error)
                continue

            errors.extend(
                self._check_constraints(field=field, value=value, field_schema=field_schema, index=index)
            )

        for field, value in record.items():
            if field not in schema and not is_empty(value):
                errors.append(
                    RecordValidationError(
                        record_index=index,
                        field=field,
                        message=f'Field "{field}" does not exist in the database schema',
                        value=value,
                    )
                )

        return errors

    def validate_all(
        self,
        records: list[Mapping[str, Any]],
        schema: CollectionSchema,
    ) -> list[RecordValidationError]:
        """
        Validate every record; never stops at the first failing record.
        """

        errors: list[RecordValidationError] = []
        for index, record in enumerate(records):
            errors.extend(self.validate(record, schema, index))
        return errors

    def _check_type(
        self,
        *,
        field: str,
        value: Any,
        field_schema: FieldSchema,
        index: int,
    ) -> RecordValidationError | None:
        expected = field_schema.type

        if expected == FieldType.STRING:
            if isinstance(value, str):
                return None
            message = f'Field "{field}" should be a string, got {_describe_type(value)}'
        elif expected == FieldType.NUMBER:
            if parse_finite_float(value) is not None:
                return None
            message = f'Field "{field}" should be a number, got "{value}"'
        elif expected == FieldType.ARRAY:
            if isinstance(value, list):
                return None
            if isinstance(value, str):
                if parse_json_array(value) is not None:
                    return None
                message = f'Field "{field}" should be an array, got "{value}"'
            else:
                message = f'Field "{field}" should be an array, got {_describe_type(value)}'
        elif expected == FieldType.DATE:
            if parse_date(value) is not None:
                return None
            message = f'Field "{field}" should be a valid date, got "{value}"'
        elif expected == FieldType.BOOLEAN:
            if _is_boolean_like(value):
                return None
            message = f'Field "{field}" should be a boolean, got "{value}"'
        else:
            return None

        return RecordValidationError(
            record_index=index,
            field=field,
            message=message,
            value=value,
            expected_type=expected,
        )

    def _check_constraints(
        self,
        *,
        field: str,
        value: Any,
        field_schema: FieldSchema,
        index: int,
    ) -> list[RecordValidationError]:
        if field_schema.type == FieldType.STRING:
            return self._check_string_constraints(field=field, value=value, field_schema=field_schema, index=index)
        if field_schema.type == FieldType.NUMBER:
            return self._check_number_constraints(field=field, value=value, field_schema=field_schema, index=index)
        if field_schema.type == FieldType.ARRAY and field_schema.array_element_type is not None:
            elements = value if isinstance(value, list) else parse_json_array(value) or []
            return self._check_array_elements(
                field=field,
                elements=elements,
                element_type=field_schema.array_element_type,
                index=index,
            )
        return []

    def _check_string_constraints(
        self,
        *,
        field: str,
        value: str,
        field_schema: FieldSchema,
        index: int,
    ) -> list[RecordValidationError]:
        errors: list[RecordValidationError] = []

        if field_schema.min_length is not None and len(value) < field_schema.min_length:
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=field,
                    message=f'Field "{field}" should have at least {field_schema.min_length} characters',
                    value=value,
                    expected_type=f"string (min {field_schema.min_length} chars)",
                )
            )

        if field_schema.max_length is not None and len(value) > field_schema.max_length:
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=field,
                    message=f'Field "{field}" should have at most {field_schema.max_length} characters',
                    value=value,
                    expected_type=f"string (max {field_schema.max_length} chars)",
                )
            )

        if field_schema.pattern is not None and field_schema.pattern.search(value) is None:
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=field,
                    message=f'Field "{field}" does not match the required format',
                    value=value,
                    expected_type="string matching pattern",
                )
            )

        if field_schema.allowed_values is not None and value not in field_schema.allowed_values:
            allowed = ", ".join(field_schema.allowed_values)
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=field,
                    message=f'Field "{field}" should be one of: {allowed}',
                    value=value,
                    expected_type=f"one of [{allowed}]",
                )
            )

        return errors

    def _check_number_constraints(
        self,
        *,
        field: str,
        value: Any,
        field_schema: FieldSchema,
        index: int,
    ) -> list[RecordValidationError]:
        errors: list[RecordValidationError] = []
        number = parse_finite_float(value)
        if number is None:
            return errors

        if field_schema.min_value is not None and number < field_schema.min_value:
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=field,
                    message=f'Field "{field}" should be at least {field_schema.min_value}',
                    value=value,
                    expected_type=f"number (min {field_schema.min_value})",
                )
            )

        if field_schema.max_value is not None and number > field_schema.max_value:
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=field,
                    message=f'Field "{field}" should be at most {field_schema.max_value}',
                    value=value,
                    expected_type=f"number (max {field_schema.max_value})",
                )
            )

        return errors

    def _check_array_elements(
        self,
        *,
        field: str,
        elements: list[Any],
        element_type: str,
        index: int,
    ) -> list[RecordValidationError]:
        errors: list[RecordValidationError] = []
        for position, element in enumerate(elements):
            if element_type == FieldType.NUMBER and not is_number(element):
                message = f'Array element should be a number, got "{element}"'
            elif element_type == FieldType.STRING and not isinstance(element, str):
                message = f'Array element should be a string, got "{element}"'
            else:
                continue
            errors.append(
                RecordValidationError(
                    record_index=index,
                    field=f"{field}[{position}]",
                    message=message,
                    value=element,
                    expected_type=element_type,
                )
            )
        return errors


def _is_boolean_like(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if is_number(value):
        return value in (0, 1)
    return str(value).lower() in BOOLEAN_LITERALS


def _describe_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
