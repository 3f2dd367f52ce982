from __future__ import annotations

from app.domain.upload import RecordValidationError
from app.services.validation_report import format_validation_errors


def test_no_errors_renders_empty_string() -> None:
    assert format_validation_errors([]) == ""


def test_errors_are_grouped_by_one_based_record_number() -> None:
    errors = [
        RecordValidationError(0, "name", 'Required field "name" is missing', None, "string"),
        RecordValidationError(0, "age", 'Field "age" should be a number, got "x"', "x", "number"),
        RecordValidationError(2, "county", 'Field "county" does not exist in the database schema', "Nakuru"),
    ]

    report = format_validation_errors(errors)

    assert report == (
        "Validation Errors:\n"
        "\n"
        "Record 1:\n"
        '  • name: Required field "name" is missing [Expected: string]\n'
        '  • age: Field "age" should be a number, got "x" (value: "x") [Expected: number]\n'
        "\n"
        "Record 3:\n"
        '  • county: Field "county" does not exist in the database schema (value: "Nakuru")\n'
        "\n"
    )


def test_falsy_values_are_still_shown() -> None:
    report = format_validation_errors([RecordValidationError(0, "count", "bad", 0, None)])
    assert '(value: "0")' in report
