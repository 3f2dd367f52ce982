"""
app/services/validation_report.py

Human-readable rendering of collected record validation errors.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.upload import RecordValidationError


def format_validation_errors(validation_errors: Sequence[RecordValidationError]) -> str:
    """
    Group errors by record (1-based) and render one bullet per error.

    Returns an empty string when there is nothing to report.
    """

    if not validation_errors:
        return ""

    groups: dict[int, list[RecordValidationError]] = {}
    for error in validation_errors:
        groups.setdefault(error.record_index, []).append(error)

    lines = ["Validation Errors:", ""]
    for record_index, errors in groups.items():
        lines.append(f"Record {record_index + 1}:")
        for error in errors:
            line = f"  • {error.field}: {error.message}"
            if error.value is not None:
                line += f' (value: "{error.value}")'
            if error.expected_type:
                line += f" [Expected: {error.expected_type}]"
            lines.append(line)
        lines.append("")

    return "\n".join(lines) + "\n"
