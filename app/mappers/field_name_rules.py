"""
app/mappers/field_name_rules.py

Constraint heuristics keyed by substrings of a field name.

Rules are checked in order against the lower-cased field name and the first
match wins, so a field called ``email_id`` only receives the email pattern.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from app.domain.collection_schema import FieldSchema

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")
PHONE_PATTERN = re.compile(r"^[\+]?[1-9][\d]{0,15}\Z")


@dataclass(frozen=True)
class FieldNameRule:
    """
    One substring-triggered refinement of an inferred FieldSchema.
    """

    substring: str
    apply: Callable[[FieldSchema], FieldSchema]

    def matches(self, field_name: str) -> bool:
        return self.substring in field_name.lower()


DEFAULT_FIELD_NAME_RULES: tuple[FieldNameRule, ...] = (
    FieldNameRule("email", lambda schema: schema.with_changes(pattern=EMAIL_PATTERN)),
    FieldNameRule("phone", lambda schema: schema.with_changes(pattern=PHONE_PATTERN)),
    FieldNameRule("id", lambda schema: schema.with_changes(min_length=1)),
)


def apply_field_name_rules(
    field_name: str,
    field_schema: FieldSchema,
    rules: Sequence[FieldNameRule] = DEFAULT_FIELD_NAME_RULES,
) -> FieldSchema:
    """
    Return ``field_schema`` refined by the first rule matching ``field_name``.
    """

    for rule in rules:
        if rule.matches(field_name):
            return rule.apply(field_schema)
    return field_schema
