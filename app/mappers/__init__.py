"""
app/mappers package marker.
"""

from app.mappers.field_name_rules import DEFAULT_FIELD_NAME_RULES, FieldNameRule, apply_field_name_rules
from app.mappers.record_transformer import RecordTransformer

__all__ = [
    "DEFAULT_FIELD_NAME_RULES",
    "FieldNameRule",
    "RecordTransformer",
    "apply_field_name_rules",
]
