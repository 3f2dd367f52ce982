"""
app/validators package marker.
"""

from app.validators.record_validator import RecordValidator

__all__ = [
    "RecordValidator",
]
