"""
app/validators/value_parsing.py

Shared value-shape helpers for record validation and transformation.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime, timezone
from typing import Any

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%d %b %Y",
    "%b %d %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%a, %d %b %Y %H:%M:%S GMT",
)

BOOLEAN_LITERALS = frozenset({"true", "false", "1", "0", "yes", "no"})
TRUTHY_LITERALS = frozenset({"true", "1", "yes"})


def is_empty(value: Any) -> bool:
    """
    True for missing, None, or empty-string values.

    Whitespace-only strings are not empty.
    """

    return value is None or (isinstance(value, str) and value == "")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_finite_float(value: Any) -> float | None:
    """
    Parse a literal number or numeric text into a finite float.
    """

    if is_number(value):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_json_array(value: str) -> list[Any] | None:
    """
    Return the list encoded by ``value``, or None when it is not a JSON array.
    """

    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, ValueError):
        return None
    return parsed if isinstance(parsed, list) else None


def parse_date(value: Any) -> datetime | None:
    """
    Interpret ``value`` as a point in time.

    Accepts datetime/date instances, epoch milliseconds, ISO-8601 text and a
    handful of common textual layouts. Naive results are assumed UTC.
    """

    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if is_number(value):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None

    normalized = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
    try:
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    except ValueError:
        pass

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None
