"""Normalization helpers.

Centralizes defensive parsing of caller-supplied form values.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, time
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def strip_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def coerce_date(value: Any) -> Any:
    """Reduce ISO timestamps and datetimes to their calendar date.

    Other values are passed through for the model layer to validate.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            text = text.split("T", 1)[0]
        return text
    return value


def as_datetime(value: date | datetime | str) -> datetime:
    """Parse a date-ish value into an aware UTC datetime.

    Plain dates are taken as midnight UTC.
    """
    if isinstance(value, str):
        text = value.strip()
        if "T" in text or " " in text:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        else:
            value = date.fromisoformat(text)
    if isinstance(value, datetime):
        return ensure_utc(value)
    return datetime.combine(value, time.min, tzinfo=UTC)
