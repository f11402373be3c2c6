from datetime import date, datetime
from typing import Any, Optional

from habitgrid.errors import ValidationError


def normalize_day(value: Any, field: str = "day") -> date:
    """Reduce a date, datetime or ISO string to its calendar day.

    Timestamps keep the calendar date as written; an offset or ``Z`` suffix is
    not converted to another zone.
    """
    if value is None:
        raise ValidationError(f"{field} required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO date string")

    raw = value.strip()
    if not raw:
        raise ValidationError(f"{field} required")
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        if raw.endswith("Z") or raw.endswith("z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw).date()
    except ValueError as exc:
        raise ValidationError(f"{field} is not a valid calendar date: {value!r}") from exc


def optional_day(value: Any, field: str = "date") -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return normalize_day(value, field)
