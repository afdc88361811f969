from datetime import date, datetime
from typing import Any, Optional

# Tried in order after ISO parsing fails.
_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


def parse_service_date(value: Any) -> Optional[date]:
    """Coerce a date-of-service value to a calendar date.

    Accepts ``date``, ``datetime`` (time is discarded), ISO strings and a few
    US-style formats. Returns ``None`` for anything missing or unparsable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
