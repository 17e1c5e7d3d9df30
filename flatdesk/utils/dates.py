from datetime import date, datetime, timezone

from dateutil import parser as date_parser


def utcnow():
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value):
    """Parse a client-supplied date or datetime into naive UTC.

    Accepts ``YYYY-MM-DD`` strings, full ISO-8601 timestamps, ``date`` and
    ``datetime`` objects. Empty values give ``None``; anything else that
    cannot be parsed raises ``ValueError``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.isoparse(str(value).strip())
        except (ValueError, OverflowError):
            raise ValueError(f"Invalid date: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat(value):
    return value.isoformat() if value else None
