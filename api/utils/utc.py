from datetime import date, datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_date(value: str | date) -> date:
    """
    Return the UTC calendar day of an ISO 8601 date or datetime.

    Datetimes with an offset are converted to UTC before the time of day is discarded,
    naive datetimes are assumed to already be in UTC.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError("Invalid date")

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()
