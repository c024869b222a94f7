from datetime import date, datetime, timedelta, timezone

import pytest

from api.utils.utc import normalize_date, utcnow


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-01", date(2024, 3, 1)),
        ("2024-03-01T00:00:00.000Z", date(2024, 3, 1)),
        ("2024-03-01T23:30:00-05:00", date(2024, 3, 2)),
        ("2024-03-01T01:00:00+02:00", date(2024, 2, 29)),
        ("2024-12-31T23:59:59", date(2024, 12, 31)),
        (datetime(2024, 3, 1, 22, 0, tzinfo=timezone(timedelta(hours=-3))), date(2024, 3, 2)),
        (date(2024, 3, 1), date(2024, 3, 1)),
    ],
)
def test__normalize_date(value: str | date, expected: date) -> None:
    assert normalize_date(value) == expected


@pytest.mark.parametrize("value", ["", "tomorrow", "2024-13-01", "01.03.2024", 1709251200])
def test__normalize_date__invalid(value: object) -> None:
    with pytest.raises(ValueError):
        normalize_date(value)  # type: ignore[arg-type]


def test__utcnow() -> None:
    assert utcnow().tzinfo == timezone.utc
