import re
from datetime import time


TIME_12H_PATTERN = r"^((1[0-2]|0?[1-9]):([0-5][0-9]) ?([AP]M))$"

_TIME_12H = re.compile(TIME_12H_PATTERN)
_TIME_24H = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])(:[0-5][0-9])?$")


def parse_time(value: str | time) -> time:
    """
    Parse a time of day given either in 12-hour ("2:30 PM") or in 24-hour ("14:30") format.

    Raises ValueError for anything else.
    """

    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError("Invalid time")

    value = value.strip()
    if match := _TIME_12H.match(value.upper()):
        hour, minute = int(match[2]), int(match[3])
        return time(hour % 12 + 12 * (match[4] == "PM"), minute)

    if match := _TIME_24H.match(value):
        return time(int(match[1]), int(match[2]))

    raise ValueError(f"Invalid time: {value!r}")


def format_time(t: time) -> str:
    """Render a time of day in 12-hour format, e.g. "2:30 PM"."""

    return f"{t.hour % 12 or 12}:{t.minute:02d} {'PM' if t.hour >= 12 else 'AM'}"
