# barberflow/core.py
#
# Wall-clock arithmetic. A time of day is an int of minutes since midnight
# (0 <= m < 1440); "HH:MM" is only the external form.

import re
from datetime import date

from barberflow.errors import InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


def parse_time(value: str) -> int:
    """Parse a zero-padded ``HH:MM`` string into minutes since midnight.

    Raises InvalidTimeFormat on anything else (``9:00``, ``24:00``, ``12:60``)
    instead of guessing a value.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)
    match = _TIME_RE.fullmatch(value)
    if match is None:
        raise InvalidTimeFormat(value)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(value)
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(start: int, duration: int) -> int:
    # no wrap past midnight
    result = start + duration
    if not 0 <= result < MINUTES_PER_DAY:
        raise ValueError(f"{format_time(start)} + {duration} min leaves the day")
    return result


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    # half-open intervals: touching endpoints do not overlap
    return a_start < b_end and b_start < a_end


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]
