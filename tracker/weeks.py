"""ISO-8601 week keys (``YYYY-Wnn``).

A date belongs to the ISO week that starts on the Monday on or before it.
The week-year is the calendar year of that week's Thursday, and the week
number counts Thursdays from the start of that year.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable

from tracker.workspace import utc_now

WEEK_KEY_RE = re.compile(r"^(\d{4})-W(\d{2})$")
GRID_WEEKS = 52
GRID_COLUMNS = 4

Clock = Callable[[], datetime]


def _as_utc_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def _iso_year_week(d: date) -> tuple[int, int]:
    thursday = d + timedelta(days=3 - d.weekday())
    day_of_year = thursday.timetuple().tm_yday
    return thursday.year, 1 + (day_of_year - 1) // 7


def week_key_for(value: date | datetime) -> str:
    """Week key for a date, or for a datetime interpreted in UTC."""
    return format_week_key(*_iso_year_week(_as_utc_date(value)))


def current_week_key(clock: Clock | None = None) -> str:
    return week_key_for((clock or utc_now)())


def format_week_key(year: int, week: int) -> str:
    return f"{year:04d}-W{week:02d}"


def weeks_in_year(year: int) -> int:
    """52 or 53; Dec 28 always falls in the last ISO week of its year."""
    return _iso_year_week(date(year, 12, 28))[1]


def is_week_key(value: str) -> bool:
    try:
        parse_week_key(value)
    except ValueError:
        return False
    return True


def parse_week_key(key: str) -> tuple[int, int]:
    """Split a key into (year, week). Raises ValueError when malformed."""
    m = WEEK_KEY_RE.match(key or "")
    if not m:
        raise ValueError(f"Invalid week key: {key!r}")
    year, week = int(m.group(1)), int(m.group(2))
    if week < 1 or week > 53:
        raise ValueError(f"Invalid week number in {key!r}")
    if year < 1:
        raise ValueError(f"Invalid year in {key!r}")
    if week > weeks_in_year(year):
        raise ValueError(f"{year} has no ISO week 53")
    return year, week


def week_start(key: str) -> date:
    """Monday of the given week."""
    year, week = parse_week_key(key)
    jan4 = date(year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.weekday())
    return week1_monday + timedelta(weeks=week - 1)


def shift_week(key: str, offset: int) -> str:
    return week_key_for(week_start(key) + timedelta(weeks=offset))


def previous_week_key(key: str) -> str:
    return shift_week(key, -1)


def next_week_key(key: str) -> str:
    return shift_week(key, 1)


def enumerate_weeks(year: int) -> list[str]:
    """All week keys of an ISO year, ascending."""
    return [format_week_key(year, w) for w in range(1, weeks_in_year(year) + 1)]


def grid_weeks(year: int) -> list[str]:
    """The first 52 weeks of the year, for the 13 x 4 year grid."""
    return enumerate_weeks(year)[:GRID_WEEKS]
