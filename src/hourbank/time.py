# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return pendulum.parse(datetime)  # type: ignore[return-value]


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def date_to_str(date: datetime.date) -> str:
    """Convert a calendar date to its stored 'YYYY-MM-DD' form."""
    return date.isoformat()


def python_to_pendulum_date(python_value: datetime.date) -> pendulum.Date:
    return pendulum.date(python_value.year, python_value.month, python_value.day)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a pendulum.Date, raising ValueError if malformed."""
    return python_to_pendulum_date(datetime.date.fromisoformat(date_str))


def date_to_display_str(date: datetime.date) -> str:
    return python_to_pendulum_date(date).format("YYYY-MM-DD ddd")
