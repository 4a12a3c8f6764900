# SPDX-License-Identifier: MIT

from typing import cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_local_date(datetime: pendulum.DateTime) -> pendulum.Date:
    """Calendar day of a timestamp in the local timezone."""
    return datetime.in_tz("local").date()


def date_to_str(date: pendulum.Date) -> str:
    return date.to_date_string()


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a calendar day."""
    return cast(pendulum.Date, pendulum.parse(date_str, exact=True))


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def date_range(start: pendulum.Date, end: pendulum.Date) -> list[pendulum.Date]:
    """Every calendar day from start to end, both inclusive."""
    days: list[pendulum.Date] = []
    current = start
    while current <= end:
        days.append(current)
        current = current.add(days=1)
    return days


def minutes_to_clock_str(total_minutes: int) -> str:
    """Format minutes from midnight as e.g. '7:00 AM'."""
    hour = total_minutes // 60
    minute = total_minutes % 60
    period = "PM" if hour >= 12 else "AM"
    display_hour = 12 if hour == 0 else (hour - 12 if hour > 12 else hour)
    return f"{display_hour}:{minute:02d} {period}"


def clock_str_to_minutes(clock: str) -> int:
    """Parse an 'HH:mm' string into minutes from midnight."""
    hours, minutes = map(int, clock.split(":"))
    return hours * 60 + minutes


def days_between(start: pendulum.Date, end: pendulum.Date) -> int:
    """Signed number of calendar days from start to end."""
    return end.toordinal() - start.toordinal()
