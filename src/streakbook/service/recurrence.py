# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from streakbook.model.daily_log import DailyLog
from streakbook.model.habit import Habit
from streakbook.service.completion import (
    completed_dates,
    completion_count,
    created_day,
    is_completed,
)


def period_bounds(
    recurrence: str, date: pendulum.Date
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    Get the first and last day of the period containing date.

    Weeks are ISO weeks (Monday to Sunday). "once" has no calendar period and
    is treated as a single day here.
    """
    if recurrence == "weekly":
        return date.start_of("week"), date.end_of("week")
    if recurrence == "monthly":
        return date.start_of("month"), date.end_of("month")
    return date, date


def previous_period_start(recurrence: str, period_start: pendulum.Date) -> pendulum.Date:
    if recurrence == "weekly":
        return period_start.subtract(weeks=1)
    if recurrence == "monthly":
        return period_start.subtract(months=1)
    return period_start.subtract(days=1)


def first_completion(habit: Habit, logs: list[DailyLog]) -> Optional[pendulum.Date]:
    dates = completed_dates(habit, logs)
    return dates[0] if len(dates) > 0 else None


def is_applicable(habit: Habit, logs: list[DailyLog], date: pendulum.Date) -> bool:
    """
    Whether the habit asks anything of the user on date.

    Nothing applies before the creation day. A one-off task stays applicable
    from its creation day until the day it is first completed (inclusive).
    """
    if date < created_day(habit):
        return False
    if habit["recurrence"] == "once":
        done_on = first_completion(habit, logs)
        return done_on is None or date <= done_on
    return True


def period_completion_count(
    habit: Habit, logs: list[DailyLog], date: pendulum.Date
) -> int:
    """Completed days in the period containing date, ignoring days before creation."""
    if habit["recurrence"] == "once":
        return completion_count(habit, logs, created_day(habit), date)

    start, end = period_bounds(habit["recurrence"], date)
    start = max(start, created_day(habit))
    if start > end:
        return 0
    return completion_count(habit, logs, start, end)


def is_satisfied(habit: Habit, logs: list[DailyLog], date: pendulum.Date) -> bool:
    """
    Whether the target of the period containing date is met.

    - daily: completed on date
    - weekly/monthly: completed days in the week/month reach the target
    - once: completed on any day up to date, permanently
    """
    recurrence = habit["recurrence"]
    if recurrence == "daily":
        return is_completed(habit, logs, date)
    if recurrence == "once":
        done_on = first_completion(habit, logs)
        return done_on is not None and done_on <= date
    return period_completion_count(habit, logs, date) >= habit["target"]


def has_slipped(habit: Habit, logs: list[DailyLog], date: pendulum.Date) -> bool:
    """A negative habit marked completed on date."""
    return habit["type"] == "negative" and is_completed(habit, logs, date)


def recurrence_display_name(habit: Habit) -> str:
    recurrence = habit["recurrence"]
    if recurrence == "once":
        return "Just today"
    if recurrence == "daily":
        return "Daily"
    if recurrence == "weekly":
        return f"{habit['target']}x per week"
    return f"{habit['target']}x per month"
