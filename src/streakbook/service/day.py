# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from streakbook.configuration import Configuration
from streakbook.model.daily_log import DailyLog
from streakbook.model.habit import Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.service import group as group_service
from streakbook.service.completion import created_day, is_completed
from streakbook.service.recurrence import (
    first_completion,
    has_slipped,
    is_applicable,
    is_satisfied,
    period_bounds,
    previous_period_start,
)
from streakbook.time import date_range, today_local


class DaySettings(TypedDict):
    good_day_streak_cap: int
    rate_window_days: int


class UndoneMustDos(TypedDict):
    habits: list[Habit]
    groups: list[HabitGroup]


def day_settings(config: Configuration) -> DaySettings:
    return {
        "good_day_streak_cap": config["good_day_streak_cap"],
        "rate_window_days": config["rate_window_days"],
    }


def earliest_created_day(habits: list[Habit]) -> Optional[pendulum.Date]:
    """Creation day of the oldest active habit, or None without active habits."""
    days = [created_day(habit) for habit in habits if habit["is_active"]]
    return min(days) if len(days) > 0 else None


def standalone_must_dos(
    habits: list[Habit], logs: list[DailyLog], date: pendulum.Date
) -> list[Habit]:
    """Active must-do positive habits outside any group that apply on date."""
    return [
        habit
        for habit in habits
        if habit["is_active"]
        and habit["tier"] == "must_do"
        and habit["type"] == "positive"
        and habit["group_id"] is None
        and is_applicable(habit, logs, date)
    ]


def must_do_groups(
    groups: list[HabitGroup], habits: list[Habit], date: pendulum.Date
) -> list[HabitGroup]:
    return [
        group
        for group in groups
        if group["tier"] == "must_do" and group_service.is_applicable(group, habits, date)
    ]


def slip_watch(
    habits: list[Habit], logs: list[DailyLog], date: pendulum.Date
) -> list[Habit]:
    """Active must-do negative habits that apply on date."""
    return [
        habit
        for habit in habits
        if habit["is_active"]
        and habit["tier"] == "must_do"
        and habit["type"] == "negative"
        and is_applicable(habit, logs, date)
    ]


def is_good_day(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    date: pendulum.Date,
) -> bool:
    """
    Judge whether date was a good day.

    Every applicable standalone must-do is completed on date, every
    applicable must-do group is satisfied, and no must-do negative habit
    slipped on date. A day with nothing applicable is good.
    """
    for habit in standalone_must_dos(habits, logs, date):
        if not is_completed(habit, logs, date):
            return False

    for group in must_do_groups(groups, habits, date):
        if not group_service.is_satisfied(group, habits, logs, date):
            return False

    for habit in slip_watch(habits, logs, date):
        if has_slipped(habit, logs, date):
            return False

    return True


def undone_must_dos(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    date: pendulum.Date,
) -> UndoneMustDos:
    """Standalone must-dos not completed and must-do groups unsatisfied on date."""
    return {
        "habits": [
            habit
            for habit in standalone_must_dos(habits, logs, date)
            if not is_completed(habit, logs, date)
        ],
        "groups": [
            group
            for group in must_do_groups(groups, habits, date)
            if not group_service.is_satisfied(group, habits, logs, date)
        ],
    }


def must_do_progress(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    date: pendulum.Date,
) -> tuple[int, int]:
    """(done, total) over standalone must-dos and must-do groups on date."""
    standalone = standalone_must_dos(habits, logs, date)
    applicable_groups = must_do_groups(groups, habits, date)

    completed = sum(1 for habit in standalone if is_completed(habit, logs, date))
    completed += sum(
        1
        for group in applicable_groups
        if group_service.is_satisfied(group, habits, logs, date)
    )
    return completed, len(standalone) + len(applicable_groups)


def good_days(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    start: pendulum.Date,
    end: pendulum.Date,
) -> list[pendulum.Date]:
    return [
        date for date in date_range(start, end) if is_good_day(habits, groups, logs, date)
    ]


def _window_start(days: int, today: pendulum.Date) -> pendulum.Date:
    return today.subtract(days=days - 1)


def good_day_rate(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    days: int,
    today: Optional[pendulum.Date] = None,
) -> float:
    """
    Fraction of good days in the last `days` days including today.

    The window never starts before the oldest active habit existed.
    """
    if today is None:
        today = today_local()

    earliest = earliest_created_day(habits)
    if earliest is None or days <= 0:
        return 0.0

    start = max(_window_start(days, today), earliest)
    if start > today:
        return 0.0

    window = date_range(start, today)
    good = sum(1 for date in window if is_good_day(habits, groups, logs, date))
    return good / len(window)


def completion_rate(
    habit: Habit,
    logs: list[DailyLog],
    days: int,
    today: Optional[pendulum.Date] = None,
) -> float:
    """
    Completion rate of a single habit over the last `days` days.

    - daily: completed applicable days over applicable days; for negative
      habits the slip-free days
    - weekly/monthly: satisfied periods over periods overlapping the window
    - once: 1.0 when completed within the window
    """
    if today is None:
        today = today_local()
    if days <= 0:
        return 0.0

    start = max(_window_start(days, today), created_day(habit))
    if start > today:
        return 0.0

    recurrence = habit["recurrence"]

    if recurrence == "once":
        done_on = first_completion(habit, logs)
        return 1.0 if done_on is not None and start <= done_on <= today else 0.0

    if recurrence == "daily" or habit["type"] == "negative":
        window = [date for date in date_range(start, today) if is_applicable(habit, logs, date)]
        if len(window) == 0:
            return 0.0
        if habit["type"] == "negative":
            kept = sum(1 for date in window if not is_completed(habit, logs, date))
        else:
            kept = sum(1 for date in window if is_completed(habit, logs, date))
        return kept / len(window)

    periods: list[pendulum.Date] = []
    period_start, _ = period_bounds(recurrence, today)
    while True:
        _, period_end = period_bounds(recurrence, period_start)
        if period_end < start:
            break
        periods.append(period_start)
        period_start = previous_period_start(recurrence, period_start)

    if len(periods) == 0:
        return 0.0
    satisfied = sum(1 for period in periods if is_satisfied(habit, logs, period))
    return satisfied / len(periods)


def visible_tasks(
    habits: list[Habit], logs: list[DailyLog], today: Optional[pendulum.Date] = None
) -> list[Habit]:
    """
    Active habits to show on today's list.

    Recurring habits always show. One-off tasks show until completed, rolling
    over from earlier days, and on the day they were completed.
    """
    if today is None:
        today = today_local()
    return [
        habit
        for habit in habits
        if habit["is_active"] and is_applicable(habit, logs, today)
    ]


def completed_tasks(
    habits: list[Habit], logs: list[DailyLog], today: Optional[pendulum.Date] = None
) -> list[Habit]:
    """Visible habits already done today."""
    if today is None:
        today = today_local()
    return [
        habit
        for habit in visible_tasks(habits, logs, today)
        if is_completed(habit, logs, today)
    ]
