"""Builders for habits, logs and groups used across the tests."""

from typing import Any, Optional

import pendulum

from streakbook.model.daily_log import DailyLog
from streakbook.model.habit import Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.template.daily_log import get_daily_log_template
from streakbook.template.habit import get_habit_template
from streakbook.template.habit_group import get_habit_group_template

# A Monday, so ISO week arithmetic in tests is easy to follow
MONDAY = pendulum.date(2024, 6, 10)


def created_on(date: pendulum.Date) -> pendulum.DateTime:
    """Midday local time on date, expressed in UTC like stored timestamps."""
    return pendulum.local(date.year, date.month, date.day, 12).in_tz("UTC")


def make_habit(
    id: str = "habit-1",
    created: pendulum.Date = MONDAY,
    **fields: Any,
) -> Habit:
    habit = get_habit_template()
    habit["id"] = id
    habit["name"] = id
    habit["created"] = created_on(created)
    habit["updated"] = created_on(created)
    habit.update(fields)  # type: ignore[typeddict-item]
    return habit


def make_log(
    habit: Habit,
    date: pendulum.Date,
    completed: bool = True,
    value: Optional[float] = None,
) -> DailyLog:
    log = get_daily_log_template()
    log["id"] = f"{habit['id']}-{date.to_date_string()}"
    log["habit_id"] = habit["id"]  # type: ignore[typeddict-item]
    log["date"] = date
    log["completed"] = completed
    log["value"] = value
    return log


def make_logs(habit: Habit, *dates: pendulum.Date) -> list[DailyLog]:
    return [make_log(habit, date) for date in dates]


def make_group(
    habits: list[Habit],
    require_count: int = 1,
    id: str = "group-1",
    tier: str = "must_do",
) -> HabitGroup:
    group = get_habit_group_template()
    group["id"] = id
    group["name"] = id
    group["tier"] = tier  # type: ignore[typeddict-item]
    group["require_count"] = require_count
    group["habit_ids"] = [habit["id"] for habit in habits]  # type: ignore[misc]
    for habit in habits:
        habit["group_id"] = id
    return group
