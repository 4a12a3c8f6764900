# SPDX-License-Identifier: MIT

import pendulum

from streakbook.model.daily_log import DailyLog
from streakbook.model.habit import Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.service.completion import created_day, is_completed


def member_habits(group: HabitGroup, habits: list[Habit]) -> list[Habit]:
    """Active members that still exist, in the group's member order."""
    by_id = {habit["id"]: habit for habit in habits}
    members: list[Habit] = []
    for habit_id in group["habit_ids"]:
        habit = by_id.get(habit_id)
        if habit is not None and habit["is_active"]:
            members.append(habit)
    return members


def available_members(
    group: HabitGroup, habits: list[Habit], date: pendulum.Date
) -> list[Habit]:
    return [habit for habit in member_habits(group, habits) if created_day(habit) <= date]


def completed_count(
    group: HabitGroup,
    habits: list[Habit],
    logs: list[DailyLog],
    date: pendulum.Date,
) -> int:
    """Number of available members completed on date."""
    return sum(
        1
        for habit in available_members(group, habits, date)
        if is_completed(habit, logs, date)
    )


def is_satisfied(
    group: HabitGroup,
    habits: list[Habit],
    logs: list[DailyLog],
    date: pendulum.Date,
) -> bool:
    """
    Whether at least require_count members are completed on date.

    A group with no available member is never satisfied.
    """
    if len(available_members(group, habits, date)) == 0:
        return False
    return completed_count(group, habits, logs, date) >= group["require_count"]


def is_applicable(group: HabitGroup, habits: list[Habit], date: pendulum.Date) -> bool:
    return len(available_members(group, habits, date)) > 0


def requirement_text(group: HabitGroup) -> str:
    return f"({group['require_count']} of {len(group['habit_ids'])})"
