# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

import pendulum

from streakbook.model.daily_log import DailyLog
from streakbook.model.entity_id import EntityId
from streakbook.model.habit import Habit
from streakbook.template.daily_log import get_daily_log_template
from streakbook.time import datetime_to_local_date, now_utc

logger = logging.getLogger(__name__)


def created_day(habit: Habit) -> pendulum.Date:
    """The local calendar day the habit was created on."""
    return datetime_to_local_date(habit["created"])


def get_log(
    logs: list[DailyLog], habit_id: Optional[EntityId], date: pendulum.Date
) -> Optional[DailyLog]:
    for log in logs:
        if log["habit_id"] == habit_id and log["date"] == date:
            return log
    return None


def is_completed(habit: Habit, logs: list[DailyLog], date: pendulum.Date) -> bool:
    log = get_log(logs, habit["id"], date)
    return log is not None and log["completed"]


def completed_dates(habit: Habit, logs: list[DailyLog]) -> list[pendulum.Date]:
    """Days with a completed log for the habit, oldest first."""
    return sorted(
        log["date"]
        for log in logs
        if log["habit_id"] == habit["id"] and log["completed"]
    )


def completion_count(
    habit: Habit,
    logs: list[DailyLog],
    start: pendulum.Date,
    end: pendulum.Date,
) -> int:
    """Completed days between start and end, both inclusive."""
    return sum(
        1
        for log in logs
        if log["habit_id"] == habit["id"]
        and log["completed"]
        and start <= log["date"] <= end
    )


def upsert_log(
    habit: Habit,
    logs: list[DailyLog],
    date: pendulum.Date,
    completed: bool,
    value: Optional[float] = None,
    note: Optional[str] = None,
    photo_path: Optional[str] = None,
) -> Optional[DailyLog]:
    """
    Build the log that results from setting completion for (habit, date).

    The existing log for that day, if any, is copied and updated so there is
    never more than one log per habit per day. Note and photo are kept unless
    new ones are given.

    Returns:
        The new or updated log, or None when date precedes the habit's
        creation day (history is never written retroactively).
    """
    if date < created_day(habit):
        logger.debug(
            "Rejected log for habit %s on %s: before creation day %s",
            habit["id"],
            date,
            created_day(habit),
        )
        return None

    existing = get_log(logs, habit["id"], date)
    if existing is not None:
        log = deepcopy(existing)
        log["updated"] = now_utc()
    else:
        log = get_daily_log_template()
        log["habit_id"] = habit["id"]  # type: ignore[typeddict-item]
        log["date"] = date

    log["completed"] = completed
    log["value"] = value
    if note is not None:
        log["note"] = note
    if photo_path is not None:
        log["photo_path"] = photo_path

    return log


def apply_log(logs: list[DailyLog], log: DailyLog) -> list[DailyLog]:
    """A new log list with log replacing the one for its (habit, day)."""
    remaining = [
        existing
        for existing in logs
        if not (
            existing["habit_id"] == log["habit_id"] and existing["date"] == log["date"]
        )
    ]
    remaining.append(log)
    return remaining
