# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional, TypedDict

import pendulum

from streakbook.model.daily_log import DailyLog
from streakbook.model.habit import Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.service.completion import completed_dates, created_day
from streakbook.service.day import earliest_created_day, is_good_day
from streakbook.service.recurrence import (
    is_satisfied,
    period_bounds,
    previous_period_start,
)
from streakbook.time import days_between, today_local

DEFAULT_GOOD_DAY_STREAK_CAP = 365


class StreakResult(TypedDict):
    current: int
    best: int


class GoodDayStreak(TypedDict):
    days: int
    capped: bool  # the scan stopped at the cap, the real streak may be longer


def compute_streaks(
    habit: Habit,
    logs: list[DailyLog],
    today: Optional[pendulum.Date] = None,
) -> StreakResult:
    """
    Compute current and best streak purely from the log history.

    Positive habits count consecutive completed days (daily) or satisfied
    periods (weekly, monthly). The current day or period only counts once it
    is done; until then the streak runs up to the previous one. A one-off task
    has a streak of 1 once completed. Negative habits count days since the
    last slip.
    """
    if today is None:
        today = today_local()

    if habit["recurrence"] == "once":
        done = any(date <= today for date in completed_dates(habit, logs))
        value = 1 if done else 0
        return {"current": value, "best": value}

    if habit["type"] == "negative":
        return _slip_free_streaks(habit, logs, today)

    if habit["recurrence"] == "daily":
        return _daily_streaks(habit, logs, today)

    return _period_streaks(habit, logs, today)


def _daily_streaks(
    habit: Habit, logs: list[DailyLog], today: pendulum.Date
) -> StreakResult:
    start = created_day(habit)
    done = {date for date in completed_dates(habit, logs) if start <= date <= today}

    current = 0
    date = today if today in done else today.subtract(days=1)
    while date >= start and date in done:
        current += 1
        date = date.subtract(days=1)

    best = 0
    run = 0
    previous: Optional[pendulum.Date] = None
    for date in sorted(done):
        if previous is not None and days_between(previous, date) == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = date

    return {"current": current, "best": max(best, current)}


def _period_streaks(
    habit: Habit, logs: list[DailyLog], today: pendulum.Date
) -> StreakResult:
    recurrence = habit["recurrence"]
    start = created_day(habit)

    # Periods from the current one back to the one containing the creation day
    periods: list[pendulum.Date] = []
    period_start, _ = period_bounds(recurrence, today)
    while True:
        _, period_end = period_bounds(recurrence, period_start)
        if period_end < start:
            break
        periods.append(period_start)
        period_start = previous_period_start(recurrence, period_start)

    satisfied = [is_satisfied(habit, logs, period) for period in periods]

    current = 0
    # The in-progress period only counts once satisfied
    index = 0 if len(satisfied) > 0 and satisfied[0] else 1
    while index < len(satisfied) and satisfied[index]:
        current += 1
        index += 1

    best = 0
    run = 0
    for period_satisfied in reversed(satisfied):
        run = run + 1 if period_satisfied else 0
        best = max(best, run)

    return {"current": current, "best": max(best, current)}


def _slip_free_streaks(
    habit: Habit, logs: list[DailyLog], today: pendulum.Date
) -> StreakResult:
    start = created_day(habit)
    slips = [date for date in completed_dates(habit, logs) if start <= date <= today]

    if len(slips) == 0:
        current = max(0, days_between(start, today))
        return {"current": current, "best": current}

    current = days_between(slips[-1], today)
    gaps = [days_between(start, slips[0]), current]
    for earlier, later in zip(slips, slips[1:]):
        gaps.append(days_between(earlier, later) - 1)

    return {"current": current, "best": max(gaps)}


def recompute_streaks(
    habit: Habit,
    logs: list[DailyLog],
    today: Optional[pendulum.Date] = None,
) -> Habit:
    """
    Copy of habit with its cached streak fields refreshed.

    The cached best streak never decreases and never falls below the
    current streak.
    """
    result = compute_streaks(habit, logs, today)
    updated = deepcopy(habit)
    updated["current_streak"] = result["current"]
    updated["best_streak"] = max(habit["best_streak"], result["best"], result["current"])
    return updated


def rebuild_from_history(
    habit: Habit,
    logs: list[DailyLog],
    today: Optional[pendulum.Date] = None,
) -> Habit:
    """Copy of habit with both cached streaks derived only from its logs."""
    result = compute_streaks(habit, logs, today)
    updated = deepcopy(habit)
    updated["current_streak"] = result["current"]
    updated["best_streak"] = max(result["best"], result["current"])
    return updated


def current_good_day_streak(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    today: Optional[pendulum.Date] = None,
    cap: int = DEFAULT_GOOD_DAY_STREAK_CAP,
) -> GoodDayStreak:
    """
    Count consecutive good days going back from today.

    Today counts once it is good; otherwise counting starts yesterday. Days
    before the first habit existed are never counted. At most cap days are
    scanned; hitting the cap returns cap with capped set.
    """
    if today is None:
        today = today_local()

    earliest = earliest_created_day(habits)
    if earliest is None:
        return {"days": 0, "capped": False}

    if is_good_day(habits, groups, logs, today):
        date = today
    else:
        date = today.subtract(days=1)

    days = 0
    while days < cap:
        if date < earliest or not is_good_day(habits, groups, logs, date):
            return {"days": days, "capped": False}
        days += 1
        date = date.subtract(days=1)

    return {"days": cap, "capped": True}


def format_good_day_streak(streak: GoodDayStreak) -> str:
    return f"{streak['days']}+" if streak["capped"] else str(streak["days"])
