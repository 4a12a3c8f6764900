# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from streakbook.id_map import clear_id_map
from streakbook.repository.configuration import CONFIGURATION_REPO
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.service import day as day_service
from streakbook.service.streak import current_good_day_streak
from streakbook.terminal.custom_typer import AliasedTyperGroup
from streakbook.terminal.parse import parse_date
from streakbook.time import today_local
from streakbook.view.day import (
    history_view,
    rate_view,
    streak_view,
    today_view,
    undone_view,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("today, t")
@clear_id_map
def today(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-dt", help="YYYY-MM-DD or day offset, default today"),
    ] = None,
) -> None:
    """Show the day's habits, must-do progress and good-day streak."""
    settings = day_service.day_settings(CONFIGURATION_REPO.get_config())
    day = parse_date(date)

    habits = HABIT_REPO.get_all_habits()
    groups = HABIT_GROUP_REPO.get_all_habit_groups()
    logs = DAILY_LOG_REPO.get_all_daily_logs()

    today_view(
        habits,
        groups,
        logs,
        day_service.visible_tasks(habits, logs, day),
        day,
        current_good_day_streak(
            habits, groups, logs, day, settings["good_day_streak_cap"]
        ),
    )


@app.command("streak, s")
def streak() -> None:
    """Show the good-day streak and every habit's streaks."""
    settings = day_service.day_settings(CONFIGURATION_REPO.get_config())
    habits = HABIT_REPO.get_all_habits()
    good_day_streak = current_good_day_streak(
        habits,
        HABIT_GROUP_REPO.get_all_habit_groups(),
        DAILY_LOG_REPO.get_all_daily_logs(),
        today_local(),
        settings["good_day_streak_cap"],
    )
    streak_view(good_day_streak, [habit for habit in habits if habit["is_active"]])


@app.command("rate, r")
def rate(
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-d", help="window length, default from configuration"),
    ] = None,
) -> None:
    """Show the good-day rate and per-habit completion rates."""
    settings = day_service.day_settings(CONFIGURATION_REPO.get_config())
    window = days if days is not None else settings["rate_window_days"]
    if window < 1:
        raise typer.BadParameter("Days must be at least 1")

    today = today_local()
    habits = HABIT_REPO.get_active_habits()
    logs = DAILY_LOG_REPO.get_all_daily_logs()

    rate_view(
        window,
        day_service.good_day_rate(
            HABIT_REPO.get_all_habits(),
            HABIT_GROUP_REPO.get_all_habit_groups(),
            logs,
            window,
            today,
        ),
        [
            (habit, day_service.completion_rate(habit, logs, window, today))
            for habit in habits
        ],
    )


@app.command("history, h")
def history(
    days: Annotated[int, typer.Option("--days", "-d")] = 14,
) -> None:
    """Show good days and must-do progress for recent days."""
    if days < 1:
        raise typer.BadParameter("Days must be at least 1")

    end = today_local()
    history_view(
        HABIT_REPO.get_all_habits(),
        HABIT_GROUP_REPO.get_all_habit_groups(),
        DAILY_LOG_REPO.get_all_daily_logs(),
        end.subtract(days=days - 1),
        end,
    )


@app.command("undone, u")
@clear_id_map
def undone(
    date: Annotated[Optional[str], typer.Option("--date", "-dt")] = None,
) -> None:
    """List must-dos and must-do groups not yet satisfied."""
    day = parse_date(date)
    undone_view(
        day_service.undone_must_dos(
            HABIT_REPO.get_all_habits(),
            HABIT_GROUP_REPO.get_all_habit_groups(),
            DAILY_LOG_REPO.get_all_daily_logs(),
            day,
        ),
        day,
    )
