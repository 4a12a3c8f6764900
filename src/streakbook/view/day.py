# SPDX-License-Identifier: MIT

from typing import cast

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from streakbook.model.daily_log import DailyLog
from streakbook.model.entity_id import EntityId
from streakbook.model.habit import Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.repository.id_map import ID_MAP_REPO
from streakbook.service.day import (
    UndoneMustDos,
    is_good_day,
    must_do_progress,
)
from streakbook.service.group import requirement_text
from streakbook.service.streak import GoodDayStreak, format_good_day_streak
from streakbook.time import date_range, date_to_display_str
from streakbook.view.habit import format_progress
from streakbook.view.header import header


def _good_day_mark(good: bool) -> str:
    return "[green]good day[/green]" if good else "[yellow]not yet[/yellow]"


def today_view(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    visible: list[Habit],
    date: pendulum.Date,
    streak: GoodDayStreak,
) -> None:
    """Display the day's list with must-do progress and the good-day streak."""
    header("today", date_to_display_str(date))

    completed, total = must_do_progress(habits, groups, logs, date)

    summary_table = Table(box=box.SIMPLE, show_header=False)
    summary_table.add_column("property")
    summary_table.add_column("value")
    summary_table.add_row("must do", f"{completed}/{total}")
    summary_table.add_row("status", _good_day_mark(is_good_day(habits, groups, logs, date)))
    summary_table.add_row("good day streak", format_good_day_streak(streak))

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("id")
    tasks_table.add_column("name")
    tasks_table.add_column("tier")
    tasks_table.add_column("done")
    tasks_table.add_column("streak")

    for habit in visible:
        tier = "must do" if habit["tier"] == "must_do" else "nice to do"
        if habit["group_id"] is not None:
            tier = "group"
        tasks_table.add_row(
            str(ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"]))),
            habit["name"],
            tier,
            format_progress(habit, logs, date),
            str(habit["current_streak"]),
        )

    console = Console()
    console.print(summary_table)
    console.print(tasks_table)


def undone_view(undone: UndoneMustDos, date: pendulum.Date) -> None:
    """Display must-dos and must-do groups still open on date."""
    header("undone", date_to_display_str(date))

    console = Console()
    if len(undone["habits"]) == 0 and len(undone["groups"]) == 0:
        console.print(" [green]All must-dos done[/green]")
        return

    undone_table = Table(box=box.SIMPLE)
    undone_table.add_column("id")
    undone_table.add_column("kind")
    undone_table.add_column("name")

    for habit in undone["habits"]:
        undone_table.add_row(
            str(ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"]))),
            "habit",
            habit["name"],
        )
    for group in undone["groups"]:
        undone_table.add_row(
            str(
                ID_MAP_REPO.associate_id("habit_groups", cast(EntityId, group["id"]))
            ),
            "group",
            f"{group['name']} {requirement_text(group)}",
        )

    console.print(undone_table)


def streak_view(streak: GoodDayStreak, habits: list[Habit]) -> None:
    header("streaks")

    streak_table = Table(box=box.SIMPLE)
    streak_table.add_column("habit")
    streak_table.add_column("current")
    streak_table.add_column("best")

    streak_table.add_row(
        "[bold]good days[/bold]", f"[bold]{format_good_day_streak(streak)}[/bold]", ""
    )
    for habit in habits:
        streak_table.add_row(
            habit["name"], str(habit["current_streak"]), str(habit["best_streak"])
        )

    console = Console()
    console.print(streak_table)


def rate_view(
    days: int,
    good_day_rate: float,
    habit_rates: list[tuple[Habit, float]],
) -> None:
    header("rates", f"last {days} days")

    rate_table = Table(box=box.SIMPLE)
    rate_table.add_column("habit")
    rate_table.add_column("rate")

    rate_table.add_row("[bold]good days[/bold]", f"[bold]{good_day_rate:.0%}[/bold]")
    for habit, rate in habit_rates:
        rate_table.add_row(habit["name"], f"{rate:.0%}")

    console = Console()
    console.print(rate_table)


def history_view(
    habits: list[Habit],
    groups: list[HabitGroup],
    logs: list[DailyLog],
    start: pendulum.Date,
    end: pendulum.Date,
) -> None:
    """
    Display one row per day, newest first.

    day             good  must do
    ──────────────────────────────
    2024-06-12 Wed  ✓     3/3
    2024-06-11 Tue  ✗     2/3
    """
    header("history", f"{date_to_display_str(start)} to {date_to_display_str(end)}")

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("day")
    history_table.add_column("good")
    history_table.add_column("must do")

    for date in reversed(date_range(start, end)):
        completed, total = must_do_progress(habits, groups, logs, date)
        good = is_good_day(habits, groups, logs, date)
        history_table.add_row(
            date_to_display_str(date),
            "[green]✓[/green]" if good else "[red]✗[/red]",
            f"{completed}/{total}",
        )

    console = Console()
    console.print(history_table)
