# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from streakbook.model.daily_log import DailyLog
from streakbook.model.entity_id import EntityId
from streakbook.model.habit import Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.repository.id_map import ID_MAP_REPO
from streakbook.service.completion import get_log, is_completed
from streakbook.service.criteria import describe_criterion, parse_criteria
from streakbook.service.day import completion_rate
from streakbook.service.recurrence import (
    period_completion_count,
    recurrence_display_name,
)
from streakbook.time import (
    clock_str_to_minutes,
    date_to_display_str,
    datetime_to_display_local_date_str,
    minutes_to_clock_str,
)
from streakbook.view.header import header


def format_tier(tier: str) -> str:
    return "[bold]must do[/bold]" if tier == "must_do" else "nice to do"


def format_progress(habit: Habit, logs: list[DailyLog], date: pendulum.Date) -> str:
    """Today's mark for a habit: a check, a cross for a slip, or period progress."""
    done = is_completed(habit, logs, date)
    if habit["type"] == "negative":
        return "[red]✗ slipped[/red]" if done else "[green]clean[/green]"
    if habit["recurrence"] in ("weekly", "monthly"):
        count = period_completion_count(habit, logs, date)
        mark = "[green]✓[/green]" if done else " "
        return f"{mark} {count}/{habit['target']}"
    return "[green]✓[/green]" if done else "-"


def habits_view(
    report_name: str,
    habits: list[Habit],
    logs: list[DailyLog],
    date: pendulum.Date,
    groups: Optional[list[HabitGroup]] = None,
    columns: list[str] = [
        "id",
        "name",
        "tier",
        "recurrence",
        "today",
        "streak",
        "best",
        "group",
    ],
) -> None:
    """Display habits with their status on date."""
    header(report_name, date_to_display_str(date))

    group_names = {group["id"]: group["name"] for group in groups or []}

    habits_table = Table(box=box.SIMPLE)
    for column in columns:
        habits_table.add_column(column)

    for habit in habits:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(
                    ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"]))
                )
            elif column == "name":
                column_value = habit["name"]
                if not habit["is_active"]:
                    column_value = f"[dim]{column_value} (archived)[/dim]"
            elif column == "tier":
                column_value = format_tier(habit["tier"])
            elif column == "type":
                column_value = habit["type"]
            elif column == "recurrence":
                column_value = recurrence_display_name(habit)
            elif column == "today":
                column_value = format_progress(habit, logs, date)
            elif column == "streak":
                column_value = str(habit["current_streak"])
            elif column == "best":
                column_value = str(habit["best_streak"])
            elif column == "group":
                if habit["group_id"] is not None:
                    column_value = group_names.get(habit["group_id"], "")
            elif column == "criteria":
                column_value = habit["success_criteria"] or ""
            row.append(column_value)
        habits_table.add_row(*row)

    console = Console()
    console.print(habits_table)


def single_habit_view(
    habit: Habit,
    logs: list[DailyLog],
    today: pendulum.Date,
    rate_window_days: int,
    group: Optional[HabitGroup] = None,
) -> None:
    """Display every property of a habit plus its recent record."""
    header("habit")

    habit_table = Table(box=box.SIMPLE)
    habit_table.add_column("property")
    habit_table.add_column("value")

    habit_table.add_row(
        "id", str(ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"])))
    )
    habit_table.add_row("name", habit["name"])
    habit_table.add_row("description", habit["description"] or "")
    habit_table.add_row("tier", format_tier(habit["tier"]))
    habit_table.add_row("type", habit["type"])
    habit_table.add_row("recurrence", recurrence_display_name(habit))
    habit_table.add_row("group", group["name"] if group is not None else "")

    criteria = ""
    if habit["success_criteria"] is not None:
        criteria = "\n".join(
            describe_criterion(entry)
            for entry in parse_criteria(habit["success_criteria"])
        )
    habit_table.add_row("criteria", criteria)

    if habit["type"] == "negative":
        habit_table.add_row("triggers slip", "yes" if habit["triggers_slip"] else "no")
    if habit["reminder_times"]:
        habit_table.add_row(
            "reminders",
            ", ".join(
                minutes_to_clock_str(clock_str_to_minutes(reminder))
                for reminder in habit["reminder_times"]
            ),
        )

    habit_table.add_row("active", "yes" if habit["is_active"] else "archived")
    habit_table.add_row("today", format_progress(habit, logs, today))
    habit_table.add_row("current streak", str(habit["current_streak"]))
    habit_table.add_row("best streak", str(habit["best_streak"]))
    rate = completion_rate(habit, logs, rate_window_days, today)
    habit_table.add_row(f"rate ({rate_window_days}d)", f"{rate:.0%}")

    today_log = get_log(logs, habit["id"], today)
    if today_log is not None:
        if today_log["value"] is not None:
            habit_table.add_row("today's value", f"{today_log['value']:g}")
        if today_log["note"]:
            habit_table.add_row("today's note", today_log["note"])
        if today_log["photo_path"]:
            habit_table.add_row("today's photo", today_log["photo_path"])

    habit_table.add_row("created", datetime_to_display_local_date_str(habit["created"]))
    habit_table.add_row("updated", datetime_to_display_local_date_str(habit["updated"]))

    console = Console()
    console.print(habit_table)
