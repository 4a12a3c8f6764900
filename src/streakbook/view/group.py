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
from streakbook.service.group import (
    completed_count,
    is_satisfied,
    member_habits,
    requirement_text,
)
from streakbook.time import date_to_display_str
from streakbook.view.habit import format_tier
from streakbook.view.header import header


def groups_view(
    groups: list[HabitGroup],
    habits: list[Habit],
    logs: list[DailyLog],
    date: pendulum.Date,
) -> None:
    """
    Display habit groups with their members and progress on date.

    id  name       tier     require  done  members
    ─────────────────────────────────────────────────
    1   Exercise   must do  (1 of 3) ✓ 1   Run, Gym, Swim
    """
    header("groups", date_to_display_str(date))

    groups_table = Table(box=box.SIMPLE)
    groups_table.add_column("id")
    groups_table.add_column("name")
    groups_table.add_column("tier")
    groups_table.add_column("require")
    groups_table.add_column("done")
    groups_table.add_column("members")

    for group in groups:
        members = member_habits(group, habits)
        done = completed_count(group, habits, logs, date)
        mark = "[green]✓[/green]" if is_satisfied(group, habits, logs, date) else " "
        groups_table.add_row(
            str(
                ID_MAP_REPO.associate_id("habit_groups", cast(EntityId, group["id"]))
            ),
            group["name"],
            format_tier(group["tier"]),
            requirement_text(group),
            f"{mark} {done}",
            ", ".join(
                f"{member['name']} [dim]#"
                f"{ID_MAP_REPO.associate_id('habits', cast(EntityId, member['id']))}"
                "[/dim]"
                for member in members
            ),
        )

    console = Console()
    console.print(groups_table)
