# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from streakbook.errors import StreakbookError
from streakbook.id_map import clear_id_map
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.repository.id_map import ID_MAP_REPO
from streakbook.service import habit as habit_service
from streakbook.terminal.completion import complete_tier
from streakbook.terminal.custom_typer import AliasedTyperGroup
from streakbook.terminal.parse import parse_date, parse_id_list
from streakbook.time import today_local
from streakbook.view.group import groups_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _show_groups() -> None:
    groups_view(
        HABIT_GROUP_REPO.get_all_habit_groups(),
        HABIT_REPO.get_all_habits(),
        DAILY_LOG_REPO.get_all_daily_logs(),
        today_local(),
    )


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    habits: Annotated[
        str, typer.Argument(help='member habit ids, e.g. "1,2,4"')
    ],
    require: Annotated[
        int, typer.Option("--require", "-r", help="members needed for the group")
    ] = 1,
    tier: Annotated[
        str, typer.Option("--tier", "-t", autocompletion=complete_tier)
    ] = "must_do",
) -> None:
    """Create an any-N-of-M group from existing habits."""
    try:
        habit_ids = [
            ID_MAP_REPO.get_real_id("habits", id) for id in parse_id_list(habits)
        ]
        habit_service.create_group(name, tier, require, habit_ids)
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    _show_groups()


@app.command("delete, del", no_args_is_help=True)
def delete(id: int) -> None:
    """Delete a group; its habits become standalone."""
    try:
        habit_service.delete_group(ID_MAP_REPO.get_real_id("habit_groups", id))
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("add-habit, ah", no_args_is_help=True)
def add_habit(id: int, habit: int) -> None:
    """Add a habit to a group."""
    try:
        habit_service.add_habit_to_group(
            ID_MAP_REPO.get_real_id("habit_groups", id),
            ID_MAP_REPO.get_real_id("habits", habit),
        )
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    _show_groups()


@app.command("remove-habit, rh", no_args_is_help=True)
def remove_habit(id: int, habit: int) -> None:
    """Take a habit out of a group."""
    try:
        habit_service.remove_habit_from_group(
            ID_MAP_REPO.get_real_id("habit_groups", id),
            ID_MAP_REPO.get_real_id("habits", habit),
        )
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("list, ls")
@clear_id_map
def list_groups(
    date: Annotated[Optional[str], typer.Option("--date", "-dt")] = None,
) -> None:
    """List groups with their progress for a day."""
    groups_view(
        HABIT_GROUP_REPO.get_all_habit_groups(),
        HABIT_REPO.get_all_habits(),
        DAILY_LOG_REPO.get_all_daily_logs(),
        parse_date(date),
    )
