# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from streakbook.errors import StreakbookError
from streakbook.id_map import clear_id_map
from streakbook.model.entity_id import EntityId
from streakbook.repository.configuration import CONFIGURATION_REPO
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.repository.id_map import ID_MAP_REPO
from streakbook.service import habit as habit_service
from streakbook.terminal.completion import (
    complete_habit_type,
    complete_recurrence,
    complete_tier,
)
from streakbook.terminal.custom_typer import AliasedTyperGroup
from streakbook.terminal.parse import parse_date, parse_id_list, parse_time_list
from streakbook.time import today_local
from streakbook.view.habit import habits_view, single_habit_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _real_habit_ids(id_param: str) -> list[EntityId]:
    return [ID_MAP_REPO.get_real_id("habits", id) for id in parse_id_list(id_param)]


def _show_habit(habit_id: EntityId) -> None:
    config = CONFIGURATION_REPO.get_config()
    habit = HABIT_REPO.get_habit(habit_id)
    group = None
    if habit["group_id"] is not None:
        group = HABIT_GROUP_REPO.get_habit_group(habit["group_id"])
    single_habit_view(
        habit,
        DAILY_LOG_REPO.get_daily_logs_for_habit(habit_id),
        today_local(),
        config["rate_window_days"],
        group,
    )


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    tier: Annotated[
        str,
        typer.Option("--tier", "-t", help="must_do, nice_to_do", autocompletion=complete_tier),
    ] = "must_do",
    habit_type: Annotated[
        str,
        typer.Option(
            "--type",
            "-y",
            help="positive, negative (a completion is a slip)",
            autocompletion=complete_habit_type,
        ),
    ] = "positive",
    recurrence: Annotated[
        str,
        typer.Option(
            "--recurrence",
            "-r",
            help="once, daily, weekly, monthly",
            autocompletion=complete_recurrence,
        ),
    ] = "daily",
    target: Annotated[
        Optional[int],
        typer.Option("--target", "-n", help="completions per week (1-7) or month (1-31)"),
    ] = None,
    criteria: Annotated[
        Optional[str],
        typer.Option("--criteria", "-c", help='e.g. "2-3L, by 7am"'),
    ] = None,
    group: Annotated[
        Optional[int], typer.Option("--group", "-g", help="group id to join")
    ] = None,
    triggers_slip: Annotated[
        bool, typer.Option("--triggers-slip", help="negative habits only")
    ] = False,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    reminders: Annotated[
        Optional[list[str]],
        typer.Option("--reminder", "-rm", help="HH:mm, accepts multiple reminder options"),
    ] = None,
) -> None:
    """Create a new habit."""
    try:
        group_id = None
        if group is not None:
            group_id = ID_MAP_REPO.get_real_id("habit_groups", group)
        habit = habit_service.create_habit(
            name,
            tier=tier,
            type=habit_type,
            recurrence=recurrence,
            target=target,
            success_criteria=criteria,
            group_id=group_id,
            triggers_slip=triggers_slip,
            description=description,
            reminder_times=parse_time_list(reminders),
        )
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    _show_habit(habit["id"])  # type: ignore[arg-type]


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    name: Annotated[Optional[str], typer.Option("--name", "-na")] = None,
    tier: Annotated[
        Optional[str], typer.Option("--tier", "-t", autocompletion=complete_tier)
    ] = None,
    habit_type: Annotated[
        Optional[str],
        typer.Option("--type", "-y", autocompletion=complete_habit_type),
    ] = None,
    recurrence: Annotated[
        Optional[str],
        typer.Option("--recurrence", "-r", autocompletion=complete_recurrence),
    ] = None,
    target: Annotated[Optional[int], typer.Option("--target", "-n")] = None,
    criteria: Annotated[Optional[str], typer.Option("--criteria", "-c")] = None,
    triggers_slip: Annotated[
        Optional[bool], typer.Option("--triggers-slip/--no-triggers-slip")
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    reminders: Annotated[
        Optional[list[str]],
        typer.Option("--reminder", "-rm", help="replaces all reminder times"),
    ] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_criteria: Annotated[bool, typer.Option("--remove-criteria", "-rc")] = False,
    remove_reminders: Annotated[
        bool, typer.Option("--remove-reminders", "-rr")
    ] = False,
) -> None:
    """Edit a habit."""
    try:
        habit_id = ID_MAP_REPO.get_real_id("habits", id)
        habit_service.modify_habit(
            habit_id,
            name=name,
            description=description,
            tier=tier,
            type=habit_type,
            recurrence=recurrence,
            target=target,
            success_criteria=criteria,
            triggers_slip=triggers_slip,
            reminder_times=parse_time_list(reminders),
            remove_description=remove_description,
            remove_success_criteria=remove_criteria,
            remove_reminder_times=remove_reminders,
        )
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    _show_habit(habit_id)


@app.command("done, d", no_args_is_help=True)
def done(
    ids: str,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-dt", help="YYYY-MM-DD or day offset, default today"),
    ] = None,
    value: Annotated[
        Optional[float], typer.Option("--value", "-v", help="measured amount")
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-no")] = None,
    photo: Annotated[
        Optional[str], typer.Option("--photo", "-p", help="path of a proof photo")
    ] = None,
) -> None:
    """Mark habits completed (a slip for negative habits)."""
    day = parse_date(date)
    try:
        for habit_id in _real_habit_ids(ids):
            habit = habit_service.set_completion(
                habit_id, day, True, value=value, note=note, photo_path=photo
            )
            typer.echo(f"{habit['name']}: streak {habit['current_streak']}")
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("undo, u", no_args_is_help=True)
def undo(
    ids: str,
    date: Annotated[Optional[str], typer.Option("--date", "-dt")] = None,
) -> None:
    """Clear the completion of habits on a day."""
    day = parse_date(date)
    try:
        for habit_id in _real_habit_ids(ids):
            habit = habit_service.set_completion(habit_id, day, False)
            typer.echo(f"{habit['name']}: streak {habit['current_streak']}")
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("toggle, tg", no_args_is_help=True)
def toggle(
    ids: str,
    date: Annotated[Optional[str], typer.Option("--date", "-dt")] = None,
) -> None:
    """Flip the completion of habits on a day."""
    day = parse_date(date)
    try:
        for habit_id in _real_habit_ids(ids):
            habit = habit_service.toggle_completion(habit_id, day)
            typer.echo(f"{habit['name']}: streak {habit['current_streak']}")
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("archive, ar", no_args_is_help=True)
def archive(ids: str) -> None:
    """Archive habits: hidden from today and aggregates, history kept."""
    try:
        for habit_id in _real_habit_ids(ids):
            habit_service.archive_habit(habit_id)
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("unarchive, ua", no_args_is_help=True)
def unarchive(ids: str) -> None:
    try:
        for habit_id in _real_habit_ids(ids):
            habit_service.unarchive_habit(habit_id)
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("delete, del", no_args_is_help=True)
def delete(
    ids: str,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Permanently delete habits and their history."""
    try:
        habit_ids = _real_habit_ids(ids)
        if not yes:
            names = ", ".join(HABIT_REPO.get_habit(habit_id)["name"] for habit_id in habit_ids)
            typer.confirm(f"Delete {names} and all their history?", abort=True)
        for habit_id in habit_ids:
            habit_service.delete_habit(habit_id)
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("reorder, ro", no_args_is_help=True)
def reorder(ids: str) -> None:
    """Set the display order, e.g. "3,1,2"."""
    try:
        habit_service.reorder_habits(_real_habit_ids(ids))
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("list, ls")
@clear_id_map
def list_habits(
    include_archived: Annotated[
        bool, typer.Option("--all", "-a", help="include archived habits")
    ] = False,
    date: Annotated[Optional[str], typer.Option("--date", "-dt")] = None,
) -> None:
    """List habits with their status for a day."""
    habits = HABIT_REPO.get_all_habits() if include_archived else HABIT_REPO.get_active_habits()
    habits_view(
        "habits",
        habits,
        DAILY_LOG_REPO.get_all_daily_logs(),
        parse_date(date),
        HABIT_GROUP_REPO.get_all_habit_groups(),
    )


@app.command("show, s", no_args_is_help=True)
def show(id: int) -> None:
    """Show one habit in detail."""
    try:
        _show_habit(ID_MAP_REPO.get_real_id("habits", id))
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


@app.command("rebuild")
def rebuild() -> None:
    """Re-derive every cached streak from the completion history."""
    changed = habit_service.rebuild_all_streaks()
    typer.echo(f"Rebuilt streaks, {changed} habits changed")
