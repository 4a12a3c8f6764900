# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from streakbook import state as app_state
from streakbook.terminal import configuration, day, group, habit, journal
from streakbook.terminal.custom_typer import OrderedTyperGroup
from streakbook.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="streakbook - Habits, streaks and good days in the CLI",
    no_args_is_help=True,
)
app.add_typer(day.app, name="day, d")
app.add_typer(habit.app, name="habit, h")
app.add_typer(group.app, name="group, g")
app.add_typer(journal.app, name="journal, j")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    clear_ids: Annotated[
        bool,
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Clear ID map",
        ),
    ] = False,
) -> None:
    """
    streakbook - Habits, streaks and good days in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if clear_ids:
        app_state.set_clear_ids(True)


def run() -> None:
    app()
