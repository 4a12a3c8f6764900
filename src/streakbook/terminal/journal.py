# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from streakbook.errors import StreakbookError
from streakbook.repository.journal_note import JOURNAL_NOTE_REPO
from streakbook.service import journal as journal_service
from streakbook.terminal.custom_typer import AliasedTyperGroup
from streakbook.terminal.parse import parse_date
from streakbook.time import today_local
from streakbook.view.journal import journal_notes_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("write, w", no_args_is_help=True)
def write(
    score: Annotated[int, typer.Argument(help="fulfillment, 1-10")],
    note: Annotated[str, typer.Argument()] = "",
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-dt", help="today or yesterday, default today"),
    ] = None,
) -> None:
    """Write the end-of-day note."""
    today = today_local()
    try:
        journal_service.save_journal_note(parse_date(date), note, score, today)
    except StreakbookError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    journal_notes_view(
        journal_service.recent_notes(JOURNAL_NOTE_REPO.get_all_journal_notes(), 7, today),
        today,
    )


@app.command("list, ls")
def list_notes(
    days: Annotated[int, typer.Option("--days", "-d")] = 30,
) -> None:
    """List recent end-of-day notes."""
    today = today_local()
    journal_notes_view(
        journal_service.recent_notes(
            JOURNAL_NOTE_REPO.get_all_journal_notes(), days, today
        ),
        today,
    )
