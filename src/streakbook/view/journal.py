# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from streakbook.model.journal_note import JournalNote
from streakbook.service.journal import fulfillment_level, is_editable
from streakbook.time import date_to_display_str
from streakbook.view.header import header

LEVEL_COLORS = {
    "low": "red",
    "mid": "yellow",
    "good": "green",
    "high": "bright_green",
}


def journal_notes_view(notes: list[JournalNote], today: pendulum.Date) -> None:
    header("journal")

    notes_table = Table(box=box.SIMPLE)
    notes_table.add_column("day")
    notes_table.add_column("score")
    notes_table.add_column("note")
    notes_table.add_column("")

    for note in notes:
        color = LEVEL_COLORS[fulfillment_level(note["fulfillment_score"])]
        notes_table.add_row(
            date_to_display_str(note["date"]),
            f"[{color}]{note['fulfillment_score']}[/{color}]",
            note["note"],
            "" if is_editable(note, today) else "[dim]locked[/dim]",
        )

    console = Console()
    console.print(notes_table)
