# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from streakbook import configuration
from streakbook.repository.configuration import CONFIGURATION_REPO
from streakbook.terminal.custom_typer import AliasedTyperGroup
from streakbook.terminal.parse import parse_time

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "clear_ids_on_view",
        "✓ Enabled" if config["clear_ids_on_view"] else "✗ Disabled",
    )
    table.add_row("good_day_streak_cap", str(config["good_day_streak_cap"]))
    table.add_row("rate_window_days", str(config["rate_window_days"]))
    table.add_row("log_level", config.get("log_level", "WARNING"))
    table.add_row("wake_time", config.get("wake_time", "07:00"))
    table.add_row("bed_time", config.get("bed_time", "23:00"))
    table.add_row("data_path", str(configuration.DATA_PATH))

    console.print(table)

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        from yaml import Loader  # type: ignore[assignment] # noqa: F401

        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Enable/disable automatic clearing of ID map before list commands",
        ),
    ] = None,
    good_day_streak_cap: Annotated[
        Optional[int],
        typer.Option(
            "--good-day-streak-cap",
            help="Most days scanned for the good-day streak",
        ),
    ] = None,
    rate_window_days: Annotated[
        Optional[int],
        typer.Option(
            "--rate-window-days",
            help="Default window for completion rates",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    ] = None,
    wake_time: Annotated[
        Optional[str], typer.Option("--wake-time", help="HH:mm")
    ] = None,
    bed_time: Annotated[
        Optional[str], typer.Option("--bed-time", help="HH:mm")
    ] = None,
) -> None:
    """Update configuration settings."""
    if good_day_streak_cap is not None and good_day_streak_cap < 1:
        raise typer.BadParameter("Good-day streak cap must be at least 1")
    if rate_window_days is not None and rate_window_days < 1:
        raise typer.BadParameter("Rate window must be at least 1 day")
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise typer.BadParameter(f"Log level must be one of {', '.join(LOG_LEVELS)}")

    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        data_path=data_path,
        remove_data_path=remove_data_path,
        clear_ids_on_view=clear_ids_on_view,
        good_day_streak_cap=good_day_streak_cap,
        rate_window_days=rate_window_days,
        log_level=log_level,
        wake_time=parse_time(wake_time),
        bed_time=parse_time(bed_time),
    )
    view()
