# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from streakbook.view.state import get_show_header


def header(report_name: str, sub_header: Optional[str] = None) -> None:
    """Print the application header above a report.

    Args:
        report_name: The name of the report being shown
        sub_header: Optional extra line, e.g. the day being reported
    """
    if not get_show_header():
        return

    print(Padding("[dark_orange]streakbook[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(f"[sandy_brown]{report_name}[/sandy_brown]", (0, 1)))
    if sub_header is not None:
        print(Padding(f"[plum1]{sub_header}[/plum1]", (0, 1)))
