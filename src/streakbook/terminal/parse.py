# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from streakbook.time import date_from_str, today_local


def parse_date(date_param: Optional[str | int]) -> pendulum.Date:
    """
    Parse a day given on the command line, defaulting to today.

    Accepts YYYY-MM-DD, a relative day offset ("0", "-1", "-7"), and the
    keywords today/t and yesterday/y.
    """
    today = today_local()
    if date_param is None:
        return today

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Numeric input for relative days (e.g., "0", "-1", "-30")
    if re.match(r"^-?\d+$", date):
        return today.add(days=int(date))

    if date == "today" or date == "t":
        return today
    if date == "yesterday" or date == "y":
        return today.subtract(days=1)
    raise typer.BadParameter("Incorrect date format, expected YYYY-MM-DD or an offset")


def parse_time(time_str: Optional[str]) -> Optional[str]:
    """
    Parse a time string in (H)H:mm format into a zero-padded HH:mm string.

    Raises:
        typer.BadParameter: If the time format is invalid or values are out of range
    """
    if time_str is None:
        return None

    time_match = re.match(r"^(\d{1,2}):(\d{2})$", time_str)
    if not time_match:
        raise typer.BadParameter(
            f"Time must be in HH:mm format (e.g., 8:00 or 17:30), got '{time_str}'"
        )

    hour = int(time_match.group(1))
    minute = int(time_match.group(2))

    if hour < 0 or hour > 23:
        raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
    if minute < 0 or minute > 59:
        raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

    return f"{hour:02d}:{minute:02d}"


def parse_time_list(time_params: Optional[list[str]]) -> Optional[list[str]]:
    if time_params is None:
        return None
    parsed = [parse_time(time_param) for time_param in time_params]
    return sorted({clock for clock in parsed if clock is not None})


def parse_id_list(id_param: str) -> list[int]:
    """
    Parse a single ID, comma-separated list of IDs, or ranges of IDs.

    Args:
        id_param: A single ID (e.g., "1"), comma-separated list (e.g., "1,2,3"),
                  range (e.g., "1-5"), or mixed (e.g., "1,3-5,8")

    Returns:
        List of integer IDs in the order given, without duplicates

    Raises:
        typer.BadParameter: If any ID is not a valid integer or range format is invalid
    """
    id_strings = [s.strip() for s in id_param.split(",")]

    ids: list[int] = []
    for id_str in id_strings:
        if not id_str:
            continue

        if "-" in id_str:
            range_parts = id_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{id_str}' (expected format: 'start-end')"
                )

            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' contains non-integer values"
                )

            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' (start must be <= end)"
                )

            ids.extend(range(start, end + 1))
        else:
            try:
                ids.append(int(id_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid ID: '{id_str}' is not a valid integer"
                )

    if len(ids) == 0:
        raise typer.BadParameter("No valid IDs provided")

    # Member order matters for groups, so keep first occurrences in place
    return list(dict.fromkeys(ids))
