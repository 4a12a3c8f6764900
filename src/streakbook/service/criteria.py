# SPDX-License-Identifier: MIT

import re
from typing import Optional

from streakbook.model.criterion import CriterionEntry
from streakbook.template.criterion import DEFAULT_TIME_OF_DAY, get_criterion_template

MAX_CRITERIA = 3

TIME_KEYWORDS = ("by", "before", "at", "after", "until")

# Canonical units offered by editors, by category
UNIT_CATEGORIES: list[tuple[str, list[str]]] = [
    ("Time", ["seconds", "minutes", "hours"]),
    ("Distance", ["m", "km", "miles"]),
    ("Weight", ["g", "kg", "lbs"]),
    ("Volume", ["ml", "litres"]),
]

UNIT_ABBREVIATIONS: dict[str, str] = {
    "s": "seconds",
    "sec": "seconds",
    "secs": "seconds",
    "second": "seconds",
    "seconds": "seconds",
    "min": "minutes",
    "mins": "minutes",
    "minute": "minutes",
    "minutes": "minutes",
    "h": "hours",
    "hr": "hours",
    "hrs": "hours",
    "hour": "hours",
    "hours": "hours",
    "m": "m",
    "metre": "m",
    "metres": "m",
    "meter": "m",
    "meters": "m",
    "km": "km",
    "kms": "km",
    "kilometre": "km",
    "kilometres": "km",
    "kilometer": "km",
    "kilometers": "km",
    "mi": "miles",
    "mile": "miles",
    "miles": "miles",
    "g": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kgs": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "lb": "lbs",
    "lbs": "lbs",
    "pound": "lbs",
    "pounds": "lbs",
    "ml": "ml",
    "mls": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "l": "litres",
    "ltr": "litres",
    "ltrs": "litres",
    "litre": "litres",
    "litres": "litres",
    "liter": "litres",
    "liters": "litres",
}

_KEYWORD_PATTERN = re.compile(
    r"^(?:" + "|".join(TIME_KEYWORDS) + r")\s+(?P<time>.*)$", re.IGNORECASE
)
_TRAILING_UNIT_PATTERN = re.compile(r"^(?P<value>.*?)(?P<unit>[^\W\d_]*)$")
_VALUE_PATTERN = re.compile(r"^\d+(?:\.\d+)?(?:\s*-\s*\d+(?:\.\d+)?)?$")
_NUMERIC_START_PATTERN = re.compile(r"^[\d.]")

# Accepted clock formats, tried in order: h:mma, h:mm a, ha, h a, HH:mm, H:mm
_TIME_FORMATS: list[re.Pattern[str]] = [
    re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})(?P<meridiem>[ap]m)$", re.I),
    re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})\s+(?P<meridiem>[ap]m)$", re.I),
    re.compile(r"^(?P<hour>\d{1,2})(?P<meridiem>[ap]m)$", re.I),
    re.compile(r"^(?P<hour>\d{1,2})\s+(?P<meridiem>[ap]m)$", re.I),
    re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$"),
]


def parse_criteria(raw: Optional[str]) -> list[CriterionEntry]:
    """
    Parse a stored success-criteria string into editable entries.

    Never fails: fragments that do not yield an entry are dropped, and when
    nothing parses a single empty measure entry is returned so an editor
    always has a row to work with.

    Example:
        "2-3L, by 7:00am" -> [measure("2-3", "litres"), by_time(7, 0)]
    """
    if raw is None or raw.strip() == "":
        return [get_criterion_template()]

    entries: list[CriterionEntry] = []
    for part in raw.split(","):
        entry = parse_criterion_part(part.strip())
        if entry is not None:
            entries.append(entry)

    return entries if len(entries) > 0 else [get_criterion_template()]


def parse_criterion_part(part: str) -> Optional[CriterionEntry]:
    """Classify one comma-separated fragment: keyword prefix first, then value+unit."""
    if part == "":
        return None

    keyword_match = _KEYWORD_PATTERN.match(part)
    if keyword_match is not None:
        return _parse_time_part(keyword_match.group("time"))

    return _parse_measure_part(part)


def _parse_time_part(time_text: str) -> CriterionEntry:
    entry = get_criterion_template()
    entry["mode"] = "by_time"
    entry["time_of_day"] = parse_time_of_day(time_text)
    return entry


def _parse_measure_part(part: str) -> Optional[CriterionEntry]:
    unit_match = _TRAILING_UNIT_PATTERN.match(part)
    if unit_match is None:
        return None

    value = unit_match.group("value").strip()
    unit = unit_match.group("unit").strip()
    if not _NUMERIC_START_PATTERN.match(value):
        return None

    entry = get_criterion_template()
    entry["value"] = _normalize_value(value)

    canonical = canonical_unit(unit)
    if canonical is not None:
        entry["unit"] = canonical
    elif unit != "":
        entry["unit"] = unit
        entry["is_custom_unit"] = True

    return entry


def _normalize_value(value: str) -> str:
    # "2 - 3" and "2-3" are the same range
    if _VALUE_PATTERN.match(value):
        return re.sub(r"\s*-\s*", "-", value)
    return value


def canonical_unit(unit: str) -> Optional[str]:
    """Map a unit or abbreviation to its canonical name, case-insensitively."""
    if unit == "":
        return None
    return UNIT_ABBREVIATIONS.get(unit.lower())


def parse_time_of_day(time_text: str) -> tuple[int, int]:
    """
    Parse a clock time such as "7:00am", "7 pm" or "19:30".

    Returns 07:00 when no accepted format matches.
    """
    text = time_text.strip()
    for pattern in _TIME_FORMATS:
        match = pattern.match(text)
        if match is None:
            continue

        groups = match.groupdict()
        hour = int(groups["hour"])
        minute = int(groups["minute"]) if groups.get("minute") else 0
        meridiem = groups.get("meridiem")

        if meridiem is not None:
            if not 1 <= hour <= 12:
                continue
            hour = hour % 12
            if meridiem.lower() == "pm":
                hour += 12
        elif hour > 23:
            continue

        if minute > 59:
            continue
        return (hour, minute)

    return DEFAULT_TIME_OF_DAY


def format_time_of_day(time_of_day: tuple[int, int]) -> str:
    """Format (hour, minute) as h:mma with a lower-case meridiem, e.g. "7:00am"."""
    hour, minute = time_of_day
    meridiem = "pm" if hour >= 12 else "am"
    display_hour = hour % 12
    if display_hour == 0:
        display_hour = 12
    return f"{display_hour}:{minute:02d}{meridiem}"


def build_criteria(entries: list[CriterionEntry]) -> str:
    """
    Build the canonical storage string for a list of entries.

    Measure entries missing a value or unit are skipped so half-edited rows
    never reach storage.
    """
    parts: list[str] = []
    for entry in entries:
        if entry["mode"] == "by_time":
            parts.append(f"by {format_time_of_day(entry['time_of_day'])}")
            continue

        value = entry["value"].strip()
        unit = entry["unit"].strip()
        if value == "" or unit == "":
            continue
        parts.append(f"{value} {unit}")

    return ", ".join(parts)


def has_valid_criteria(entries: list[CriterionEntry]) -> bool:
    """Whether at least one entry is a deadline or a complete measure."""
    for entry in entries:
        if entry["mode"] == "by_time":
            return True
        if entry["value"].strip() != "" and entry["unit"].strip() != "":
            return True
    return False


def can_add_criterion(entries: list[CriterionEntry]) -> bool:
    return len(entries) < MAX_CRITERIA


def describe_criterion(entry: CriterionEntry) -> str:
    """Label for display, e.g. "by 7:00am" or "3 litres"."""
    if entry["mode"] == "by_time":
        return f"by {format_time_of_day(entry['time_of_day'])}"
    return f"{entry['value']} {entry['unit']}".strip()


def normalize_criteria(raw: Optional[str]) -> Optional[str]:
    """Canonical form of user-typed criteria, or None when nothing valid remains."""
    if raw is None:
        return None
    entries = parse_criteria(raw)
    if not has_valid_criteria(entries):
        return None
    return build_criteria(entries)
