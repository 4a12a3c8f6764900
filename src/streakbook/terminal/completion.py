# SPDX-License-Identifier: MIT

from streakbook.model.habit import HABIT_TYPES, RECURRENCES, TIERS


def complete_tier(incomplete: str) -> list[str]:
    return [tier for tier in TIERS if tier.startswith(incomplete)]


def complete_habit_type(incomplete: str) -> list[str]:
    return [habit_type for habit_type in HABIT_TYPES if habit_type.startswith(incomplete)]


def complete_recurrence(incomplete: str) -> list[str]:
    return [recurrence for recurrence in RECURRENCES if recurrence.startswith(incomplete)]
