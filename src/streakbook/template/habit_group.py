# SPDX-License-Identifier: MIT

from streakbook.model.entity_type import EntityType
from streakbook.model.habit_group import HabitGroup
from streakbook.time import now_utc


def get_habit_group_template() -> HabitGroup:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.HABIT_GROUP,
        "name": "New Group",
        "tier": "must_do",
        "require_count": 1,
        "habit_ids": [],
        "sort_order": 0,
        "created": now,
        "updated": now,
    }
