# SPDX-License-Identifier: MIT

from streakbook.model.entity_type import EntityType
from streakbook.model.habit import Habit
from streakbook.time import now_utc


def get_habit_template() -> Habit:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.HABIT,
        "name": "",
        "description": None,
        "tier": "must_do",
        "type": "positive",
        "recurrence": "daily",
        "target": 1,
        "group_id": None,
        "success_criteria": None,
        "triggers_slip": False,
        "is_active": True,
        "current_streak": 0,
        "best_streak": 0,
        "reminder_times": None,
        "sort_order": 0,
        "created": now,
        "updated": now,
    }
