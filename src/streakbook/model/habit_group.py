# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from streakbook.model.entity_id import EntityId
from streakbook.model.habit import Tier


class HabitGroup(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "habit_group"
    name: str  # e.g., "Do something creative"
    tier: Tier
    require_count: int  # satisfied when at least this many members are done
    habit_ids: list[EntityId]  # ordered, unique
    sort_order: int
    created: pendulum.DateTime
    updated: pendulum.DateTime
