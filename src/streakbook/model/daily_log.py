# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from streakbook.model.entity_id import EntityId


class DailyLog(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "daily_log"
    habit_id: EntityId
    date: pendulum.Date  # local calendar day, one log per habit per day
    completed: bool  # for negative habits this marks a slip
    value: Optional[float]
    note: Optional[str]
    photo_path: Optional[str]  # opaque reference
    selected_option: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime
