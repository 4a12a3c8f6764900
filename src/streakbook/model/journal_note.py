# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from streakbook.model.entity_id import EntityId


class JournalNote(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "journal_note"
    date: pendulum.Date  # one note per day
    note: str
    fulfillment_score: int  # 1-10
    is_locked: bool  # read-only once the grace period has passed
    created: pendulum.DateTime
    updated: pendulum.DateTime
