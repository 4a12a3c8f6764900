# SPDX-License-Identifier: MIT

import pendulum

from streakbook.model.daily_log import DailyLog
from streakbook.model.entity_id import UNSET_ENTITY_ID
from streakbook.model.entity_type import EntityType
from streakbook.time import now_utc, today_local


def get_daily_log_template() -> DailyLog:
    now = now_utc()
    date: pendulum.Date = today_local()
    return {
        "id": None,
        "entity_type": EntityType.DAILY_LOG,
        "habit_id": UNSET_ENTITY_ID,
        "date": date,
        "completed": False,
        "value": None,
        "note": None,
        "photo_path": None,
        "selected_option": None,
        "created": now,
        "updated": now,
    }
