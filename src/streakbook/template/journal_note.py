# SPDX-License-Identifier: MIT

from streakbook.model.entity_type import EntityType
from streakbook.model.journal_note import JournalNote
from streakbook.time import now_utc, today_local


def get_journal_note_template() -> JournalNote:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.JOURNAL_NOTE,
        "date": today_local(),
        "note": "",
        "fulfillment_score": 5,
        "is_locked": False,
        "created": now,
        "updated": now,
    }
