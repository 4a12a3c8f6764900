# SPDX-License-Identifier: MIT

import atexit

from streakbook.repository.configuration import CONFIGURATION_REPO
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.repository.id_map import ID_MAP_REPO
from streakbook.repository.journal_note import JOURNAL_NOTE_REPO


def flush_all() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()

    # Flush entity repositories
    HABIT_REPO.flush()
    DAILY_LOG_REPO.flush()
    HABIT_GROUP_REPO.flush()
    JOURNAL_NOTE_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_all)
