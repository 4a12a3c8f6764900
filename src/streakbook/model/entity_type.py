# SPDX-License-Identifier: MIT


class EntityType:
    HABIT = "habit"
    DAILY_LOG = "daily_log"
    HABIT_GROUP = "habit_group"
    JOURNAL_NOTE = "journal_note"
