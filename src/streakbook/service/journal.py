# SPDX-License-Identifier: MIT

import logging
from typing import Literal, Optional

import pendulum

from streakbook.errors import ValidationError
from streakbook.model.journal_note import JournalNote
from streakbook.repository.journal_note import JOURNAL_NOTE_REPO
from streakbook.template.journal_note import get_journal_note_template
from streakbook.time import today_local

logger = logging.getLogger(__name__)

FulfillmentLevel = Literal["low", "mid", "good", "high"]

# A note stays editable on its own day and the day after
EDIT_GRACE_DAYS = 2


def is_editable(note: JournalNote, today: pendulum.Date) -> bool:
    return not note["is_locked"] and today < note["date"].add(days=EDIT_GRACE_DAYS)


def lock_expired_notes(
    notes: list[JournalNote], today: Optional[pendulum.Date] = None
) -> list[JournalNote]:
    """Lock stored notes whose edit window has passed; returns the notes locked."""
    if today is None:
        today = today_local()

    locked: list[JournalNote] = []
    for note in notes:
        if not note["is_locked"] and not is_editable(note, today):
            JOURNAL_NOTE_REPO.lock_journal_note(note["id"])  # type: ignore[arg-type]
            locked.append(note)

    if len(locked) > 0:
        logger.info("Locked %d journal notes", len(locked))
    return locked


def save_journal_note(
    date: pendulum.Date,
    note: str,
    fulfillment_score: int,
    today: Optional[pendulum.Date] = None,
) -> JournalNote:
    """
    Write the end-of-day note for date, replacing an editable earlier version.

    Raises:
        ValidationError: score outside 1-10, a date in the future, or a note
            that is no longer editable
    """
    if today is None:
        today = today_local()

    if not 1 <= fulfillment_score <= 10:
        raise ValidationError(
            f"Fulfillment score must be between 1 and 10, got {fulfillment_score}"
        )
    if date > today:
        raise ValidationError("Cannot write a journal note for a future day")

    existing = JOURNAL_NOTE_REPO.get_journal_note(date)
    if existing is not None:
        if not is_editable(existing, today):
            raise ValidationError(f"The journal note for {date} is locked")
        journal_note = existing
    else:
        journal_note = get_journal_note_template()
        journal_note["date"] = date
        if not is_editable(journal_note, today):
            raise ValidationError(f"The journal note for {date} can no longer be written")

    journal_note["note"] = note
    journal_note["fulfillment_score"] = fulfillment_score
    JOURNAL_NOTE_REPO.save_journal_note(journal_note)
    logger.info("Saved journal note for %s", date)

    saved = JOURNAL_NOTE_REPO.get_journal_note(date)
    if saved is None:
        raise ValueError()
    return saved


def recent_notes(
    notes: list[JournalNote], days: int, today: Optional[pendulum.Date] = None
) -> list[JournalNote]:
    """Notes of the last `days` days including today, newest first."""
    if today is None:
        today = today_local()
    start = today.subtract(days=days - 1)
    return sorted(
        (note for note in notes if start <= note["date"] <= today),
        key=lambda note: note["date"],
        reverse=True,
    )


def fulfillment_level(score: int) -> FulfillmentLevel:
    if score <= 3:
        return "low"
    if score <= 5:
        return "mid"
    if score <= 7:
        return "good"
    return "high"
