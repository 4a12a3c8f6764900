# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from streakbook import configuration, time
from streakbook.model.entity_id import EntityId, generate_entity_id
from streakbook.model.journal_note import JournalNote


class JournalNoteRepository:
    def __init__(self) -> None:
        self._journal_notes: Optional[list[JournalNote]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def journal_notes(self) -> list[JournalNote]:
        if self._journal_notes is None:
            self.__load_data()
        if self._journal_notes is None:
            raise ValueError()
        return self._journal_notes

    def __load_data(self) -> None:
        self._journal_notes = []
        if not configuration.DATA_JOURNAL_NOTES_DIR.is_dir():
            return
        for file_path in configuration.DATA_JOURNAL_NOTES_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_journal_note = load(file_path.read_text(), Loader=Loader)
            if raw_journal_note is not None:
                self._journal_notes.append(
                    self.__convert_journal_note_for_deserialization(raw_journal_note)
                )

    def __save_data(self) -> None:
        for journal_note in self.journal_notes:
            if journal_note["id"] in self._dirty_ids:
                serializable_journal_note = (
                    self.__convert_journal_note_for_serialization(
                        deepcopy(journal_note)
                    )
                )
                file_path = (
                    configuration.DATA_JOURNAL_NOTES_DIR / f"{journal_note['id']}.yaml"
                )
                file_path.write_text(dump(serializable_journal_note, Dumper=Dumper))

        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._journal_notes is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_journal_note_for_serialization(
        self, journal_note: JournalNote
    ) -> dict[str, Any]:
        serializable_journal_note = cast(dict[str, Any], journal_note)
        serializable_journal_note["date"] = time.date_to_str(
            serializable_journal_note["date"]
        )
        serializable_journal_note["created"] = time.datetime_to_iso_str(
            serializable_journal_note["created"]
        )
        serializable_journal_note["updated"] = time.datetime_to_iso_str(
            serializable_journal_note["updated"]
        )
        return serializable_journal_note

    def __convert_journal_note_for_deserialization(
        self, journal_note: dict[str, Any]
    ) -> JournalNote:
        deserializable_journal_note = journal_note
        deserializable_journal_note["date"] = time.date_from_str(
            str(deserializable_journal_note["date"])
        )
        deserializable_journal_note["created"] = time.datetime_from_str(
            deserializable_journal_note["created"]
        )
        deserializable_journal_note["updated"] = time.datetime_from_str(
            deserializable_journal_note["updated"]
        )
        return cast(JournalNote, deserializable_journal_note)

    def save_journal_note(self, journal_note: JournalNote) -> EntityId:
        """Insert or replace the note for journal_note's day."""
        self.is_dirty = True

        journal_note["updated"] = time.now_utc()
        for index, existing in enumerate(self.journal_notes):
            if existing["date"] == journal_note["date"]:
                journal_note["id"] = existing["id"]
                self.journal_notes[index] = journal_note
                self._dirty_ids.add(cast(str, journal_note["id"]))
                return cast(EntityId, journal_note["id"])

        journal_note["id"] = generate_entity_id()
        self.journal_notes.append(journal_note)
        self._dirty_ids.add(journal_note["id"])
        return journal_note["id"]

    def lock_journal_note(self, id: EntityId) -> None:
        for journal_note in self.journal_notes:
            if journal_note["id"] == id:
                self.is_dirty = True
                self._dirty_ids.add(id)
                journal_note["is_locked"] = True
                journal_note["updated"] = time.now_utc()

    def get_all_journal_notes(self) -> list[JournalNote]:
        return deepcopy(
            sorted(
                self.journal_notes,
                key=lambda journal_note: journal_note["date"],
                reverse=True,
            )
        )

    def get_journal_note(self, date: pendulum.Date) -> Optional[JournalNote]:
        for journal_note in self.journal_notes:
            if journal_note["date"] == date:
                return deepcopy(journal_note)
        return None


JOURNAL_NOTE_REPO = JournalNoteRepository()
