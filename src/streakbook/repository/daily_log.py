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
from streakbook.model.daily_log import DailyLog
from streakbook.model.entity_id import EntityId, generate_entity_id


class DailyLogRepository:
    def __init__(self) -> None:
        self._daily_logs: Optional[list[DailyLog]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def daily_logs(self) -> list[DailyLog]:
        if self._daily_logs is None:
            self.__load_data()
        if self._daily_logs is None:
            raise ValueError()
        return self._daily_logs

    def __load_data(self) -> None:
        self._daily_logs = []
        if not configuration.DATA_DAILY_LOGS_DIR.is_dir():
            return
        for file_path in configuration.DATA_DAILY_LOGS_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_daily_log = load(file_path.read_text(), Loader=Loader)
            if raw_daily_log is not None:
                self._daily_logs.append(
                    self.__convert_daily_log_for_deserialization(raw_daily_log)
                )

    def __save_data(self) -> None:
        # Write dirty entities
        for daily_log in self.daily_logs:
            if daily_log["id"] in self._dirty_ids:
                serializable_daily_log = self.__convert_daily_log_for_serialization(
                    deepcopy(daily_log)
                )
                file_path = (
                    configuration.DATA_DAILY_LOGS_DIR / f"{daily_log['id']}.yaml"
                )
                file_path.write_text(dump(serializable_daily_log, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_DAILY_LOGS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._daily_logs is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_daily_log_for_serialization(
        self, daily_log: DailyLog
    ) -> dict[str, Any]:
        serializable_daily_log = cast(dict[str, Any], daily_log)
        serializable_daily_log["date"] = time.date_to_str(
            serializable_daily_log["date"]
        )
        serializable_daily_log["created"] = time.datetime_to_iso_str(
            serializable_daily_log["created"]
        )
        serializable_daily_log["updated"] = time.datetime_to_iso_str(
            serializable_daily_log["updated"]
        )
        return serializable_daily_log

    def __convert_daily_log_for_deserialization(
        self, daily_log: dict[str, Any]
    ) -> DailyLog:
        deserializable_daily_log = daily_log
        deserializable_daily_log["date"] = time.date_from_str(
            str(deserializable_daily_log["date"])
        )
        deserializable_daily_log["created"] = time.datetime_from_str(
            deserializable_daily_log["created"]
        )
        deserializable_daily_log["updated"] = time.datetime_from_str(
            deserializable_daily_log["updated"]
        )
        return cast(DailyLog, deserializable_daily_log)

    def upsert_daily_log(self, daily_log: DailyLog) -> EntityId:
        """
        Store a log, replacing any existing log for the same habit and day.

        The existing log keeps its id so its file is overwritten in place.
        """
        self.is_dirty = True

        for index, existing in enumerate(self.daily_logs):
            if (
                existing["habit_id"] == daily_log["habit_id"]
                and existing["date"] == daily_log["date"]
            ):
                daily_log["id"] = existing["id"]
                self.daily_logs[index] = daily_log
                self._dirty_ids.add(cast(str, daily_log["id"]))
                return cast(EntityId, daily_log["id"])

        if daily_log["id"] is None:
            daily_log["id"] = generate_entity_id()
        self.daily_logs.append(daily_log)
        self._dirty_ids.add(daily_log["id"])
        return daily_log["id"]

    def delete_daily_logs_for_habit(self, habit_id: EntityId) -> int:
        """
        Hard-delete every log of a habit.

        Returns:
            Number of logs deleted
        """
        self.is_dirty = True

        initial_count = len(self.daily_logs)
        for daily_log in self.daily_logs:
            if daily_log["habit_id"] == habit_id:
                self._deleted_ids.add(cast(str, daily_log["id"]))
                self._dirty_ids.discard(cast(str, daily_log["id"]))
        self._daily_logs = [
            daily_log
            for daily_log in self.daily_logs
            if daily_log["habit_id"] != habit_id
        ]
        return initial_count - len(self.daily_logs)

    def get_all_daily_logs(self) -> list[DailyLog]:
        return deepcopy(self.daily_logs)

    def get_daily_logs_for_habit(self, habit_id: EntityId) -> list[DailyLog]:
        return deepcopy(
            [
                daily_log
                for daily_log in self.daily_logs
                if daily_log["habit_id"] == habit_id
            ]
        )

    def get_daily_log(
        self, habit_id: EntityId, date: pendulum.Date
    ) -> Optional[DailyLog]:
        for daily_log in self.daily_logs:
            if daily_log["habit_id"] == habit_id and daily_log["date"] == date:
                return deepcopy(daily_log)
        return None


DAILY_LOG_REPO = DailyLogRepository()
