# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from streakbook import configuration, time
from streakbook.errors import NotFoundError
from streakbook.model.entity_id import EntityId, generate_entity_id
from streakbook.model.habit import Habit


class HabitRepository:
    def __init__(self) -> None:
        self._habits: Optional[list[Habit]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def habits(self) -> list[Habit]:
        if self._habits is None:
            self.__load_data()
        if self._habits is None:
            raise ValueError()
        return self._habits

    def __load_data(self) -> None:
        self._habits = []
        if not configuration.DATA_HABITS_DIR.is_dir():
            return
        for file_path in configuration.DATA_HABITS_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_habit = load(file_path.read_text(), Loader=Loader)
            if raw_habit is not None:
                self._habits.append(self.__convert_habit_for_deserialization(raw_habit))

    def __save_data(self) -> None:
        # Write dirty entities
        for habit in self.habits:
            if habit["id"] in self._dirty_ids:
                serializable_habit = self.__convert_habit_for_serialization(
                    deepcopy(habit)
                )
                file_path = configuration.DATA_HABITS_DIR / f"{habit['id']}.yaml"
                file_path.write_text(dump(serializable_habit, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_HABITS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._habits is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_habit_for_serialization(self, habit: Habit) -> dict[str, Any]:
        serializable_habit = cast(dict[str, Any], habit)
        serializable_habit["created"] = time.datetime_to_iso_str(
            serializable_habit["created"]
        )
        serializable_habit["updated"] = time.datetime_to_iso_str(
            serializable_habit["updated"]
        )
        return serializable_habit

    def __convert_habit_for_deserialization(self, habit: dict[str, Any]) -> Habit:
        deserializable_habit = habit
        deserializable_habit["created"] = time.datetime_from_str(
            deserializable_habit["created"]
        )
        deserializable_habit["updated"] = time.datetime_from_str(
            deserializable_habit["updated"]
        )
        # Files written before reminders existed
        if "reminder_times" not in deserializable_habit:
            deserializable_habit["reminder_times"] = None
        return cast(Habit, deserializable_habit)

    def __find(self, id: EntityId) -> Habit:
        for habit in self.habits:
            if habit["id"] == id:
                return habit
        raise NotFoundError("habit", id)

    def save_new_habit(self, habit: Habit) -> EntityId:
        self.is_dirty = True

        habit["id"] = generate_entity_id()
        self.habits.append(habit)
        self._dirty_ids.add(habit["id"])

        return habit["id"]

    def modify_habit(
        self,
        id: EntityId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        tier: Optional[str] = None,
        type: Optional[str] = None,
        recurrence: Optional[str] = None,
        target: Optional[int] = None,
        group_id: Optional[EntityId] = None,
        success_criteria: Optional[str] = None,
        triggers_slip: Optional[bool] = None,
        is_active: Optional[bool] = None,
        reminder_times: Optional[list[str]] = None,
        sort_order: Optional[int] = None,
        remove_description: bool = False,
        remove_group_id: bool = False,
        remove_success_criteria: bool = False,
        remove_reminder_times: bool = False,
    ) -> None:
        habit = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        habit["updated"] = time.now_utc()
        if name is not None:
            habit["name"] = name
        if description is not None:
            habit["description"] = description
        if tier is not None:
            habit["tier"] = tier  # type: ignore[typeddict-item]
        if type is not None:
            habit["type"] = type  # type: ignore[typeddict-item]
        if recurrence is not None:
            habit["recurrence"] = recurrence  # type: ignore[typeddict-item]
        if target is not None:
            habit["target"] = target
        if group_id is not None:
            habit["group_id"] = group_id
        if success_criteria is not None:
            habit["success_criteria"] = success_criteria
        if triggers_slip is not None:
            habit["triggers_slip"] = triggers_slip
        if is_active is not None:
            habit["is_active"] = is_active
        if reminder_times is not None:
            habit["reminder_times"] = reminder_times
        if sort_order is not None:
            habit["sort_order"] = sort_order

        if remove_description:
            habit["description"] = None
        if remove_group_id:
            habit["group_id"] = None
        if remove_success_criteria:
            habit["success_criteria"] = None
        if remove_reminder_times:
            habit["reminder_times"] = None

    def set_streaks(self, id: EntityId, current_streak: int, best_streak: int) -> None:
        habit = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        habit["current_streak"] = current_streak
        habit["best_streak"] = best_streak

    def delete_habit(self, id: EntityId) -> None:
        self.__find(id)

        self.is_dirty = True
        self._deleted_ids.add(id)
        self._dirty_ids.discard(id)
        self._habits = [habit for habit in self.habits if habit["id"] != id]

    def get_all_habits(self) -> list[Habit]:
        return deepcopy(
            sorted(
                self.habits, key=lambda habit: (habit["sort_order"], habit["created"])
            )
        )

    def get_active_habits(self) -> list[Habit]:
        return [habit for habit in self.get_all_habits() if habit["is_active"]]

    def get_habit(self, id: EntityId) -> Habit:
        return deepcopy(self.__find(id))

    def has_habit(self, id: EntityId) -> bool:
        return any(habit["id"] == id for habit in self.habits)

    def max_sort_order(self) -> int:
        return max((habit["sort_order"] for habit in self.habits), default=0)


HABIT_REPO = HabitRepository()
