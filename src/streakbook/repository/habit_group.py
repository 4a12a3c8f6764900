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
from streakbook.model.habit_group import HabitGroup


class HabitGroupRepository:
    def __init__(self) -> None:
        self._habit_groups: Optional[list[HabitGroup]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def habit_groups(self) -> list[HabitGroup]:
        if self._habit_groups is None:
            self.__load_data()
        if self._habit_groups is None:
            raise ValueError()
        return self._habit_groups

    def __load_data(self) -> None:
        self._habit_groups = []
        if not configuration.DATA_HABIT_GROUPS_DIR.is_dir():
            return
        for file_path in configuration.DATA_HABIT_GROUPS_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_habit_group = load(file_path.read_text(), Loader=Loader)
            if raw_habit_group is not None:
                self._habit_groups.append(
                    self.__convert_habit_group_for_deserialization(raw_habit_group)
                )

    def __save_data(self) -> None:
        # Write dirty entities
        for habit_group in self.habit_groups:
            if habit_group["id"] in self._dirty_ids:
                serializable_habit_group = (
                    self.__convert_habit_group_for_serialization(deepcopy(habit_group))
                )
                file_path = (
                    configuration.DATA_HABIT_GROUPS_DIR / f"{habit_group['id']}.yaml"
                )
                file_path.write_text(dump(serializable_habit_group, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_HABIT_GROUPS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._habit_groups is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_habit_group_for_serialization(
        self, habit_group: HabitGroup
    ) -> dict[str, Any]:
        serializable_habit_group = cast(dict[str, Any], habit_group)
        serializable_habit_group["created"] = time.datetime_to_iso_str(
            serializable_habit_group["created"]
        )
        serializable_habit_group["updated"] = time.datetime_to_iso_str(
            serializable_habit_group["updated"]
        )
        return serializable_habit_group

    def __convert_habit_group_for_deserialization(
        self, habit_group: dict[str, Any]
    ) -> HabitGroup:
        deserializable_habit_group = habit_group
        deserializable_habit_group["created"] = time.datetime_from_str(
            deserializable_habit_group["created"]
        )
        deserializable_habit_group["updated"] = time.datetime_from_str(
            deserializable_habit_group["updated"]
        )
        return cast(HabitGroup, deserializable_habit_group)

    def __find(self, id: EntityId) -> HabitGroup:
        for habit_group in self.habit_groups:
            if habit_group["id"] == id:
                return habit_group
        raise NotFoundError("habit group", id)

    def save_new_habit_group(self, habit_group: HabitGroup) -> EntityId:
        self.is_dirty = True

        habit_group["id"] = generate_entity_id()
        # Deduplicate members, keeping their order
        habit_group["habit_ids"] = list(dict.fromkeys(habit_group["habit_ids"]))

        self.habit_groups.append(habit_group)
        self._dirty_ids.add(habit_group["id"])

        return habit_group["id"]

    def modify_habit_group(
        self,
        id: EntityId,
        name: Optional[str] = None,
        tier: Optional[str] = None,
        require_count: Optional[int] = None,
        habit_ids: Optional[list[EntityId]] = None,
        sort_order: Optional[int] = None,
    ) -> None:
        habit_group = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        habit_group["updated"] = time.now_utc()
        if name is not None:
            habit_group["name"] = name
        if tier is not None:
            habit_group["tier"] = tier  # type: ignore[typeddict-item]
        if require_count is not None:
            habit_group["require_count"] = require_count
        if habit_ids is not None:
            habit_group["habit_ids"] = list(dict.fromkeys(habit_ids))
        if sort_order is not None:
            habit_group["sort_order"] = sort_order

    def delete_habit_group(self, id: EntityId) -> None:
        self.__find(id)

        self.is_dirty = True
        self._deleted_ids.add(id)
        self._dirty_ids.discard(id)
        self._habit_groups = [
            habit_group for habit_group in self.habit_groups if habit_group["id"] != id
        ]

    def get_all_habit_groups(self) -> list[HabitGroup]:
        return deepcopy(
            sorted(
                self.habit_groups,
                key=lambda habit_group: (
                    habit_group["sort_order"],
                    habit_group["created"],
                ),
            )
        )

    def get_habit_group(self, id: EntityId) -> HabitGroup:
        return deepcopy(self.__find(id))

    def get_habit_groups_containing(self, habit_id: EntityId) -> list[HabitGroup]:
        return deepcopy(
            [
                habit_group
                for habit_group in self.habit_groups
                if habit_id in habit_group["habit_ids"]
            ]
        )

    def max_sort_order(self) -> int:
        return max(
            (habit_group["sort_order"] for habit_group in self.habit_groups),
            default=0,
        )


HABIT_GROUP_REPO = HabitGroupRepository()
