# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from streakbook.model.entity_id import EntityId

IdMapEntityType = Literal["habits", "habit_groups"]


type IdMapDict = dict[IdMapEntityType, IdMapMapping]


class IdMap(TypedDict):
    """
    Short numbers shown in the terminal, mapped to entity ids.

    Example:

    Habit with an id of "5f0c...".
    Synthetic id for that habit is 3.

    real_habit_id = id_map["habits"]["synthetic_to_real"][3]  # returns "5f0c..."
    """

    habits: "IdMapMapping"
    habit_groups: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]
