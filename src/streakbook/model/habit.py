# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, get_args

import pendulum

from streakbook.model.entity_id import EntityId

Tier = Literal["must_do", "nice_to_do"]
HabitType = Literal["positive", "negative"]
Recurrence = Literal["once", "daily", "weekly", "monthly"]

TIERS: tuple[str, ...] = get_args(Tier)
HABIT_TYPES: tuple[str, ...] = get_args(HabitType)
RECURRENCES: tuple[str, ...] = get_args(Recurrence)


class Habit(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "habit"
    name: str  # e.g., "Guitar 🎸"
    description: Optional[str]
    tier: Tier  # only must_do habits affect good days
    type: HabitType  # negative: a completed log is a slip
    recurrence: Recurrence
    target: int  # completions per week/month, 1 for daily and once
    group_id: Optional[EntityId]
    success_criteria: Optional[str]  # e.g., "2-3 litres, by 7:00am"
    triggers_slip: bool  # negative habits only
    is_active: bool  # False once archived
    current_streak: int  # cached, see service.streak
    best_streak: int  # cached, never below current_streak
    reminder_times: Optional[list[str]]  # HH:mm, read by reminder schedulers
    sort_order: int
    created: pendulum.DateTime
    updated: pendulum.DateTime
