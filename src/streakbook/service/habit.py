# SPDX-License-Identifier: MIT

import logging
import re
from typing import Optional

import pendulum

from streakbook.errors import ValidationError
from streakbook.model.entity_id import EntityId
from streakbook.model.habit import HABIT_TYPES, RECURRENCES, TIERS, Habit
from streakbook.model.habit_group import HabitGroup
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.service.completion import apply_log, is_completed, upsert_log
from streakbook.service.criteria import normalize_criteria
from streakbook.service.recurrence import first_completion
from streakbook.service.streak import rebuild_from_history, recompute_streaks
from streakbook.template.habit import get_habit_template
from streakbook.template.habit_group import get_habit_group_template
from streakbook.time import today_local

logger = logging.getLogger(__name__)

TARGET_RANGES: dict[str, tuple[int, int]] = {
    "weekly": (1, 7),
    "monthly": (1, 31),
}

_REMINDER_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def normalize_target(recurrence: str, target: Optional[int]) -> int:
    """
    Check target against the recurrence and return the value to store.

    Daily and one-off habits always store 1. Weekly targets are 1-7 and
    monthly targets 1-31.
    """
    if recurrence not in TARGET_RANGES:
        return 1
    if target is None:
        return 1
    low, high = TARGET_RANGES[recurrence]
    if not low <= target <= high:
        raise ValidationError(
            f"A {recurrence} target must be between {low} and {high}, got {target}"
        )
    return target


def validate_habit_fields(
    name: Optional[str] = None,
    tier: Optional[str] = None,
    type: Optional[str] = None,
    recurrence: Optional[str] = None,
    reminder_times: Optional[list[str]] = None,
) -> None:
    if name is not None and name.strip() == "":
        raise ValidationError("Habit name cannot be empty")
    if tier is not None and tier not in TIERS:
        raise ValidationError(f"Unknown tier '{tier}', expected one of {TIERS}")
    if type is not None and type not in HABIT_TYPES:
        raise ValidationError(f"Unknown habit type '{type}', expected one of {HABIT_TYPES}")
    if recurrence is not None and recurrence not in RECURRENCES:
        raise ValidationError(
            f"Unknown recurrence '{recurrence}', expected one of {RECURRENCES}"
        )
    if reminder_times is not None:
        for reminder_time in reminder_times:
            if not _REMINDER_TIME_PATTERN.match(reminder_time):
                raise ValidationError(
                    f"Reminder time '{reminder_time}' is not in HH:mm format"
                )


def validate_group_fields(
    name: Optional[str],
    tier: Optional[str],
    require_count: int,
    habit_ids: list[EntityId],
    group_id: Optional[EntityId] = None,
) -> None:
    """
    Check a group definition against the stored habits.

    Members must exist, be active and not belong to another group. group_id
    names the group being edited, whose own members are allowed.
    """
    if name is not None and name.strip() == "":
        raise ValidationError("Group name cannot be empty")
    if tier is not None and tier not in TIERS:
        raise ValidationError(f"Unknown tier '{tier}', expected one of {TIERS}")
    if len(habit_ids) == 0:
        raise ValidationError("A group needs at least one habit")
    if len(set(habit_ids)) != len(habit_ids):
        raise ValidationError("A group cannot list the same habit twice")
    if not 1 <= require_count <= len(habit_ids):
        raise ValidationError(
            f"Required count must be between 1 and {len(habit_ids)}, got {require_count}"
        )

    for habit_id in habit_ids:
        if not HABIT_REPO.has_habit(habit_id):
            raise ValidationError(f"No habit with id '{habit_id}'")
        habit = HABIT_REPO.get_habit(habit_id)
        if not habit["is_active"]:
            raise ValidationError(f"Habit '{habit['name']}' is archived")
        if habit["group_id"] is not None and habit["group_id"] != group_id:
            raise ValidationError(f"Habit '{habit['name']}' is already in a group")


def create_habit(
    name: str,
    tier: str = "must_do",
    type: str = "positive",
    recurrence: str = "daily",
    target: Optional[int] = None,
    success_criteria: Optional[str] = None,
    group_id: Optional[EntityId] = None,
    triggers_slip: bool = False,
    description: Optional[str] = None,
    reminder_times: Optional[list[str]] = None,
    created: Optional[pendulum.DateTime] = None,
) -> Habit:
    """
    Validate and store a new habit.

    A one-off task is always a nice-to-do positive habit. When group_id is
    given the habit joins that group.
    """
    validate_habit_fields(name, tier, type, recurrence, reminder_times)
    stored_target = normalize_target(recurrence, target)

    if recurrence == "once":
        tier = "nice_to_do"
        type = "positive"

    group: Optional[HabitGroup] = None
    if group_id is not None:
        group = HABIT_GROUP_REPO.get_habit_group(group_id)

    habit = get_habit_template()
    habit["name"] = name.strip()
    habit["description"] = description
    habit["tier"] = tier  # type: ignore[typeddict-item]
    habit["type"] = type  # type: ignore[typeddict-item]
    habit["recurrence"] = recurrence  # type: ignore[typeddict-item]
    habit["target"] = stored_target
    habit["success_criteria"] = normalize_criteria(success_criteria)
    habit["triggers_slip"] = triggers_slip and type == "negative"
    habit["reminder_times"] = reminder_times
    habit["sort_order"] = HABIT_REPO.max_sort_order() + 1
    if created is not None:
        habit["created"] = created
        habit["updated"] = created

    habit_id = HABIT_REPO.save_new_habit(habit)
    logger.info("Created habit %s (%s)", habit_id, habit["name"])

    if group is not None:
        add_habit_to_group(group_id, habit_id)  # type: ignore[arg-type]

    return HABIT_REPO.get_habit(habit_id)


def modify_habit(
    habit_id: EntityId,
    name: Optional[str] = None,
    description: Optional[str] = None,
    tier: Optional[str] = None,
    type: Optional[str] = None,
    recurrence: Optional[str] = None,
    target: Optional[int] = None,
    success_criteria: Optional[str] = None,
    triggers_slip: Optional[bool] = None,
    reminder_times: Optional[list[str]] = None,
    remove_description: bool = False,
    remove_success_criteria: bool = False,
    remove_reminder_times: bool = False,
    today: Optional[pendulum.Date] = None,
) -> Habit:
    """
    Edit a habit's fields.

    Changing type, recurrence or target re-derives both cached streaks from
    the log history.
    """
    habit = HABIT_REPO.get_habit(habit_id)
    validate_habit_fields(name, tier, type, recurrence, reminder_times)

    new_recurrence = recurrence if recurrence is not None else habit["recurrence"]
    new_target: Optional[int] = None
    if recurrence is not None or target is not None:
        new_target = normalize_target(
            new_recurrence, target if target is not None else habit["target"]
        )

    new_type = type
    new_tier = tier
    if new_recurrence == "once":
        new_tier = "nice_to_do"
        new_type = "positive"

    new_criteria: Optional[str] = None
    if success_criteria is not None:
        new_criteria = normalize_criteria(success_criteria)
        if new_criteria is None:
            remove_success_criteria = True

    HABIT_REPO.modify_habit(
        habit_id,
        name=name.strip() if name is not None else None,
        description=description,
        tier=new_tier,
        type=new_type,
        recurrence=recurrence,
        target=new_target,
        success_criteria=new_criteria,
        triggers_slip=triggers_slip,
        reminder_times=reminder_times,
        remove_description=remove_description,
        remove_success_criteria=remove_success_criteria,
        remove_reminder_times=remove_reminder_times,
    )

    updated = HABIT_REPO.get_habit(habit_id)
    if updated["type"] != "negative" and updated["triggers_slip"]:
        HABIT_REPO.modify_habit(habit_id, triggers_slip=False)

    shape_changed = (
        updated["type"] != habit["type"]
        or updated["recurrence"] != habit["recurrence"]
        or updated["target"] != habit["target"]
    )
    logs = DAILY_LOG_REPO.get_daily_logs_for_habit(habit_id)
    if shape_changed:
        refreshed = rebuild_from_history(updated, logs, today)
    else:
        refreshed = recompute_streaks(updated, logs, today)
    HABIT_REPO.set_streaks(
        habit_id, refreshed["current_streak"], refreshed["best_streak"]
    )

    logger.info("Modified habit %s", habit_id)
    return HABIT_REPO.get_habit(habit_id)


def archive_habit(habit_id: EntityId) -> None:
    """Hide a habit from every aggregate while keeping its history."""
    HABIT_REPO.modify_habit(habit_id, is_active=False)
    logger.info("Archived habit %s", habit_id)


def unarchive_habit(habit_id: EntityId) -> None:
    HABIT_REPO.modify_habit(habit_id, is_active=True)
    logger.info("Unarchived habit %s", habit_id)


def delete_habit(habit_id: EntityId) -> None:
    """
    Hard-delete a habit together with its logs and group memberships.

    A group left without members is deleted as well.
    """
    HABIT_REPO.get_habit(habit_id)

    for group in HABIT_GROUP_REPO.get_habit_groups_containing(habit_id):
        _drop_member(group, habit_id)

    deleted_logs = DAILY_LOG_REPO.delete_daily_logs_for_habit(habit_id)
    HABIT_REPO.delete_habit(habit_id)
    logger.info("Deleted habit %s and %d logs", habit_id, deleted_logs)


def reorder_habits(habit_ids: list[EntityId]) -> None:
    """Assign sort order following the given id order."""
    for habit_id in habit_ids:
        HABIT_REPO.get_habit(habit_id)
    for index, habit_id in enumerate(habit_ids):
        HABIT_REPO.modify_habit(habit_id, sort_order=index)


def create_group(
    name: str,
    tier: str,
    require_count: int,
    habit_ids: list[EntityId],
) -> HabitGroup:
    validate_group_fields(name, tier, require_count, habit_ids)

    group = get_habit_group_template()
    group["name"] = name.strip()
    group["tier"] = tier  # type: ignore[typeddict-item]
    group["require_count"] = require_count
    group["habit_ids"] = list(habit_ids)
    group["sort_order"] = HABIT_GROUP_REPO.max_sort_order() + 1

    group_id = HABIT_GROUP_REPO.save_new_habit_group(group)
    for habit_id in habit_ids:
        HABIT_REPO.modify_habit(habit_id, group_id=group_id)

    logger.info("Created group %s (%s) with %d habits", group_id, name, len(habit_ids))
    return HABIT_GROUP_REPO.get_habit_group(group_id)


def delete_group(group_id: EntityId) -> None:
    """Delete a group; its member habits become standalone again."""
    group = HABIT_GROUP_REPO.get_habit_group(group_id)
    for habit_id in group["habit_ids"]:
        if HABIT_REPO.has_habit(habit_id):
            HABIT_REPO.modify_habit(habit_id, remove_group_id=True)
    HABIT_GROUP_REPO.delete_habit_group(group_id)
    logger.info("Deleted group %s", group_id)


def add_habit_to_group(group_id: EntityId, habit_id: EntityId) -> None:
    group = HABIT_GROUP_REPO.get_habit_group(group_id)
    if habit_id in group["habit_ids"]:
        raise ValidationError("Habit is already in this group")

    habit_ids = group["habit_ids"] + [habit_id]
    validate_group_fields(None, None, group["require_count"], habit_ids, group_id)

    HABIT_GROUP_REPO.modify_habit_group(group_id, habit_ids=habit_ids)
    HABIT_REPO.modify_habit(habit_id, group_id=group_id)
    logger.info("Added habit %s to group %s", habit_id, group_id)


def remove_habit_from_group(group_id: EntityId, habit_id: EntityId) -> None:
    """
    Take a habit out of a group.

    The required count is lowered to the remaining size when needed and a
    group left empty is deleted.
    """
    group = HABIT_GROUP_REPO.get_habit_group(group_id)
    if habit_id not in group["habit_ids"]:
        raise ValidationError("Habit is not in this group")

    _drop_member(group, habit_id)
    if HABIT_REPO.has_habit(habit_id):
        HABIT_REPO.modify_habit(habit_id, remove_group_id=True)
    logger.info("Removed habit %s from group %s", habit_id, group_id)


def _drop_member(group: HabitGroup, habit_id: EntityId) -> None:
    remaining = [member for member in group["habit_ids"] if member != habit_id]
    group_id: EntityId = group["id"]  # type: ignore[assignment]
    if len(remaining) == 0:
        HABIT_GROUP_REPO.delete_habit_group(group_id)
        logger.info("Deleted group %s, its last habit left", group_id)
        return
    HABIT_GROUP_REPO.modify_habit_group(
        group_id,
        habit_ids=remaining,
        require_count=min(group["require_count"], len(remaining)),
    )


def set_completion(
    habit_id: EntityId,
    date: pendulum.Date,
    completed: bool,
    value: Optional[float] = None,
    note: Optional[str] = None,
    photo_path: Optional[str] = None,
    today: Optional[pendulum.Date] = None,
) -> Habit:
    """
    Record completion of a habit on a day and refresh its cached streaks.

    The log and the streak values are computed first and then written
    together. Days before the habit's creation day are ignored, as is
    completing a one-off task that was already completed on another day.

    Returns:
        The habit as stored after the write

    Raises:
        ValidationError: date is after today
    """
    if today is None:
        today = today_local()
    if date > today:
        raise ValidationError(f"Cannot record a completion for a future day ({date})")

    habit = HABIT_REPO.get_habit(habit_id)
    logs = DAILY_LOG_REPO.get_daily_logs_for_habit(habit_id)

    if habit["recurrence"] == "once" and completed:
        done_on = first_completion(habit, logs)
        if done_on is not None and done_on != date:
            logger.debug("Task %s was already completed on %s", habit_id, done_on)
            return habit

    log = upsert_log(habit, logs, date, completed, value, note, photo_path)
    if log is None:
        return habit

    updated = recompute_streaks(habit, apply_log(logs, log), today)

    DAILY_LOG_REPO.upsert_daily_log(log)
    HABIT_REPO.set_streaks(
        habit_id, updated["current_streak"], updated["best_streak"]
    )
    return HABIT_REPO.get_habit(habit_id)


def toggle_completion(
    habit_id: EntityId,
    date: pendulum.Date,
    today: Optional[pendulum.Date] = None,
) -> Habit:
    habit = HABIT_REPO.get_habit(habit_id)
    logs = DAILY_LOG_REPO.get_daily_logs_for_habit(habit_id)
    return set_completion(
        habit_id, date, not is_completed(habit, logs, date), today=today
    )


def rebuild_all_streaks(today: Optional[pendulum.Date] = None) -> int:
    """
    Re-derive every habit's cached streaks from its log history.

    Returns:
        Number of habits whose cached values changed
    """
    changed = 0
    for habit in HABIT_REPO.get_all_habits():
        habit_id: EntityId = habit["id"]  # type: ignore[assignment]
        logs = DAILY_LOG_REPO.get_daily_logs_for_habit(habit_id)
        rebuilt = rebuild_from_history(habit, logs, today)
        if (
            rebuilt["current_streak"] != habit["current_streak"]
            or rebuilt["best_streak"] != habit["best_streak"]
        ):
            HABIT_REPO.set_streaks(
                habit_id, rebuilt["current_streak"], rebuilt["best_streak"]
            )
            changed += 1

    logger.info("Rebuilt streaks, %d habits changed", changed)
    return changed
