"""Tests for the mutation operations that go through the repositories."""

from pathlib import Path

import pytest

from streakbook.errors import NotFoundError, ValidationError
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.service import habit as habit_service
from tests.helpers import MONDAY, created_on


def _create(name: str = "Read", **fields):
    fields.setdefault("created", created_on(MONDAY))
    return habit_service.create_habit(name, **fields)


class TestCreateHabit:
    def test_defaults(self, data_dir: Path) -> None:
        habit = _create()

        assert habit["tier"] == "must_do"
        assert habit["type"] == "positive"
        assert habit["recurrence"] == "daily"
        assert habit["target"] == 1
        assert habit["is_active"] is True
        assert habit["current_streak"] == 0
        assert habit["best_streak"] == 0
        assert HABIT_REPO.has_habit(habit["id"])

    def test_sort_order_follows_creation(self, data_dir: Path) -> None:
        first = _create("First")
        second = _create("Second")
        assert second["sort_order"] == first["sort_order"] + 1

    def test_once_is_always_nice_to_do_positive(self, data_dir: Path) -> None:
        habit = _create("Call the bank", tier="must_do", type="negative", recurrence="once")

        assert habit["tier"] == "nice_to_do"
        assert habit["type"] == "positive"
        assert habit["triggers_slip"] is False

    @pytest.mark.parametrize(
        ("recurrence", "target"),
        [("weekly", 0), ("weekly", 8), ("monthly", 0), ("monthly", 32)],
    )
    def test_target_out_of_range(
        self, data_dir: Path, recurrence: str, target: int
    ) -> None:
        with pytest.raises(ValidationError):
            _create(recurrence=recurrence, target=target)
        assert HABIT_REPO.get_all_habits() == []

    def test_daily_target_is_always_one(self, data_dir: Path) -> None:
        assert _create(target=5)["target"] == 1

    @pytest.mark.parametrize(
        "fields",
        [
            {"name": "  "},
            {"tier": "sometimes"},
            {"type": "neutral"},
            {"recurrence": "yearly"},
            {"reminder_times": ["7am"]},
        ],
    )
    def test_invalid_fields(self, data_dir: Path, fields: dict) -> None:
        fields = dict(fields)
        name = fields.pop("name", "Read")
        with pytest.raises(ValidationError):
            _create(name, **fields)

    def test_criteria_are_normalized(self, data_dir: Path) -> None:
        habit = _create(success_criteria="2-3L, by 7:00am")
        assert habit["success_criteria"] == "2-3 litres, by 7:00am"

    def test_slip_flag_only_kept_for_negative(self, data_dir: Path) -> None:
        assert _create(triggers_slip=True)["triggers_slip"] is False
        assert _create(type="negative", triggers_slip=True)["triggers_slip"] is True

    def test_join_group_on_creation(self, data_dir: Path) -> None:
        run = _create("Run")
        group = habit_service.create_group("Move", "must_do", 1, [run["id"]])

        swim = _create("Swim", group_id=group["id"])

        assert swim["group_id"] == group["id"]
        stored = HABIT_GROUP_REPO.get_habit_group(group["id"])
        assert stored["habit_ids"] == [run["id"], swim["id"]]


class TestSetCompletion:
    def test_completion_updates_streaks(self, data_dir: Path) -> None:
        habit = _create()

        for offset in range(3):
            day = MONDAY.add(days=offset)
            habit = habit_service.set_completion(habit["id"], day, True, today=day)

        assert habit["current_streak"] == 3
        assert habit["best_streak"] == 3
        assert len(DAILY_LOG_REPO.get_daily_logs_for_habit(habit["id"])) == 3

    def test_setting_twice_keeps_one_log(self, data_dir: Path) -> None:
        habit = _create()

        first = habit_service.set_completion(habit["id"], MONDAY, True, today=MONDAY)
        second = habit_service.set_completion(habit["id"], MONDAY, True, today=MONDAY)

        assert first["current_streak"] == second["current_streak"] == 1
        assert len(DAILY_LOG_REPO.get_daily_logs_for_habit(habit["id"])) == 1

    def test_value_and_note_are_stored(self, data_dir: Path) -> None:
        habit = _create()
        habit_service.set_completion(
            habit["id"], MONDAY, True, value=2.5, note="felt good", today=MONDAY
        )
        habit_service.set_completion(habit["id"], MONDAY, True, value=3.0, today=MONDAY)

        log = DAILY_LOG_REPO.get_daily_log(habit["id"], MONDAY)
        assert log is not None
        assert log["value"] == 3.0
        assert log["note"] == "felt good"

    def test_before_creation_is_ignored(self, data_dir: Path) -> None:
        habit = _create()

        result = habit_service.set_completion(
            habit["id"], MONDAY.subtract(days=1), True, today=MONDAY
        )

        assert result["current_streak"] == 0
        assert DAILY_LOG_REPO.get_daily_logs_for_habit(habit["id"]) == []

    def test_undo_lowers_current_but_not_best(self, data_dir: Path) -> None:
        habit = _create()
        for offset in range(3):
            day = MONDAY.add(days=offset)
            habit_service.set_completion(habit["id"], day, True, today=day)

        today = MONDAY.add(days=2)
        habit = habit_service.set_completion(habit["id"], today, False, today=today)

        assert habit["current_streak"] == 2
        assert habit["best_streak"] == 3

    def test_future_day_is_rejected(self, data_dir: Path) -> None:
        habit = _create(recurrence="weekly", target=1)
        tuesday = MONDAY.add(days=1)

        with pytest.raises(ValidationError):
            habit_service.set_completion(
                habit["id"], MONDAY.add(days=5), True, today=tuesday
            )

        assert DAILY_LOG_REPO.get_daily_logs_for_habit(habit["id"]) == []
        assert HABIT_REPO.get_habit(habit["id"])["current_streak"] == 0

    def test_unknown_habit(self, data_dir: Path) -> None:
        with pytest.raises(NotFoundError):
            habit_service.set_completion("missing", MONDAY, True, today=MONDAY)

    def test_once_completed_task_is_not_completed_again(self, data_dir: Path) -> None:
        task = _create("Renew passport", recurrence="once")
        habit_service.set_completion(task["id"], MONDAY, True, today=MONDAY)

        later = MONDAY.add(days=3)
        habit_service.set_completion(task["id"], later, True, today=later)

        logs = DAILY_LOG_REPO.get_daily_logs_for_habit(task["id"])
        assert [log["date"] for log in logs] == [MONDAY]

    def test_weekly_target_scenario(self, data_dir: Path) -> None:
        """Scenario: weekly(3) done Mon, Wed and Fri."""
        habit = _create(recurrence="weekly", target=3)

        for offset in (0, 2):
            day = MONDAY.add(days=offset)
            habit = habit_service.set_completion(habit["id"], day, True, today=day)
        assert habit["current_streak"] == 0

        friday = MONDAY.add(days=4)
        habit = habit_service.set_completion(habit["id"], friday, True, today=friday)
        assert habit["current_streak"] == 1
        assert habit["best_streak"] == 1

    def test_slip_resets_negative_streak(self, data_dir: Path) -> None:
        habit = _create("Doomscrolling", type="negative", triggers_slip=True)
        today = MONDAY.add(days=4)

        habit = habit_service.set_completion(habit["id"], today, True, today=today)

        assert habit["current_streak"] == 0
        assert habit["best_streak"] == 4

    def test_toggle(self, data_dir: Path) -> None:
        habit = _create()

        habit = habit_service.toggle_completion(habit["id"], MONDAY, today=MONDAY)
        assert habit["current_streak"] == 1

        habit = habit_service.toggle_completion(habit["id"], MONDAY, today=MONDAY)
        assert habit["current_streak"] == 0
        log = DAILY_LOG_REPO.get_daily_log(habit["id"], MONDAY)
        assert log is not None
        assert log["completed"] is False


class TestModifyHabit:
    def test_changing_recurrence_rebuilds_streaks(self, data_dir: Path) -> None:
        habit = _create()
        for offset in range(4):
            day = MONDAY.add(days=offset)
            habit_service.set_completion(habit["id"], day, True, today=day)

        today = MONDAY.add(days=3)
        habit = habit_service.modify_habit(
            habit["id"], recurrence="weekly", target=2, today=today
        )

        assert habit["recurrence"] == "weekly"
        assert habit["target"] == 2
        assert habit["current_streak"] == 1
        assert habit["best_streak"] == 1

    def test_rename_keeps_best(self, data_dir: Path) -> None:
        habit = _create()
        habit_service.set_completion(habit["id"], MONDAY, True, today=MONDAY)

        later = MONDAY.add(days=5)
        habit = habit_service.modify_habit(habit["id"], name="Read a book", today=later)

        assert habit["name"] == "Read a book"
        assert habit["current_streak"] == 0
        assert habit["best_streak"] == 1

    def test_invalid_target(self, data_dir: Path) -> None:
        habit = _create(recurrence="weekly", target=3)
        with pytest.raises(ValidationError):
            habit_service.modify_habit(habit["id"], target=9)
        assert HABIT_REPO.get_habit(habit["id"])["target"] == 3

    def test_remove_criteria(self, data_dir: Path) -> None:
        habit = _create(success_criteria="3 km")
        habit = habit_service.modify_habit(
            habit["id"], remove_success_criteria=True, today=MONDAY
        )
        assert habit["success_criteria"] is None


class TestArchiveAndDelete:
    def test_archive_round_trip(self, data_dir: Path) -> None:
        habit = _create()

        habit_service.archive_habit(habit["id"])
        assert HABIT_REPO.get_active_habits() == []

        habit_service.unarchive_habit(habit["id"])
        assert [h["id"] for h in HABIT_REPO.get_active_habits()] == [habit["id"]]

    def test_delete_removes_logs(self, data_dir: Path) -> None:
        habit = _create()
        habit_service.set_completion(habit["id"], MONDAY, True, today=MONDAY)

        habit_service.delete_habit(habit["id"])

        assert not HABIT_REPO.has_habit(habit["id"])
        assert DAILY_LOG_REPO.get_daily_logs_for_habit(habit["id"]) == []

    def test_delete_clamps_group_requirement(self, data_dir: Path) -> None:
        run = _create("Run")
        swim = _create("Swim")
        group = habit_service.create_group("Move", "must_do", 2, [run["id"], swim["id"]])

        habit_service.delete_habit(swim["id"])

        stored = HABIT_GROUP_REPO.get_habit_group(group["id"])
        assert stored["habit_ids"] == [run["id"]]
        assert stored["require_count"] == 1

    def test_delete_last_member_deletes_group(self, data_dir: Path) -> None:
        run = _create("Run")
        group = habit_service.create_group("Move", "must_do", 1, [run["id"]])

        habit_service.delete_habit(run["id"])

        with pytest.raises(NotFoundError):
            HABIT_GROUP_REPO.get_habit_group(group["id"])

    def test_delete_unknown(self, data_dir: Path) -> None:
        with pytest.raises(NotFoundError):
            habit_service.delete_habit("missing")

    def test_reorder(self, data_dir: Path) -> None:
        first = _create("First")
        second = _create("Second")

        habit_service.reorder_habits([second["id"], first["id"]])

        assert [h["id"] for h in HABIT_REPO.get_all_habits()] == [
            second["id"],
            first["id"],
        ]


class TestGroups:
    def test_create_sets_membership(self, data_dir: Path) -> None:
        run = _create("Run")
        swim = _create("Swim")

        group = habit_service.create_group("Move", "must_do", 1, [run["id"], swim["id"]])

        assert group["habit_ids"] == [run["id"], swim["id"]]
        assert HABIT_REPO.get_habit(run["id"])["group_id"] == group["id"]
        assert HABIT_REPO.get_habit(swim["id"])["group_id"] == group["id"]

    @pytest.mark.parametrize("require_count", [0, 3])
    def test_require_count_bounds(self, data_dir: Path, require_count: int) -> None:
        run = _create("Run")
        swim = _create("Swim")

        with pytest.raises(ValidationError):
            habit_service.create_group(
                "Move", "must_do", require_count, [run["id"], swim["id"]]
            )
        assert HABIT_GROUP_REPO.get_all_habit_groups() == []

    def test_rejects_empty_duplicate_and_unknown_members(self, data_dir: Path) -> None:
        run = _create("Run")

        with pytest.raises(ValidationError):
            habit_service.create_group("Move", "must_do", 1, [])
        with pytest.raises(ValidationError):
            habit_service.create_group("Move", "must_do", 1, [run["id"], run["id"]])
        with pytest.raises(ValidationError):
            habit_service.create_group("Move", "must_do", 1, ["missing"])

    def test_habit_belongs_to_one_group(self, data_dir: Path) -> None:
        run = _create("Run")
        habit_service.create_group("Move", "must_do", 1, [run["id"]])

        with pytest.raises(ValidationError):
            habit_service.create_group("Cardio", "must_do", 1, [run["id"]])

    def test_archived_habit_cannot_join(self, data_dir: Path) -> None:
        run = _create("Run")
        habit_service.archive_habit(run["id"])

        with pytest.raises(ValidationError):
            habit_service.create_group("Move", "must_do", 1, [run["id"]])

    def test_delete_group_frees_members(self, data_dir: Path) -> None:
        run = _create("Run")
        group = habit_service.create_group("Move", "must_do", 1, [run["id"]])

        habit_service.delete_group(group["id"])

        assert HABIT_REPO.get_habit(run["id"])["group_id"] is None
        assert HABIT_GROUP_REPO.get_all_habit_groups() == []

    def test_add_and_remove_member(self, data_dir: Path) -> None:
        run = _create("Run")
        swim = _create("Swim")
        group = habit_service.create_group("Move", "must_do", 1, [run["id"]])

        habit_service.add_habit_to_group(group["id"], swim["id"])
        with pytest.raises(ValidationError):
            habit_service.add_habit_to_group(group["id"], swim["id"])

        habit_service.remove_habit_from_group(group["id"], run["id"])

        stored = HABIT_GROUP_REPO.get_habit_group(group["id"])
        assert stored["habit_ids"] == [swim["id"]]
        assert HABIT_REPO.get_habit(run["id"])["group_id"] is None
        with pytest.raises(ValidationError):
            habit_service.remove_habit_from_group(group["id"], run["id"])


def test_rebuild_all_streaks_repairs_cached_values(data_dir: Path) -> None:
    habit = _create()
    for offset in range(3):
        day = MONDAY.add(days=offset)
        habit_service.set_completion(habit["id"], day, True, today=day)
    untouched = _create("Walk")

    HABIT_REPO.set_streaks(habit["id"], 0, 99)

    changed = habit_service.rebuild_all_streaks(today=MONDAY.add(days=2))

    assert changed == 1
    repaired = HABIT_REPO.get_habit(habit["id"])
    assert repaired["current_streak"] == 3
    assert repaired["best_streak"] == 3
    assert HABIT_REPO.get_habit(untouched["id"])["best_streak"] == 0
