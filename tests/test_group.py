"""Tests for any-N-of-M group satisfaction."""

import pytest

from streakbook.service.group import (
    completed_count,
    is_applicable,
    is_satisfied,
    member_habits,
    requirement_text,
)
from tests.helpers import MONDAY, make_group, make_habit, make_logs


def _three_habits():
    return [make_habit(id=name) for name in ("run", "gym", "swim")]


class TestGroupSatisfaction:
    def test_two_of_three(self) -> None:
        """Scenario: require 2 of [A, B, C]; A and C done, B not."""
        run, gym, swim = _three_habits()
        group = make_group([run, gym, swim], require_count=2)
        logs = make_logs(run, MONDAY) + make_logs(swim, MONDAY)

        assert completed_count(group, [run, gym, swim], logs, MONDAY) == 2
        assert is_satisfied(group, [run, gym, swim], logs, MONDAY) is True

    @pytest.mark.parametrize("require_count", [1, 2, 3])
    def test_never_satisfied_below_require_count(self, require_count: int) -> None:
        habits = _three_habits()
        group = make_group(habits, require_count=require_count)

        for done in range(len(habits) + 1):
            logs = [log for habit in habits[:done] for log in make_logs(habit, MONDAY)]
            count = completed_count(group, habits, logs, MONDAY)
            assert count == done
            assert is_satisfied(group, habits, logs, MONDAY) is (count >= require_count)

    def test_archived_member_is_excluded(self) -> None:
        run, gym, swim = _three_habits()
        gym["is_active"] = False
        group = make_group([run, gym, swim], require_count=1)
        logs = make_logs(gym, MONDAY)

        assert member_habits(group, [run, gym, swim]) == [run, swim]
        assert completed_count(group, [run, gym, swim], logs, MONDAY) == 0
        assert is_satisfied(group, [run, gym, swim], logs, MONDAY) is False

    def test_missing_member_is_excluded(self) -> None:
        run, gym, swim = _three_habits()
        group = make_group([run, gym, swim], require_count=1)
        logs = make_logs(swim, MONDAY)

        # swim was deleted from the store but is still listed in the group
        assert completed_count(group, [run, gym], logs, MONDAY) == 0
        assert is_satisfied(group, [run, gym], logs, MONDAY) is False

    def test_no_available_member_is_never_satisfied(self) -> None:
        run, gym, swim = _three_habits()
        group = make_group([run, gym, swim], require_count=1)
        for habit in (run, gym, swim):
            habit["is_active"] = False

        assert is_applicable(group, [run, gym, swim], MONDAY) is False
        assert is_satisfied(group, [run, gym, swim], [], MONDAY) is False

    def test_weekly_member_counts_only_on_its_completion_day(self) -> None:
        reading = make_habit(id="reading", recurrence="weekly", target=1)
        walk = make_habit(id="walk")
        group = make_group([reading, walk], require_count=1)
        friday = MONDAY.add(days=4)
        logs = make_logs(reading, friday)

        assert completed_count(group, [reading, walk], logs, MONDAY) == 0
        assert is_satisfied(group, [reading, walk], logs, MONDAY) is False
        assert is_satisfied(group, [reading, walk], logs, friday) is True

    def test_once_member_counts_only_on_the_day_done(self) -> None:
        errand = make_habit(id="errand", recurrence="once", tier="nice_to_do")
        walk = make_habit(id="walk")
        group = make_group([errand, walk], require_count=1)
        logs = make_logs(errand, MONDAY)

        assert completed_count(group, [errand, walk], logs, MONDAY) == 1
        later = MONDAY.add(days=10)
        assert completed_count(group, [errand, walk], logs, later) == 0
        assert is_satisfied(group, [errand, walk], logs, later) is False


class TestGroupApplicability:
    def test_not_applicable_before_members_exist(self) -> None:
        run = make_habit(id="run", created=MONDAY.add(days=2))
        group = make_group([run])

        assert is_applicable(group, [run], MONDAY) is False
        assert is_applicable(group, [run], MONDAY.add(days=2)) is True


def test_requirement_text() -> None:
    group = make_group(_three_habits(), require_count=2)
    assert requirement_text(group) == "(2 of 3)"
