"""Tests for applicability and period satisfaction per recurrence."""

import pendulum

from streakbook.service.recurrence import (
    has_slipped,
    is_applicable,
    is_satisfied,
    period_bounds,
    period_completion_count,
    recurrence_display_name,
)
from tests.helpers import MONDAY, make_habit, make_log, make_logs

WEDNESDAY = MONDAY.add(days=2)
FRIDAY = MONDAY.add(days=4)
SUNDAY = MONDAY.add(days=6)


class TestPeriodBounds:
    def test_weekly_is_iso_week(self) -> None:
        assert period_bounds("weekly", WEDNESDAY) == (MONDAY, SUNDAY)
        assert period_bounds("weekly", SUNDAY) == (MONDAY, SUNDAY)

    def test_monthly(self) -> None:
        start, end = period_bounds("monthly", pendulum.date(2024, 2, 14))
        assert start == pendulum.date(2024, 2, 1)
        assert end == pendulum.date(2024, 2, 29)

    def test_daily_is_the_day(self) -> None:
        assert period_bounds("daily", WEDNESDAY) == (WEDNESDAY, WEDNESDAY)


class TestWeeklyTarget:
    def test_target_reached_on_third_completion(self) -> None:
        """Scenario: weekly(3) created Monday, done Mon and Wed, then Fri."""
        habit = make_habit(recurrence="weekly", target=3)
        logs = make_logs(habit, MONDAY, WEDNESDAY)

        assert period_completion_count(habit, logs, WEDNESDAY) == 2
        assert is_satisfied(habit, logs, WEDNESDAY) is False

        logs.append(make_log(habit, FRIDAY))
        assert is_satisfied(habit, logs, FRIDAY) is True
        # The whole week is satisfied, whichever day is asked about
        assert is_satisfied(habit, logs, MONDAY) is True

    def test_days_before_creation_do_not_count(self) -> None:
        habit = make_habit(recurrence="weekly", target=2, created=WEDNESDAY)
        logs = make_logs(habit, MONDAY, FRIDAY)

        assert period_completion_count(habit, logs, FRIDAY) == 1
        assert is_satisfied(habit, logs, FRIDAY) is False

    def test_uncompleted_log_does_not_count(self) -> None:
        habit = make_habit(recurrence="weekly", target=1)
        logs = [make_log(habit, MONDAY, completed=False)]

        assert is_satisfied(habit, logs, SUNDAY) is False

    def test_next_week_starts_from_zero(self) -> None:
        habit = make_habit(recurrence="weekly", target=1)
        logs = make_logs(habit, FRIDAY)

        assert is_satisfied(habit, logs, MONDAY.add(weeks=1)) is False


class TestMonthlyTarget:
    def test_counts_within_calendar_month(self) -> None:
        created = pendulum.date(2024, 5, 20)
        habit = make_habit(recurrence="monthly", target=2, created=created)
        logs = make_logs(
            habit,
            pendulum.date(2024, 5, 31),
            pendulum.date(2024, 6, 1),
            pendulum.date(2024, 6, 15),
        )

        assert is_satisfied(habit, logs, pendulum.date(2024, 5, 31)) is False
        assert is_satisfied(habit, logs, pendulum.date(2024, 6, 2)) is True


class TestOnce:
    def test_applicable_until_first_completion(self) -> None:
        habit = make_habit(recurrence="once", tier="nice_to_do")
        logs = make_logs(habit, WEDNESDAY)

        assert is_applicable(habit, logs, MONDAY) is True
        assert is_applicable(habit, logs, WEDNESDAY) is True
        assert is_applicable(habit, logs, FRIDAY) is False

    def test_satisfied_permanently(self) -> None:
        habit = make_habit(recurrence="once", tier="nice_to_do")
        logs = make_logs(habit, WEDNESDAY)

        assert is_satisfied(habit, logs, MONDAY) is False
        assert is_satisfied(habit, logs, WEDNESDAY) is True
        assert is_satisfied(habit, logs, MONDAY.add(years=1)) is True

    def test_uncompleted_task_rolls_over(self) -> None:
        habit = make_habit(recurrence="once", tier="nice_to_do")

        assert is_applicable(habit, [], MONDAY.add(days=30)) is True


class TestApplicability:
    def test_nothing_applies_before_creation(self) -> None:
        habit = make_habit(created=WEDNESDAY)

        assert is_applicable(habit, [], MONDAY) is False
        assert is_applicable(habit, [], WEDNESDAY) is True

    def test_slip_only_for_negative_habits(self) -> None:
        positive = make_habit()
        negative = make_habit(id="habit-2", type="negative")
        logs = make_logs(positive, MONDAY) + make_logs(negative, MONDAY)

        assert has_slipped(positive, logs, MONDAY) is False
        assert has_slipped(negative, logs, MONDAY) is True
        assert has_slipped(negative, logs, WEDNESDAY) is False


def test_recurrence_display_name() -> None:
    assert recurrence_display_name(make_habit()) == "Daily"
    assert recurrence_display_name(make_habit(recurrence="weekly", target=3)) == "3x per week"
    assert recurrence_display_name(make_habit(recurrence="monthly", target=4)) == "4x per month"
    assert recurrence_display_name(make_habit(recurrence="once")) == "Just today"
