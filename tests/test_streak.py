"""Tests for per-habit streaks and the cross-habit good-day streak."""

import pendulum
import pytest

from streakbook.service.streak import (
    compute_streaks,
    current_good_day_streak,
    format_good_day_streak,
    rebuild_from_history,
    recompute_streaks,
)
from streakbook.time import date_range
from tests.helpers import MONDAY, make_habit, make_log, make_logs


def _days(start: pendulum.Date, count: int) -> list[pendulum.Date]:
    return [start.add(days=offset) for offset in range(count)]


class TestDailyStreaks:
    def test_today_not_done_counts_from_yesterday(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, *_days(MONDAY, 3))

        result = compute_streaks(habit, logs, MONDAY.add(days=3))
        assert result == {"current": 3, "best": 3}

    def test_today_done_is_included(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, *_days(MONDAY, 4))

        assert compute_streaks(habit, logs, MONDAY.add(days=3))["current"] == 4

    def test_gap_breaks_current_but_best_remembers(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, *_days(MONDAY, 4), MONDAY.add(days=5))

        result = compute_streaks(habit, logs, MONDAY.add(days=6))
        assert result == {"current": 1, "best": 4}

    def test_missed_yesterday_means_zero(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, MONDAY)

        assert compute_streaks(habit, logs, MONDAY.add(days=2))["current"] == 0

    def test_uncompleted_logs_break_the_run(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, MONDAY, MONDAY.add(days=2))
        logs.append(make_log(habit, MONDAY.add(days=1), completed=False))

        assert compute_streaks(habit, logs, MONDAY.add(days=2)) == {
            "current": 1,
            "best": 1,
        }

    def test_no_logs(self) -> None:
        assert compute_streaks(make_habit(), [], MONDAY) == {"current": 0, "best": 0}


class TestPeriodStreaks:
    def test_weekly_in_progress_week_counts_once_satisfied(self) -> None:
        habit = make_habit(recurrence="weekly", target=2)
        logs = make_logs(
            habit,
            MONDAY,
            MONDAY.add(days=1),
            MONDAY.add(weeks=1),
            MONDAY.add(weeks=1, days=2),
            MONDAY.add(weeks=2),
        )
        today = MONDAY.add(weeks=2, days=1)

        assert compute_streaks(habit, logs, today) == {"current": 2, "best": 2}

        logs.append(make_log(habit, today))
        assert compute_streaks(habit, logs, today) == {"current": 3, "best": 3}

    def test_weekly_missed_week_resets(self) -> None:
        habit = make_habit(recurrence="weekly", target=1)
        logs = make_logs(habit, MONDAY, MONDAY.add(weeks=2))

        result = compute_streaks(habit, logs, MONDAY.add(weeks=2, days=3))
        assert result == {"current": 1, "best": 1}

    def test_monthly(self) -> None:
        habit = make_habit(
            recurrence="monthly", target=2, created=pendulum.date(2024, 4, 15)
        )
        logs = make_logs(
            habit,
            pendulum.date(2024, 4, 16),
            pendulum.date(2024, 4, 20),
            pendulum.date(2024, 5, 1),
            pendulum.date(2024, 5, 2),
        )

        result = compute_streaks(habit, logs, pendulum.date(2024, 6, 5))
        assert result == {"current": 2, "best": 2}


class TestOnceStreaks:
    def test_completed_task_has_streak_one_forever(self) -> None:
        habit = make_habit(recurrence="once", tier="nice_to_do")
        logs = make_logs(habit, MONDAY)

        assert compute_streaks(habit, logs, MONDAY) == {"current": 1, "best": 1}
        assert compute_streaks(habit, logs, MONDAY.add(years=2)) == {
            "current": 1,
            "best": 1,
        }

    def test_open_task_has_no_streak(self) -> None:
        habit = make_habit(recurrence="once", tier="nice_to_do")
        assert compute_streaks(habit, [], MONDAY) == {"current": 0, "best": 0}


class TestNegativeStreaks:
    def test_days_since_creation_without_slips(self) -> None:
        habit = make_habit(type="negative")

        assert compute_streaks(habit, [], MONDAY.add(days=5)) == {
            "current": 5,
            "best": 5,
        }

    def test_days_since_last_slip(self) -> None:
        habit = make_habit(type="negative")
        logs = make_logs(habit, MONDAY.add(days=2))

        assert compute_streaks(habit, logs, MONDAY.add(days=5)) == {
            "current": 3,
            "best": 3,
        }

    def test_best_is_longest_clean_gap(self) -> None:
        habit = make_habit(type="negative")
        logs = make_logs(habit, MONDAY.add(days=6), MONDAY.add(days=8))

        assert compute_streaks(habit, logs, MONDAY.add(days=9)) == {
            "current": 1,
            "best": 6,
        }

    def test_slip_today_resets_to_zero(self) -> None:
        habit = make_habit(type="negative")
        logs = make_logs(habit, MONDAY.add(days=4))

        assert compute_streaks(habit, logs, MONDAY.add(days=4))["current"] == 0


class TestCachedStreaks:
    def test_recompute_never_lowers_best(self) -> None:
        habit = make_habit(best_streak=10, current_streak=4)
        logs = make_logs(habit, MONDAY)

        updated = recompute_streaks(habit, logs, MONDAY)
        assert updated["current_streak"] == 1
        assert updated["best_streak"] == 10
        # The input is left alone
        assert habit["current_streak"] == 4

    def test_rebuild_derives_best_from_history_only(self) -> None:
        habit = make_habit(best_streak=10, current_streak=4)
        logs = make_logs(habit, *_days(MONDAY, 3))

        rebuilt = rebuild_from_history(habit, logs, MONDAY.add(days=2))
        assert rebuilt["current_streak"] == 3
        assert rebuilt["best_streak"] == 3

    @pytest.mark.parametrize("recurrence", ["daily", "weekly", "monthly", "once"])
    def test_best_never_below_current(self, recurrence: str) -> None:
        habit = make_habit(recurrence=recurrence, target=1)
        dates = _days(MONDAY, 40)
        logs = []
        for index, date in enumerate(dates):
            if index % 3 != 2:
                logs.append(make_log(habit, date))
            habit = recompute_streaks(habit, logs, date)
            assert habit["best_streak"] >= habit["current_streak"]


class TestGoodDayStreak:
    def test_counts_consecutive_good_days(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, *_days(MONDAY, 5))

        streak = current_good_day_streak([habit], [], logs, MONDAY.add(days=4))
        assert streak == {"days": 5, "capped": False}

    def test_today_pending_counts_from_yesterday(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, *_days(MONDAY, 4))

        streak = current_good_day_streak([habit], [], logs, MONDAY.add(days=4))
        assert streak == {"days": 4, "capped": False}

    def test_stops_at_first_bad_day(self) -> None:
        habit = make_habit()
        logs = make_logs(habit, MONDAY, MONDAY.add(days=2), MONDAY.add(days=3))

        streak = current_good_day_streak([habit], [], logs, MONDAY.add(days=3))
        assert streak["days"] == 2

    def test_days_before_first_habit_are_not_counted(self) -> None:
        # A nice-to-do habit makes every day vacuously good
        habit = make_habit(tier="nice_to_do")

        streak = current_good_day_streak([habit], [], [], MONDAY.add(days=9))
        assert streak == {"days": 10, "capped": False}

    def test_cap(self) -> None:
        habit = make_habit(tier="nice_to_do")
        today = MONDAY.add(days=20)

        streak = current_good_day_streak([habit], [], [], today, cap=7)
        assert streak == {"days": 7, "capped": True}
        assert format_good_day_streak(streak) == "7+"

    def test_no_habits(self) -> None:
        assert current_good_day_streak([], [], [], MONDAY) == {
            "days": 0,
            "capped": False,
        }

    def test_weekly_must_do_needs_a_completion_each_day(self) -> None:
        habit = make_habit(recurrence="weekly", target=1)
        wednesday = MONDAY.add(days=2)
        logs = make_logs(habit, *date_range(MONDAY, wednesday))

        streak = current_good_day_streak([habit], [], logs, wednesday)
        assert streak["days"] == 3

        # Satisfying the week does not make the days without a completion good
        friday = MONDAY.add(days=4)
        streak = current_good_day_streak([habit], [], logs, friday)
        assert streak["days"] == 0
