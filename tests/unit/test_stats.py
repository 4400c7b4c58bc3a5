from __future__ import annotations

from datetime import date, datetime, timedelta

from fitdesk.core import stats
from fitdesk.core.stats import (
    build_statistics,
    category_counts,
    exercises_by_day,
    exercises_this_month,
    exercises_this_week,
    exercises_today,
    streak,
    streak_message,
    total_duration,
    total_reps,
)

# Saturday
NOW = datetime(2026, 2, 14, 18, 0).astimezone()


def _at(*args: int) -> datetime:
    return datetime(*args).astimezone()


def test_streak_empty_history_is_zero() -> None:
    assert streak([]) == 0


def test_streak_single_record_now_is_one(make_record) -> None:
    assert streak([make_record(datetime.now().astimezone())]) == 1


def test_streak_counts_consecutive_days(make_record) -> None:
    history = [
        make_record(_at(2026, 2, 14, 9)),
        make_record(_at(2026, 2, 14, 8)),
        make_record(_at(2026, 2, 13, 12)),
        make_record(_at(2026, 2, 12, 7)),
        make_record(_at(2026, 2, 10, 7)),
    ]
    assert streak(history, today=date(2026, 2, 14)) == 3


def test_streak_keeps_counting_from_yesterday_when_today_is_empty(make_record) -> None:
    history = [
        make_record(_at(2026, 2, 13, 20)),
        make_record(_at(2026, 2, 12, 20)),
    ]
    assert streak(history, today=date(2026, 2, 14)) == 2


def test_streak_broken_two_days_ago(make_record) -> None:
    history = [make_record(_at(2026, 2, 12, 20))]
    assert streak(history, today=date(2026, 2, 14)) == 0


def test_streak_capped_by_lookback(monkeypatch, make_record) -> None:
    monkeypatch.setattr(stats, "STREAK_LOOKBACK_DAYS", 5)
    start = date(2026, 2, 14)
    history = [
        make_record(datetime.combine(start - timedelta(days=offset), datetime.min.time()).astimezone())
        for offset in range(10)
    ]
    assert streak(history, today=start) == 5


def test_period_filters_use_local_boundaries(make_record) -> None:
    history = [
        make_record(_at(2026, 2, 14, 7)),
        make_record(_at(2026, 2, 8, 0, 0)),
        make_record(_at(2026, 2, 7, 23, 59)),
        make_record(_at(2026, 2, 1, 0, 5)),
        make_record(_at(2026, 1, 31, 22)),
    ]

    assert len(exercises_today(history, NOW)) == 1
    assert len(exercises_this_week(history, NOW)) == 2
    assert len(exercises_this_month(history, NOW)) == 4


def test_week_starts_on_sunday_itself(make_record) -> None:
    sunday = _at(2026, 2, 8, 10)
    history = [make_record(_at(2026, 2, 8, 1)), make_record(_at(2026, 2, 7, 23))]
    assert len(exercises_this_week(history, sunday)) == 1


def test_filters_include_future_records(make_record) -> None:
    history = [make_record(_at(2026, 3, 20, 9))]
    assert len(exercises_today(history, NOW)) == 1


def test_windows_narrow_monotonically(make_record) -> None:
    history = [make_record(NOW - timedelta(days=offset, hours=1)) for offset in range(40)]
    today = exercises_today(history, NOW)
    week = exercises_this_week(history, NOW)
    month = exercises_this_month(history, NOW)
    assert len(today) <= len(week) <= len(month) <= len(history)


def test_totals_treat_missing_fields_as_zero(make_record) -> None:
    subset = [
        make_record(NOW, exercise_id="plank", category="core", duration=45),
        make_record(NOW, reps=15),
        make_record(NOW, exercise_id="wall-sit", category="lower", duration=30),
        make_record(NOW, exercise_id="squats", category="lower", reps=20),
    ]
    assert total_duration(subset) == 75
    assert total_reps(subset) == 35
    assert total_duration([]) == 0


def test_category_counts(make_record) -> None:
    subset = [
        make_record(NOW, category="core", duration=30),
        make_record(NOW, category="core", reps=10),
        make_record(NOW, category="cardio", duration=45),
    ]
    assert category_counts(subset) == {"core": 2, "cardio": 1}


def test_exercises_by_day_groups_by_local_date(make_record) -> None:
    history = [make_record(_at(2026, 2, 14, 9)), make_record(_at(2026, 2, 14, 8)), make_record(_at(2026, 2, 13, 9))]
    grouped = exercises_by_day(history)
    assert sorted(grouped) == [date(2026, 2, 13), date(2026, 2, 14)]
    assert len(grouped[date(2026, 2, 14)]) == 2


def test_streak_message_thresholds() -> None:
    assert "Start" in streak_message(0)
    assert "Good start" in streak_message(1)
    assert streak_message(3).startswith("3 days in a row")
    assert "unstoppable" in streak_message(10)
    assert "legend" in streak_message(45)


def test_build_statistics_payload(make_record) -> None:
    history = [
        make_record(_at(2026, 2, 14, 9), exercise_id="plank", category="core", duration=45),
        make_record(_at(2026, 2, 13, 9), reps=15),
        make_record(_at(2026, 1, 2, 9), reps=15),
    ]
    report = build_statistics(history, now=NOW)

    assert report["counts"] == {"today": 1, "this_week": 2, "this_month": 2, "total": 3}
    assert report["streak"]["days"] == 2
    assert report["this_week"]["total_duration"] == 45
    assert report["this_week"]["total_reps"] == 15
    assert report["this_week"]["by_category"] == {"upper": 1, "core": 1}
    assert report["recent"][0]["exerciseId"] == "plank"
