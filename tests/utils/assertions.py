"""Custom assertion helpers."""

from datetime import date, timedelta


def assert_valid_calendar_grid(days: list[date], month_date: date) -> None:
    """Full weeks, Sunday to Saturday, consecutive, covering the whole month."""
    assert len(days) % 7 == 0
    assert len(days) in (28, 35, 42)
    assert days[0].weekday() == 6  # Sunday
    assert days[-1].weekday() == 5  # Saturday
    for previous, current in zip(days, days[1:]):
        assert current - previous == timedelta(days=1)

    first = month_date.replace(day=1)
    assert first in days
    month_days = [d for d in days if d.month == month_date.month and d.year == month_date.year]
    assert month_days[0] == first
    assert (month_days[-1] + timedelta(days=1)).month != month_date.month


def assert_buckets_preserve_activities(buckets: dict, activities: list) -> None:
    """Every activity appears exactly once, under its own date."""
    assert sum(len(bucket) for bucket in buckets.values()) == len(activities)
    for activity in activities:
        key = activity.activity_date.isoformat()
        assert sum(1 for a in buckets[key] if a is activity) == 1