"""Month-grid calendar helpers (weeks start on Sunday)."""

from datetime import date, timedelta
from functools import lru_cache
from typing import Optional

import holidays
from dateutil.relativedelta import relativedelta

from src.utils.app_config import AppConfig
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

# Sunday-first header labels
DAY_NAMES = ["日", "月", "火", "水", "木", "金", "土"]

SATURDAY = 5
SUNDAY = 6


def month_bounds(d: date) -> tuple[date, date]:
    """First and last day of the month containing d."""
    first = d.replace(day=1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def start_of_week(d: date) -> date:
    """Sunday on or before d."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def end_of_week(d: date) -> date:
    """Saturday on or after d."""
    return d + timedelta(days=(SATURDAY - d.weekday()) % 7)


def get_calendar_days(d: date) -> list[date]:
    """
    Dates for a full-week month grid around the month containing d.

    Runs from the Sunday on/before the 1st through the Saturday on/after the
    last day, so the length is always 28, 35 or 42.
    """
    first, last = month_bounds(d)
    start = start_of_week(first)
    end = end_of_week(last)
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def get_previous_month(d: date) -> date:
    """Same day one month earlier, clamped to the month's length (Mar 31 -> Feb 29)."""
    return d - relativedelta(months=1)


def get_next_month(d: date) -> date:
    """Same day one month later, clamped to the month's length (Jan 31 -> Feb 28)."""
    return d + relativedelta(months=1)


def format_month_year(d: date) -> str:
    return f"{d.year}年{d.month}月"


def is_same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def is_weekend(d: date) -> bool:
    return d.weekday() in (SATURDAY, SUNDAY)


@lru_cache(maxsize=8)
def _holiday_calendar(country: str) -> holidays.HolidayBase:
    return holidays.country_holidays(country)


def get_holiday_name(d: date) -> Optional[str]:
    """Name of the public holiday on d, or None. Never raises."""
    country = AppConfig.holiday_country()
    try:
        return _holiday_calendar(country).get(d)
    except Exception as e:
        logger.warning("Holiday lookup failed", country=country, date=d.isoformat(), error=str(e))
        return None


def is_holiday(d: date) -> bool:
    """Public holiday check for the configured country; unknown is treated as not a holiday."""
    return get_holiday_name(d) is not None
