"""Date formatting helpers for display (Japanese locale)."""

from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from src.utils.app_config import AppConfig
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

NOT_AVAILABLE = "N/A"

# Monday-first, matching date.weekday()
WEEKDAY_NAMES = ["月", "火", "水", "木", "金", "土", "日"]

DateLike = Union[str, date, datetime, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Parse an ISO date/datetime string (or pass through a date). Returns None when unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _to_display_tz(value).date()
    if isinstance(value, date):
        return value
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, TypeError, OverflowError):
        return None
    return _to_display_tz(parsed).date()


def _to_display_tz(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(AppConfig.display_timezone()))


def _ja_date(d: date) -> str:
    return f"{d.year}年{d.month}月{d.day}日"


def format_date(value: DateLike) -> str:
    """Format as 2024年5月1日."""
    d = parse_date(value)
    if d is None:
        if value:
            logger.warning("Date format error", value=str(value))
        return NOT_AVAILABLE
    return _ja_date(d)


def format_datetime(value: DateLike) -> str:
    """Format as 2024年5月1日 14:30 in the display timezone."""
    if not value:
        return NOT_AVAILABLE
    try:
        dt = value if isinstance(value, datetime) else date_parser.isoparse(str(value))
    except (ValueError, TypeError, OverflowError):
        logger.warning("Datetime format error", value=str(value))
        return NOT_AVAILABLE
    dt = _to_display_tz(dt)
    return f"{_ja_date(dt)} {dt:%H:%M}"


def format_date_with_weekday(value: DateLike) -> str:
    """Format as 2024年5月1日(水)."""
    d = parse_date(value)
    if d is None:
        if value:
            logger.warning("Date format error", value=str(value))
        return NOT_AVAILABLE
    return f"{_ja_date(d)}({WEEKDAY_NAMES[d.weekday()]})"
