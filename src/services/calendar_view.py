"""Month calendar view - bucket activities by date and lay them out on a month grid."""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from src.models.activity import ActivityWithRelations
from src.utils.calendar_utils import (
    DAY_NAMES,
    format_month_year,
    get_calendar_days,
    get_holiday_name,
    get_next_month,
    get_previous_month,
    is_same_month,
    is_weekend,
)
from src.utils.date_utils import parse_date
from src.utils.url_utils import update_url_with_params

# Activities listed inside one day cell; the rest are summarised as a count
MAX_ACTIVITIES_PER_DAY = 3


class CalendarDay(BaseModel):
    day: date
    is_current_month: bool
    is_today: bool
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    activities: list[ActivityWithRelations] = Field(default_factory=list)
    overflow_count: int = 0
    list_url: str


class MonthView(BaseModel):
    month: date
    label: str
    previous_month: date
    next_month: date
    day_names: list[str]
    days: list[CalendarDay]


def group_activities_by_date(activities: Iterable[ActivityWithRelations]) -> dict[str, list[ActivityWithRelations]]:
    """
    Map "YYYY-MM-DD" to the activities on that date, in input order.

    Dates with no activities have no key.
    """
    buckets: dict[str, list[ActivityWithRelations]] = defaultdict(list)
    for activity in activities:
        buckets[activity.activity_date.isoformat()].append(activity)
    return dict(buckets)


def day_list_url(day: date) -> str:
    """Link to the list view restricted to a single day."""
    iso = day.isoformat()
    return update_url_with_params("/activities", {"view": "list", "date_from": iso, "date_to": iso})


def resolve_month(month_param: Optional[str], today: Optional[date] = None) -> date:
    """Month to show: the ?month= date when parseable, otherwise today."""
    return parse_date(month_param) or today or date.today()


def build_month_view(
    month_date: date,
    activities: Iterable[ActivityWithRelations],
    today: Optional[date] = None,
) -> MonthView:
    today = today or date.today()
    buckets = group_activities_by_date(activities)

    days = []
    for day in get_calendar_days(month_date):
        day_activities = buckets.get(day.isoformat(), [])
        holiday_name = get_holiday_name(day)
        days.append(CalendarDay(
            day=day,
            is_current_month=is_same_month(day, month_date),
            is_today=day == today,
            is_weekend=is_weekend(day),
            is_holiday=holiday_name is not None,
            holiday_name=holiday_name,
            activities=day_activities[:MAX_ACTIVITIES_PER_DAY],
            overflow_count=max(0, len(day_activities) - MAX_ACTIVITIES_PER_DAY),
            list_url=day_list_url(day),
        ))

    return MonthView(
        month=month_date,
        label=format_month_year(month_date),
        previous_month=get_previous_month(month_date),
        next_month=get_next_month(month_date),
        day_names=list(DAY_NAMES),
        days=days,
    )
