"""Dashboard - headline counts plus today's and this week's activities."""

import asyncio
from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel

from src.models.filters import ActivityFilters
from src.models.results import LoadResult
from src.models.supporter import SupporterStatus
from src.services.activities import fetch_activities
from src.services.supabase_client import SupabaseClient, count_rows
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger, timed

logger = get_structured_logger(__name__)


class DashboardStats(BaseModel):
    total_supporters: int = 0
    active_supporters: int = 0
    total_service_users: int = 0
    total_activities: int = 0


async def _count(table: str, status: Optional[str] = None) -> int:
    """Exact row count; 0 when the store cannot answer, so one failure does not blank the page."""
    try:
        async with SupabaseClient() as client:
            query = client.table(table).select("*", count="exact", head=True)
            if status:
                query = query.eq("status", status)
            return await count_rows(query, f"count {table}")
    except SupabaseError as e:
        logger.warning("Dashboard count failed", table=table, error=str(e))
        return 0


async def get_dashboard_stats() -> DashboardStats:
    total_supporters, active_supporters, total_service_users, total_activities = await asyncio.gather(
        _count("supporters"),
        _count("supporters", status=SupporterStatus.REGISTERED.value),
        _count("service_users"),
        _count("activities"),
    )
    return DashboardStats(
        total_supporters=total_supporters,
        active_supporters=active_supporters,
        total_service_users=total_service_users,
        total_activities=total_activities,
    )


def week_range(today: date) -> tuple[date, date]:
    """Monday through Sunday of the week containing today."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


async def _activities_between(start: date, end: date, label: str) -> LoadResult:
    try:
        activities = await fetch_activities(ActivityFilters(date_from=start, date_to=end))
    except SupabaseError as e:
        logger.error(f"Dashboard {label} activities failed", exc_info=True, error=str(e))
        return LoadResult.failure(e)
    # Dashboard lists read soonest first
    return LoadResult(items=sorted(activities, key=lambda activity: activity.activity_date))


async def get_today_activities(today: Optional[date] = None) -> LoadResult:
    today = today or date.today()
    return await _activities_between(today, today, "today")


async def get_week_activities(today: Optional[date] = None) -> LoadResult:
    start, end = week_range(today or date.today())
    return await _activities_between(start, end, "week")


@timed("build dashboard", logger=logger)
async def get_dashboard(today: Optional[date] = None) -> dict:
    today = today or date.today()
    stats, today_activities, week_activities = await asyncio.gather(
        get_dashboard_stats(),
        get_today_activities(today),
        get_week_activities(today),
    )
    return {
        "stats": stats,
        "today_activities": today_activities,
        "week_activities": week_activities,
    }
