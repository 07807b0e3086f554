"""Activity records - listing, calendar, detail and write operations."""

import asyncio
from datetime import date
from typing import Iterable, Optional

from src.models.activity import ActivityWithRelations
from src.models.activity_status import COMPLETED_STATUS_NAME
from src.models.filters import ActivityFilters
from src.models.forms import ActivityForm, CompleteActivityForm
from src.models.results import LoadResult
from src.services.calendar_view import MonthView, build_month_view, resolve_month
from src.services.supabase_client import (
    SupabaseClient,
    delete_row,
    fetch_rows,
    fetch_single,
    insert_row,
    update_row,
)
from src.utils.calendar_utils import month_bounds
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger, sanitize_text

logger = get_structured_logger(__name__)

ACTIVITY_LIST_COLUMNS = """
    id,
    activity_date,
    arbitrary_time_notes,
    notes,
    supporter_id,
    service_user_id,
    skill_id,
    time_slot_id,
    status_id,
    created_at,
    updated_at,
    supporters!inner(id, name),
    service_users!inner(id, name),
    skills!inner(name),
    time_slots!inner(display_name),
    activity_statuses!inner(name)
"""

ACTIVITY_DETAIL_COLUMNS = """
    *,
    supporters(id, name, phone, email),
    service_users(id, name, phone, email),
    skills(name),
    time_slots(display_name),
    activity_statuses(name)
"""

COMPLETION_REPORT_HEADER = "【活動報告】"


def filter_activities_by_text(
    activities: Iterable[ActivityWithRelations],
    search: Optional[str],
) -> list[ActivityWithRelations]:
    """
    Case-insensitive substring match on supporter, service user and skill names.

    An empty search keeps every activity.
    """
    activities = list(activities)
    if not search:
        return activities

    needle = search.lower()
    return [
        activity for activity in activities
        if needle in activity.supporters.name.lower()
        or needle in activity.service_users.name.lower()
        or needle in activity.skills.name.lower()
    ]


async def fetch_activities(filters: ActivityFilters) -> list[ActivityWithRelations]:
    """Run the filtered activity query (newest first) and apply the name search."""
    async with SupabaseClient() as client:
        query = client.table("activities").select(ACTIVITY_LIST_COLUMNS)

        if filters.supporter:
            query = query.eq("supporter_id", filters.supporter)
        if filters.service_user:
            query = query.eq("service_user_id", filters.service_user)
        if filters.status:
            query = query.eq("status_id", filters.status)
        if filters.date_from:
            query = query.gte("activity_date", filters.date_from.isoformat())
        if filters.date_to:
            query = query.lte("activity_date", filters.date_to.isoformat())

        rows = await fetch_rows(query.order("activity_date", desc=True), "fetch activities")

    activities = [ActivityWithRelations.model_validate(row) for row in rows]
    return filter_activities_by_text(activities, filters.search)


async def list_activities(filters: ActivityFilters) -> LoadResult:
    try:
        activities = await fetch_activities(filters)
    except SupabaseError as e:
        logger.error(
            "Activity list failed",
            exc_info=True,
            error=str(e),
            search=sanitize_text(filters.search)
        )
        return LoadResult.failure(e)
    return LoadResult(items=activities)


async def get_calendar_month(month_param: Optional[str], today: Optional[date] = None) -> tuple[MonthView, Optional[str]]:
    """
    Month view for ?month=YYYY-MM-DD (defaults to the current month).

    Returns the view plus an error string when activities could not be loaded;
    the grid is still built in that case.
    """
    month_date = resolve_month(month_param, today)
    first, last = month_bounds(month_date)
    result = await list_activities(ActivityFilters(date_from=first, date_to=last))
    return build_month_view(month_date, result.items, today=today), result.error


async def get_activity(activity_id: str) -> Optional[ActivityWithRelations]:
    """
    Activity with related contact details.

    Raises NotFoundError for an unknown id; returns None when the store fails.
    """
    try:
        async with SupabaseClient() as client:
            row = await fetch_single(
                client.table("activities").select(ACTIVITY_DETAIL_COLUMNS).eq("id", activity_id),
                "activities",
                activity_id,
                "fetch activity"
            )
    except SupabaseError as e:
        logger.error("Activity detail failed", exc_info=True, activity_id=activity_id, error=str(e))
        return None
    return ActivityWithRelations.model_validate(row)


async def create_activity(form: ActivityForm) -> dict:
    activity = await insert_row("activities", form.to_row())
    logger.info("Activity created", activity_id=activity.get("id"), activity_date=form.activity_date.isoformat())
    return activity


async def update_activity(activity_id: str, form: ActivityForm) -> dict:
    activity = await update_row("activities", activity_id, form.to_row())
    logger.info("Activity updated", activity_id=activity_id)
    return activity


async def delete_activity(activity_id: str) -> None:
    await delete_row("activities", activity_id)
    logger.info("Activity deleted", activity_id=activity_id)


def build_completion_notes(existing_notes: Optional[str], report: str) -> str:
    """Append an activity report block to the existing notes."""
    block = f"{COMPLETION_REPORT_HEADER}\n{report}"
    return f"{existing_notes}\n\n{block}" if existing_notes else block


async def complete_activity(activity_id: str, form: CompleteActivityForm) -> dict:
    """
    Mark an activity completed and append the report to its notes.

    Raises SupabaseError when the completed status is not configured.
    """
    async with SupabaseClient() as client:
        status_rows, activity = await asyncio.gather(
            fetch_rows(
                client.table("activity_statuses").select("id").eq("name", COMPLETED_STATUS_NAME).limit(1),
                "lookup completed status"
            ),
            fetch_single(
                client.table("activities").select("id, notes").eq("id", activity_id),
                "activities",
                activity_id,
                "fetch activity notes"
            ),
        )

    if not status_rows:
        raise SupabaseError(f"Activity status not configured: {COMPLETED_STATUS_NAME}")

    updated = await update_row("activities", activity_id, {
        "status_id": status_rows[0]["id"],
        "notes": build_completion_notes(activity.get("notes"), form.completion_notes),
    })
    logger.info("Activity completed", activity_id=activity_id)
    return updated


async def get_activity_filter_options() -> dict:
    """Supporters, service users and statuses for the list filters, each by name."""
    async def _options(table: str) -> list[dict]:
        async with SupabaseClient() as client:
            return await fetch_rows(
                client.table(table).select("id, name").order("name"),
                f"fetch {table} options"
            )

    try:
        supporters, service_users, statuses = await asyncio.gather(
            _options("supporters"), _options("service_users"), _options("activity_statuses")
        )
    except SupabaseError as e:
        logger.error("Activity filter options failed", exc_info=True, error=str(e))
        return {"supporters": [], "service_users": [], "statuses": [], "error": str(e)}
    return {"supporters": supporters, "service_users": service_users, "statuses": statuses, "error": None}


async def get_activity_form_options() -> dict:
    """Everything the create/edit form offers in its selects."""
    async def _rows(table: str, columns: str, order: str, active_only: bool = False) -> list[dict]:
        async with SupabaseClient() as client:
            query = client.table(table).select(columns)
            if active_only:
                query = query.eq("is_active", True)
            return await fetch_rows(query.order(order), f"fetch {table} options")

    try:
        supporters, service_users, skills, time_slots, statuses = await asyncio.gather(
            _rows("supporters", "id, name, status", "name"),
            _rows("service_users", "id, name", "name"),
            _rows("skills", "id, name", "name", active_only=True),
            _rows("time_slots", "id, display_name", "day_of_week"),
            _rows("activity_statuses", "id, name", "name"),
        )
    except SupabaseError as e:
        logger.error("Activity form options failed", exc_info=True, error=str(e))
        return {
            "supporters": [], "service_users": [], "skills": [],
            "time_slots": [], "statuses": [], "error": str(e),
        }

    for supporter in supporters:
        supporter["status"] = supporter.get("status") or "N/A"

    return {
        "supporters": supporters,
        "service_users": service_users,
        "skills": skills,
        "time_slots": time_slots,
        "statuses": statuses,
        "error": None,
    }
