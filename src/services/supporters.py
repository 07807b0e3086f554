"""Supporter records - roster listing, detail and form saves."""

import asyncio
from typing import Optional

from src.models.filters import SupporterFilters
from src.models.forms import SupporterForm
from src.models.results import LoadResult
from src.models.supporter import SupporterWithRelations
from src.services.supabase_client import (
    SupabaseClient,
    execute,
    fetch_rows,
    fetch_single,
    insert_row,
    insert_rows,
    update_row,
)
from src.utils.app_config import AppConfig
from src.utils.array_utils import filter_nullable_strings, get_unique_values
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger, mask_name, sanitize_text

logger = get_structured_logger(__name__)

SUPPORTER_DETAIL_COLUMNS = """
    *,
    supporter_skills(
        skills(id, name, category)
    ),
    supporter_schedules(
        time_slots(id, display_name, day_of_week, period)
    )
"""

SUPPORTER_ACTIVITY_COLUMNS = """
    id,
    activity_date,
    notes,
    service_users(name),
    skills(name),
    time_slots(display_name),
    activity_statuses(name)
"""

# (link table, column holding the linked id)
SKILL_LINKS = ("supporter_skills", "skill_id")
SCHEDULE_LINKS = ("supporter_schedules", "time_slot_id")


def _list_columns(time_slot_filter: bool) -> str:
    # An inner join on schedules is only wanted when filtering by time slot;
    # otherwise supporters without availability would disappear from the list.
    schedules = "supporter_schedules!inner(time_slot_id)" if time_slot_filter else "supporter_schedules(time_slot_id)"
    return f"""
        id,
        name,
        phone,
        email,
        area,
        status,
        created_at,
        supporter_skills(skills(id, name)),
        {schedules}
    """


def filter_supporters_by_skill_name(
    supporters: list[SupporterWithRelations],
    skill_name: Optional[str],
) -> list[SupporterWithRelations]:
    if not skill_name:
        return supporters
    return [supporter for supporter in supporters if skill_name in supporter.skill_names]


async def fetch_supporters(filters: SupporterFilters) -> list[SupporterWithRelations]:
    async with SupabaseClient() as client:
        query = client.table("supporters").select(_list_columns(bool(filters.time_slot)))

        if filters.search:
            query = query.ilike("name", f"%{filters.search}%")
        if filters.status:
            query = query.eq("status", filters.status)
        if filters.area:
            query = query.eq("area", filters.area)
        if filters.time_slot:
            query = query.eq("supporter_schedules.time_slot_id", filters.time_slot)

        rows = await fetch_rows(query.order("created_at", desc=True), "fetch supporters")

    supporters = [SupporterWithRelations.model_validate(row) for row in rows]
    supporters = filter_supporters_by_skill_name(supporters, filters.skill)
    return get_unique_values(supporters, selector=lambda s: s.id)


async def list_supporters(filters: SupporterFilters) -> LoadResult:
    try:
        supporters = await fetch_supporters(filters)
    except SupabaseError as e:
        logger.error("Supporter list failed", exc_info=True, error=str(e), search=sanitize_text(filters.search))
        return LoadResult.failure(e)
    return LoadResult(items=supporters)


async def get_supporter(supporter_id: str) -> Optional[SupporterWithRelations]:
    """
    Supporter with skills and availability.

    Raises NotFoundError for an unknown id; returns None when the store fails.
    """
    try:
        async with SupabaseClient() as client:
            row = await fetch_single(
                client.table("supporters").select(SUPPORTER_DETAIL_COLUMNS).eq("id", supporter_id),
                "supporters",
                supporter_id,
                "fetch supporter"
            )
    except SupabaseError as e:
        logger.error("Supporter detail failed", exc_info=True, supporter_id=supporter_id, error=str(e))
        return None
    return SupporterWithRelations.model_validate(row)


async def get_supporter_activities(supporter_id: str, limit: Optional[int] = None) -> LoadResult:
    """Most recent activities of a supporter, newest first."""
    limit = limit or AppConfig.recent_activity_limit()
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("activities").select(SUPPORTER_ACTIVITY_COLUMNS)
                .eq("supporter_id", supporter_id)
                .order("activity_date", desc=True)
                .limit(limit),
                "fetch supporter activities"
            )
    except SupabaseError as e:
        logger.error("Supporter activity history failed", exc_info=True, supporter_id=supporter_id, error=str(e))
        return LoadResult.failure(e)
    return LoadResult(items=rows)


def diff_links(current: set[str], desired: list[str]) -> tuple[list[str], list[str]]:
    """Ids to insert and ids to delete to turn current into desired."""
    to_insert = [link_id for link_id in desired if link_id not in current]
    to_delete = sorted(current - set(desired))
    return to_insert, to_delete


async def sync_supporter_links(supporter_id: str, links: tuple[str, str], desired: list[str]) -> None:
    """
    Make a supporter's link table rows equal to desired.

    Reads the current ids and writes only the difference.
    """
    table, column = links
    async with SupabaseClient() as client:
        rows = await fetch_rows(
            client.table(table).select(column).eq("supporter_id", supporter_id),
            f"fetch {table}"
        )
        to_insert, to_delete = diff_links({row[column] for row in rows}, desired)

        if to_delete:
            await execute(
                client.table(table).delete().eq("supporter_id", supporter_id).in_(column, to_delete),
                f"delete {table}"
            )

    await insert_rows(table, [{"supporter_id": supporter_id, column: link_id} for link_id in to_insert])

    if to_insert or to_delete:
        logger.info(
            "Supporter links synced",
            supporter_id=supporter_id,
            table=table,
            inserted=len(to_insert),
            deleted=len(to_delete)
        )


async def create_supporter(form: SupporterForm) -> dict:
    supporter = await insert_row("supporters", form.to_row())
    supporter_id = supporter["id"]
    await insert_rows("supporter_skills", [
        {"supporter_id": supporter_id, "skill_id": skill_id} for skill_id in form.skills
    ])
    await insert_rows("supporter_schedules", [
        {"supporter_id": supporter_id, "time_slot_id": slot_id} for slot_id in form.schedules
    ])
    logger.info("Supporter created", supporter_id=supporter_id, masked_name=mask_name(form.name))
    return supporter


async def update_supporter(supporter_id: str, form: SupporterForm) -> dict:
    supporter = await update_row("supporters", supporter_id, form.to_row())
    await sync_supporter_links(supporter_id, SKILL_LINKS, form.skills)
    await sync_supporter_links(supporter_id, SCHEDULE_LINKS, form.schedules)
    logger.info("Supporter updated", supporter_id=supporter_id)
    return supporter


async def get_supporter_filter_options() -> dict:
    """Distinct areas, active skill names and time slots for the roster filters."""
    async def _areas() -> list[dict]:
        async with SupabaseClient() as client:
            return await fetch_rows(
                client.table("supporters").select("area").not_.is_("area", "null"),
                "fetch supporter areas"
            )

    async def _skills() -> list[dict]:
        async with SupabaseClient() as client:
            return await fetch_rows(
                client.table("skills").select("name").eq("is_active", True),
                "fetch skill names"
            )

    async def _time_slots() -> list[dict]:
        async with SupabaseClient() as client:
            return await fetch_rows(
                client.table("time_slots").select("id, display_name").order("day_of_week").order("period"),
                "fetch time slots"
            )

    try:
        areas, skills, time_slots = await asyncio.gather(_areas(), _skills(), _time_slots())
    except SupabaseError as e:
        logger.error("Supporter filter options failed", exc_info=True, error=str(e))
        return {"areas": [], "skills": [], "time_slots": [], "error": str(e)}

    return {
        "areas": get_unique_values(row.get("area") for row in areas),
        "skills": filter_nullable_strings(row.get("name") for row in skills),
        "time_slots": time_slots,
        "error": None,
    }
