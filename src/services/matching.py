"""Matching search - find supporters whose skills and availability cover a request."""

import asyncio
from typing import Iterable, Optional

from src.models.activity_status import COMPLETED_STATUS_NAME
from src.models.filters import MatchingFilters
from src.models.results import LoadResult
from src.models.supporter import (
    MATCHING_ELIGIBLE_STATUSES,
    MatchedSupporter,
    SupporterWithRelations,
)
from src.services.supabase_client import SupabaseClient, count_rows, fetch_rows
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

CANDIDATE_COLUMNS = """
    id,
    name,
    phone,
    email,
    area,
    status,
    supporter_skills(
        skills(id, name)
    ),
    supporter_schedules(
        time_slots(id, display_name)
    )
"""


def supporter_skill_ids(supporter: SupporterWithRelations) -> set[str]:
    return supporter.skill_ids


def supporter_time_slot_ids(supporter: SupporterWithRelations) -> set[str]:
    return supporter.time_slot_ids


def match_supporters(
    candidates: Iterable[SupporterWithRelations],
    required_skill_ids: Iterable[str],
    required_time_slot_ids: Iterable[str],
) -> list[SupporterWithRelations]:
    """
    Keep candidates that have every required skill and every required time slot.

    With no requirements at all the result is empty, never the whole roster.
    Candidate order is preserved.
    """
    skills = set(required_skill_ids)
    slots = set(required_time_slot_ids)
    if not skills and not slots:
        return []

    return [
        supporter for supporter in candidates
        if skills <= supporter_skill_ids(supporter)
        and slots <= supporter_time_slot_ids(supporter)
    ]


async def get_completed_status_id() -> Optional[str]:
    """Id of the "completed" activity status, or None when it cannot be resolved."""
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("activity_statuses").select("id").eq("name", COMPLETED_STATUS_NAME).limit(1),
                "lookup completed status"
            )
    except SupabaseError as e:
        logger.warning("Completed status lookup failed", error=str(e))
        return None
    if not rows:
        logger.warning("Completed status not configured", status_name=COMPLETED_STATUS_NAME)
        return None
    return rows[0]["id"]


async def count_completed_activities(supporter_id: str, completed_status_id: Optional[str]) -> int:
    """Lifetime completed activities for one supporter; 0 when the count cannot be taken."""
    if not completed_status_id:
        return 0
    try:
        async with SupabaseClient() as client:
            return await count_rows(
                client.table("activities")
                .select("*", count="exact", head=True)
                .eq("supporter_id", supporter_id)
                .eq("status_id", completed_status_id),
                "count completed activities"
            )
    except SupabaseError as e:
        logger.warning("Completed activity count failed", supporter_id=supporter_id, error=str(e))
        return 0


async def fetch_matching_candidates() -> list[SupporterWithRelations]:
    """Registered and interviewed supporters with their skills and schedules expanded."""
    async with SupabaseClient() as client:
        rows = await fetch_rows(
            client.table("supporters")
            .select(CANDIDATE_COLUMNS)
            .in_("status", [status.value for status in MATCHING_ELIGIBLE_STATUSES])
            .order("name"),
            "fetch matching candidates"
        )
    return [SupporterWithRelations.model_validate(row) for row in rows]


async def find_matching_supporters(filters: MatchingFilters) -> LoadResult:
    """
    Run the matching search for the given requirements.

    Returns a LoadResult of MatchedSupporter. An empty request short-circuits
    without touching the store. Store failures are logged and reported via
    LoadResult.error with no items.
    """
    if not filters.has_filters:
        return LoadResult(items=[])

    try:
        candidates = await fetch_matching_candidates()
    except SupabaseError as e:
        logger.error("Matching search failed", exc_info=True, error=str(e))
        return LoadResult.failure(e)

    matched = match_supporters(candidates, filters.skills, filters.time_slots)

    completed_status_id = await get_completed_status_id() if matched else None
    counts = await asyncio.gather(*(
        count_completed_activities(supporter.id, completed_status_id) for supporter in matched
    ))

    results = [
        MatchedSupporter(**supporter.model_dump(), completed_activities=count)
        for supporter, count in zip(matched, counts)
    ]

    logger.info(
        "Matching search completed",
        required_skills=len(filters.skills),
        required_time_slots=len(filters.time_slots),
        candidates=len(candidates),
        matched=len(results)
    )
    return LoadResult(items=results)


async def get_matching_filter_options() -> dict:
    """Active skills (by category, name) and time slots (by weekday) for the search form."""
    async def _skills() -> list[dict]:
        async with SupabaseClient() as client:
            return await fetch_rows(
                client.table("skills").select("id, name, category")
                .eq("is_active", True).order("category").order("name"),
                "fetch matching skills"
            )

    async def _time_slots() -> list[dict]:
        async with SupabaseClient() as client:
            return await fetch_rows(
                client.table("time_slots").select("id, display_name, day_of_week").order("day_of_week"),
                "fetch matching time slots"
            )

    try:
        skills, time_slots = await asyncio.gather(_skills(), _time_slots())
    except SupabaseError as e:
        logger.error("Matching filter options failed", exc_info=True, error=str(e))
        return {"skills": [], "time_slots": [], "error": str(e)}
    return {"skills": skills, "time_slots": time_slots, "error": None}
