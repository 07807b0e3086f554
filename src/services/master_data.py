"""Skills and activity statuses managed from the settings screen."""

import asyncio

from src.models.activity_status import ActivityStatus
from src.models.forms import ActivityStatusForm, SkillForm
from src.models.results import LoadResult
from src.models.skill import Skill
from src.models.time_slot import TimeSlot
from src.services.supabase_client import SupabaseClient, delete_row, fetch_rows, insert_row, update_row
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


async def list_skills() -> LoadResult:
    """All skills, active or not, by category then name."""
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("skills").select("*").order("category").order("name"),
                "fetch skills"
            )
    except SupabaseError as e:
        logger.error("Skill list failed", exc_info=True, error=str(e))
        return LoadResult.failure(e)
    return LoadResult(items=[Skill.model_validate(row) for row in rows])


async def list_activity_statuses() -> LoadResult:
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("activity_statuses").select("*").order("name"),
                "fetch activity statuses"
            )
    except SupabaseError as e:
        logger.error("Activity status list failed", exc_info=True, error=str(e))
        return LoadResult.failure(e)
    return LoadResult(items=[ActivityStatus.model_validate(row) for row in rows])


async def list_time_slots() -> LoadResult:
    """Availability windows by weekday then period (read-only; seeded with the schema)."""
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("time_slots").select("*").order("day_of_week").order("period"),
                "fetch time slots"
            )
    except SupabaseError as e:
        logger.error("Time slot list failed", exc_info=True, error=str(e))
        return LoadResult.failure(e)
    return LoadResult(items=[TimeSlot.model_validate(row) for row in rows])


async def get_settings() -> dict:
    skills, statuses, time_slots = await asyncio.gather(
        list_skills(), list_activity_statuses(), list_time_slots()
    )
    return {"skills": skills, "activity_statuses": statuses, "time_slots": time_slots}


async def create_skill(form: SkillForm) -> dict:
    skill = await insert_row("skills", form.to_row())
    logger.info("Skill created", skill_id=skill.get("id"), skill_name=form.name)
    return skill


async def update_skill(skill_id: str, form: SkillForm) -> dict:
    skill = await update_row("skills", skill_id, form.to_row())
    logger.info("Skill updated", skill_id=skill_id, is_active=form.is_active)
    return skill


async def delete_skill(skill_id: str) -> None:
    await delete_row("skills", skill_id)
    logger.info("Skill deleted", skill_id=skill_id)


async def create_activity_status(form: ActivityStatusForm) -> dict:
    status = await insert_row("activity_statuses", form.to_row())
    logger.info("Activity status created", status_id=status.get("id"), status_name=form.name)
    return status


async def update_activity_status(status_id: str, form: ActivityStatusForm) -> dict:
    status = await update_row("activity_statuses", status_id, form.to_row())
    logger.info("Activity status updated", status_id=status_id)
    return status


async def delete_activity_status(status_id: str) -> None:
    await delete_row("activity_statuses", status_id)
    logger.info("Activity status deleted", status_id=status_id)
