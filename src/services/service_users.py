"""Service user records."""

from typing import Optional

from src.models.filters import ServiceUserFilters
from src.models.forms import ServiceUserForm
from src.models.results import LoadResult
from src.models.service_user import ServiceUser
from src.services.supabase_client import (
    SupabaseClient,
    fetch_rows,
    fetch_single,
    insert_row,
    update_row,
)
from src.utils.app_config import AppConfig
from src.utils.array_utils import get_unique_values
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger, mask_name, sanitize_text

logger = get_structured_logger(__name__)

SERVICE_USER_ACTIVITY_COLUMNS = """
    id,
    activity_date,
    notes,
    supporters(name),
    skills(name),
    time_slots(display_name),
    activity_statuses(name)
"""


async def list_service_users(filters: ServiceUserFilters) -> LoadResult:
    """Service users matching the name search and area, newest first."""
    try:
        async with SupabaseClient() as client:
            query = client.table("service_users").select("*")
            if filters.search:
                query = query.ilike("name", f"%{filters.search}%")
            if filters.area:
                query = query.eq("area", filters.area)
            rows = await fetch_rows(query.order("created_at", desc=True), "fetch service users")
    except SupabaseError as e:
        logger.error("Service user list failed", exc_info=True, error=str(e), search=sanitize_text(filters.search))
        return LoadResult.failure(e)
    return LoadResult(items=[ServiceUser.model_validate(row) for row in rows])


async def get_service_user(service_user_id: str) -> Optional[ServiceUser]:
    """Raises NotFoundError for an unknown id; returns None when the store fails."""
    try:
        async with SupabaseClient() as client:
            row = await fetch_single(
                client.table("service_users").select("*").eq("id", service_user_id),
                "service_users",
                service_user_id,
                "fetch service user"
            )
    except SupabaseError as e:
        logger.error("Service user detail failed", exc_info=True, service_user_id=service_user_id, error=str(e))
        return None
    return ServiceUser.model_validate(row)


async def get_service_user_activities(service_user_id: str, limit: Optional[int] = None) -> LoadResult:
    limit = limit or AppConfig.recent_activity_limit()
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("activities").select(SERVICE_USER_ACTIVITY_COLUMNS)
                .eq("service_user_id", service_user_id)
                .order("activity_date", desc=True)
                .limit(limit),
                "fetch service user activities"
            )
    except SupabaseError as e:
        logger.error("Service user activity history failed", exc_info=True, service_user_id=service_user_id, error=str(e))
        return LoadResult.failure(e)
    return LoadResult(items=rows)


async def create_service_user(form: ServiceUserForm) -> dict:
    service_user = await insert_row("service_users", form.to_row())
    logger.info("Service user created", service_user_id=service_user.get("id"), masked_name=mask_name(form.name))
    return service_user


async def update_service_user(service_user_id: str, form: ServiceUserForm) -> dict:
    service_user = await update_row("service_users", service_user_id, form.to_row())
    logger.info("Service user updated", service_user_id=service_user_id)
    return service_user


async def get_service_user_areas() -> LoadResult:
    """Distinct non-null areas, in first-seen order."""
    try:
        async with SupabaseClient() as client:
            rows = await fetch_rows(
                client.table("service_users").select("area").not_.is_("area", "null"),
                "fetch service user areas"
            )
    except SupabaseError as e:
        logger.error("Service user areas failed", exc_info=True, error=str(e))
        return LoadResult.failure(e)
    return LoadResult(items=get_unique_values(row.get("area") for row in rows))
