"""Supabase client wrapper with async context manager support."""

import asyncio
from typing import Any, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.app_config import AppConfig
from src.utils.errors import NotFoundError, SupabaseError
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = AppConfig.supabase_url()
        key = AppConfig.supabase_key()

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", url=url)

    return _client


async def close_supabase_client() -> None:
    """Drop the cached client; the next request creates a fresh one."""
    global _client
    if _client:
        _client = None
        logger.info("Supabase client closed")


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                type=exc_type.__name__
            )
        return False


async def execute(query: Any, operation: str) -> Any:
    """
    Run a built PostgREST query off the event loop.

    supabase-py's sync client blocks on HTTP, so queries are pushed to a
    worker thread; that lets asyncio.gather fan several lookups out at once.
    Any failure is re-raised as SupabaseError.
    """
    try:
        with log_timing(operation, logger=logger):
            return await asyncio.to_thread(query.execute)
    except SupabaseError:
        raise
    except Exception as e:
        raise SupabaseError(f"{operation} failed: {e}") from e


async def fetch_rows(query: Any, operation: str) -> list[dict]:
    """Execute a select and return its rows (empty list when none)."""
    result = await execute(query, operation)
    return result.data if result.data else []


async def fetch_single(query: Any, table: str, record_id: str, operation: str) -> dict:
    """Execute a select expected to match one row; raise NotFoundError when it matches none."""
    rows = await fetch_rows(query, operation)
    if not rows:
        raise NotFoundError(table, record_id)
    return rows[0]


async def count_rows(query: Any, operation: str) -> int:
    """Execute a head/count select and return the exact count."""
    result = await execute(query, operation)
    return result.count or 0


async def insert_row(table: str, data: dict) -> dict:
    """Insert one row and return it as stored."""
    async with SupabaseClient() as client:
        result = await execute(client.table(table).insert(data), f"insert {table}")
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise SupabaseError(f"Failed to create {table} record: no data returned")


async def insert_rows(table: str, rows: list[dict]) -> list[dict]:
    """Bulk insert; a no-op for an empty list."""
    if not rows:
        return []
    async with SupabaseClient() as client:
        result = await execute(client.table(table).insert(rows), f"insert {table}")
        return result.data if result.data else []


async def update_row(table: str, record_id: str, updates: dict) -> dict:
    """Update one row by id and return it; NotFoundError when the id matches nothing."""
    async with SupabaseClient() as client:
        result = await execute(
            client.table(table).update(updates).eq("id", record_id),
            f"update {table}"
        )
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise NotFoundError(table, record_id)


async def delete_row(table: str, record_id: str) -> None:
    """Delete one row by id."""
    async with SupabaseClient() as client:
        await execute(client.table(table).delete().eq("id", record_id), f"delete {table}")
