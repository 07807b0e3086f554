"""Tests for the Supabase client wrapper and query helpers."""

import pytest
from unittest.mock import patch

from src.services import supabase_client
from src.services.supabase_client import (
    close_supabase_client,
    count_rows,
    execute,
    fetch_single,
    get_supabase_client,
    insert_row,
    insert_rows,
    update_row,
)
from src.utils.errors import NotFoundError, SupabaseError
from tests.utils.helpers import make_query


@pytest.fixture
def reset_client():
    supabase_client._client = None
    yield
    supabase_client._client = None


@pytest.mark.unit
def test_get_supabase_client_requires_configuration(reset_client, monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)

    with pytest.raises(SupabaseError):
        get_supabase_client()


@pytest.mark.unit
def test_get_supabase_client_is_singleton(reset_client):
    with patch("src.services.supabase_client.create_client") as mock_create:
        first = get_supabase_client()
        second = get_supabase_client()

    assert first is second
    mock_create.assert_called_once()
    assert mock_create.call_args[0][:2] == ("https://test.supabase.co", "test-key")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_execute_wraps_errors():
    query = make_query(error=ConnectionError("reset by peer"))

    with pytest.raises(SupabaseError) as exc_info:
        await execute(query, "fetch things")

    assert "fetch things" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_single_not_found():
    with pytest.raises(NotFoundError) as exc_info:
        await fetch_single(make_query(data=[]), "supporters", "s1", "fetch supporter")

    assert exc_info.value.record_id == "s1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_count_rows_defaults_to_zero():
    assert await count_rows(make_query(count=None), "count") == 0
    assert await count_rows(make_query(count=3), "count") == 3


@pytest.mark.unit
@pytest.mark.asyncio
async def test_insert_row_requires_returned_data(mock_supabase_client, supabase_tables):
    supabase_tables["skills"] = make_query(data=[])

    with pytest.raises(SupabaseError):
        await insert_row("skills", {"name": "料理"})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_insert_rows_empty_is_noop(mock_supabase_client):
    assert await insert_rows("supporter_skills", []) == []
    mock_supabase_client.table.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_row(mock_supabase_client, supabase_tables):
    query = make_query(data=[{"id": "k1", "name": "料理"}])
    supabase_tables["skills"] = query

    row = await update_row("skills", "k1", {"name": "料理"})

    assert row["id"] == "k1"
    query.update.assert_called_once_with({"name": "料理"})
    query.eq.assert_called_once_with("id", "k1")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_close_supabase_client(reset_client):
    with patch("src.services.supabase_client.create_client") as mock_create:
        get_supabase_client()
        await close_supabase_client()
        get_supabase_client()

    assert mock_create.call_count == 2
