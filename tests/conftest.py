"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import patch

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("HOLIDAY_COUNTRY", "JP")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.utils.factories import (  # noqa: E402
    create_activity_row,
    create_supporter_row,
)
from tests.utils.helpers import make_client  # noqa: E402


@pytest.fixture
def supabase_tables():
    """Table name -> query mock (or list of query mocks consumed in call order)."""
    return {}


@pytest.fixture
def mock_supabase_client(supabase_tables):
    """Patch the Supabase singleton with a client whose tables come from supabase_tables."""
    client = make_client(supabase_tables)
    with patch("src.services.supabase_client.get_supabase_client", return_value=client):
        yield client


@pytest.fixture
def cooking_supporter():
    """Supporter who can cook and clean on Monday mornings."""
    return create_supporter_row(
        supporter_id="sup-cook",
        skills=[("cooking", "Cooking"), ("cleaning", "Cleaning")],
        time_slots=[("mon-am", "Mon AM")],
    )


@pytest.fixture
def may_activities():
    """Two activities on 2024-05-01 and one on 2024-05-03."""
    return [
        create_activity_row(activity_id="act-1", activity_date="2024-05-01"),
        create_activity_row(activity_id="act-2", activity_date="2024-05-01"),
        create_activity_row(activity_id="act-3", activity_date="2024-05-03"),
    ]
