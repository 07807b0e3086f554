"""Tests for supporter, service user and settings endpoints."""

import pytest

from api.dashboard import handler as dashboard_handler
from api.service_user import handler as service_user_handler
from api.service_users import handler as service_users_handler
from api.settings import handler as settings_handler
from api.skills import handler as skills_handler
from api.supporter import handler as supporter_handler
from api.supporters import handler as supporters_handler
from tests.utils.factories import create_service_user_row, create_supporter_row
from tests.utils.helpers import make_handler, make_query, response_json, response_status


@pytest.mark.unit
def test_supporters_list(mock_supabase_client, supabase_tables):
    supabase_tables["supporters"] = make_query(data=[create_supporter_row(supporter_id="s1", status="登録完了")])
    h = make_handler(supporters_handler, "GET", "/api/supporters?status=all")

    h.do_GET()

    assert response_status(h) == 200
    data = response_json(h)
    assert data["filters"]["status"] is None
    assert [s["id"] for s in data["supporters"]["items"]] == ["s1"]


@pytest.mark.unit
def test_supporter_create_rejects_bad_email(mock_supabase_client):
    h = make_handler(supporters_handler, "POST", "/api/supporters", body={"name": "山田", "email": "nope"})

    h.do_POST()

    assert response_status(h) == 400
    assert "email" in response_json(h)["fields"]
    mock_supabase_client.table.assert_not_called()


@pytest.mark.unit
def test_supporter_detail_with_history(mock_supabase_client, supabase_tables, cooking_supporter):
    supabase_tables["supporters"] = make_query(data=[cooking_supporter])
    supabase_tables["activities"] = make_query(data=[{"id": "a1", "activity_date": "2024-05-01"}])
    h = make_handler(supporter_handler, "GET", "/api/supporter?id=sup-cook")

    h.do_GET()

    assert response_status(h) == 200
    data = response_json(h)
    assert data["supporter"]["id"] == "sup-cook"
    assert data["activities"]["items"] == [{"id": "a1", "activity_date": "2024-05-01"}]


@pytest.mark.unit
def test_supporter_detail_not_found(mock_supabase_client, supabase_tables):
    supabase_tables["supporters"] = make_query(data=[])
    h = make_handler(supporter_handler, "GET", "/api/supporter?id=missing")

    h.do_GET()

    assert response_status(h) == 404


@pytest.mark.unit
def test_service_users_list_and_create(mock_supabase_client, supabase_tables):
    query = make_query(data=[create_service_user_row(service_user_id="u1", area="中央区")])
    supabase_tables["service_users"] = query

    h = make_handler(service_users_handler, "GET", "/api/service_users?search=佐藤&area=中央区")
    h.do_GET()

    assert response_status(h) == 200
    assert [u["id"] for u in response_json(h)["service_users"]["items"]] == ["u1"]
    query.ilike.assert_any_call("name", "%佐藤%")

    h = make_handler(service_users_handler, "POST", "/api/service_users", body={"name": "佐藤"})
    h.do_POST()

    assert response_status(h) == 201


@pytest.mark.unit
def test_service_user_update_unknown(mock_supabase_client, supabase_tables):
    supabase_tables["service_users"] = make_query(data=[])
    h = make_handler(service_user_handler, "PUT", "/api/service_user?id=missing", body={"name": "佐藤"})

    h.do_PUT()

    assert response_status(h) == 404


@pytest.mark.unit
def test_settings(mock_supabase_client, supabase_tables):
    supabase_tables["skills"] = make_query(data=[{"id": "k1", "name": "料理", "category": "家事", "is_active": True}])
    supabase_tables["activity_statuses"] = make_query(data=[{"id": "st1", "name": "完了"}])
    h = make_handler(settings_handler, "GET", "/api/settings")

    h.do_GET()

    data = response_json(h)
    assert data["skills"]["items"][0]["name"] == "料理"
    assert data["activity_statuses"]["items"][0]["name"] == "完了"


@pytest.mark.unit
def test_skill_delete(mock_supabase_client, supabase_tables):
    query = make_query(data=[])
    supabase_tables["skills"] = query
    h = make_handler(skills_handler, "DELETE", "/api/skills?id=k1")

    h.do_DELETE()

    assert response_status(h) == 200
    query.eq.assert_called_once_with("id", "k1")


@pytest.mark.unit
def test_dashboard(mock_supabase_client, supabase_tables):
    supabase_tables["supporters"] = make_query(count=4)
    h = make_handler(dashboard_handler, "GET", "/api/dashboard")

    h.do_GET()

    assert response_status(h) == 200
    data = response_json(h)
    assert data["stats"]["total_supporters"] == 4
    assert data["today_activities"] == {"items": [], "error": None}
