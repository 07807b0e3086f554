"""Tests for health check endpoint."""

import pytest
from http.server import BaseHTTPRequestHandler

from api.health import handler
from tests.utils.helpers import make_handler, response_json, response_status


@pytest.mark.unit
def test_health_handler_class():
    """Test that handler is a BaseHTTPRequestHandler subclass."""
    assert issubclass(handler, BaseHTTPRequestHandler)


@pytest.mark.unit
def test_health_get_request():
    h = make_handler(handler, "GET", "/api/health")

    h.do_GET()

    assert response_status(h) == 200
    assert h.send_header.called
    data = response_json(h)
    assert data["status"] == "ok"
    assert data["service"] == "supporter-ops-backend"


@pytest.mark.unit
def test_health_post_request():
    h = make_handler(handler, "POST", "/api/health")

    h.do_POST()

    assert response_status(h) == 200
    assert response_json(h)["status"] == "ok"
