"""Test helper functions."""

import json
from io import BytesIO
from typing import Any, Dict, Optional
from unittest.mock import MagicMock, Mock

# PostgREST builder methods that return the builder itself
CHAIN_METHODS = (
    "select", "insert", "update", "delete", "eq", "neq", "gte", "lte", "in_",
    "ilike", "is_", "order", "limit", "single", "maybe_single",
)


def make_query(data=None, count: Optional[int] = None, error: Optional[Exception] = None) -> MagicMock:
    """Chainable query builder mock whose execute() returns data/count or raises error."""
    query = MagicMock(name="query")
    for method in CHAIN_METHODS:
        getattr(query, method).return_value = query
    query.not_ = query
    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data if data is not None else [], count=count)
    return query


def make_client(tables: Dict[str, Any]) -> MagicMock:
    """
    Client mock: client.table(name) returns tables[name].

    A list value is consumed one query per call; its last entry is reused.
    Unknown tables get an empty query.
    """
    def table(name: str):
        value = tables.get(name)
        if value is None:
            value = tables[name] = make_query(data=[])
        if isinstance(value, list):
            return value.pop(0) if len(value) > 1 else value[0]
        return value

    client = MagicMock(name="supabase")
    client.table.side_effect = table
    return client


def make_handler(handler_cls, method: str = "GET", path: str = "/", body: Any = None, headers: Optional[Dict[str, str]] = None):
    """Build a request handler without a socket, with response methods mocked."""
    raw = b""
    if body is not None:
        if isinstance(body, bytes):
            raw = body
        else:
            raw = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")

    h = handler_cls.__new__(handler_cls)
    h.command = method
    h.path = path
    h.headers = {"Content-Length": str(len(raw)), **(headers or {})}
    h.rfile = BytesIO(raw)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    return h


def response_status(h) -> int:
    return h.send_response.call_args[0][0]


def response_json(h) -> Any:
    h.wfile.seek(0)
    return json.loads(h.wfile.read().decode("utf-8"))
