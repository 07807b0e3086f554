"""Shared base for the JSON serverless handlers under api/."""

import asyncio
import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import parse_qs, urlparse

from pydantic_core import to_jsonable_python

from src.models.filters import SearchParams
from src.utils.errors import FormValidationError, NotFoundError, SupabaseError
from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

Action = Callable[[], Awaitable[tuple[int, Any]]]


class JsonRequestHandler(BaseHTTPRequestHandler):
    """BaseHTTPRequestHandler with JSON helpers and uniform error mapping."""

    def send_json(self, status: int, payload: Any, correlation_id: Optional[str] = None) -> None:
        body = json.dumps(to_jsonable_python(payload), ensure_ascii=False)
        self.send_response(status)
        self.send_header('Content-Type', 'application/json; charset=utf-8')
        if correlation_id:
            self.send_header(LoggingConfig.LOG_CORRELATION_ID_HEADER, correlation_id)
        self.end_headers()
        self.wfile.write(body.encode('utf-8'))

    def query_params(self) -> dict[str, list[str]]:
        return parse_qs(urlparse(self.path).query, keep_blank_values=True)

    def query_value(self, key: str) -> Optional[str]:
        values = self.query_params().get(key)
        return values[0] if values else None

    def search_params(self) -> SearchParams:
        return SearchParams.from_query(self.query_params())

    def read_json_body(self) -> Any:
        try:
            content_length = int(self.headers.get('Content-Length', 0) or 0)
            raw_body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
            return json.loads(raw_body) if raw_body else {}
        except (ValueError, UnicodeDecodeError):
            # JSONDecodeError is a ValueError
            raise FormValidationError({"__root__": "Request body is not valid UTF-8 JSON"})

    def require_id(self) -> str:
        record_id = self.query_value("id")
        if not record_id:
            raise FormValidationError({"id": "id query parameter is required"})
        return record_id

    def dispatch(self, action: Action, write: bool = False) -> None:
        """
        Run an async action and write its (status, payload) as JSON.

        Validation errors map to 400, unknown ids to 404. A store failure is a
        503 on reads (the data is temporarily unavailable) and a 500 on writes.
        """
        LoggingConfig.setup_logging()
        log = logger.bind(method=self.command, path=self.path)
        with correlation_context(self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)) as correlation_id:
            try:
                status, payload = asyncio.run(action())
            except FormValidationError as e:
                status, payload = 400, {"error": "validation failed", "fields": e.errors}
            except NotFoundError as e:
                status, payload = 404, {"error": "not found", "table": e.table, "id": e.record_id}
            except SupabaseError as e:
                log.error("Store operation failed", exc_info=True, write=write, error=str(e))
                status = 500 if write else 503
                payload = {"error": "save failed" if write else "data temporarily unavailable"}
            except Exception as e:
                log.error("Unhandled request error", exc_info=True, error=str(e))
                status, payload = 500, {"error": "internal server error"}

            self.send_json(status, payload, correlation_id)
