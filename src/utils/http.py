"""Helpers shared by the Vercel serverless handlers."""

import asyncio
import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Awaitable, Optional
from urllib.parse import parse_qs, urlparse

from src.utils.errors import InvalidFilterError
from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig


def run_async(coro: Awaitable[Any]) -> Any:
    """Run a coroutine to completion from a synchronous handler."""
    try:
        loop = asyncio.get_event_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    if loop.is_closed():
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


def parse_query(path: str) -> dict[str, list[str]]:
    """Parse the query string of a request path."""
    return parse_qs(urlparse(path).query, keep_blank_values=False)


def first_param(params: dict[str, list[str]], name: str) -> Optional[str]:
    values = params.get(name) or []
    value = values[0].strip() if values else ""
    return value or None


def inbound_correlation_id(request: BaseHTTPRequestHandler) -> Optional[str]:
    """Correlation ID sent by the caller, if any."""
    header = LoggingConfig.LOG_CORRELATION_ID_HEADER
    return request.headers.get(header) or request.headers.get(header.lower())


def send_json(
    request: BaseHTTPRequestHandler,
    status: int,
    payload: Any,
    correlation_id: Optional[str] = None,
) -> None:
    """Write a JSON response."""
    request.send_response(status)
    request.send_header('Content-Type', 'application/json')
    if correlation_id:
        request.send_header(LoggingConfig.LOG_CORRELATION_ID_HEADER, correlation_id)
    request.end_headers()
    request.wfile.write(json.dumps(payload).encode('utf-8'))


class JsonEndpoint(BaseHTTPRequestHandler):
    """Base handler for read-only JSON endpoints.

    Subclasses implement ``respond(params)`` returning ``(status, payload)``.
    Invalid parameters become 400 responses; any other failure is logged and
    answered with a generic 500.
    """

    endpoint_name = "endpoint"

    def respond(self, params: dict[str, list[str]]) -> tuple[int, Any]:
        raise NotImplementedError

    def do_GET(self):
        """Handle GET request."""
        logger = get_structured_logger(f"api.{self.endpoint_name}")

        with correlation_context(inbound_correlation_id(self)) as correlation_id:
            try:
                status, payload = self.respond(parse_query(self.path))
            except InvalidFilterError as e:
                logger.warning("Rejected request parameters", endpoint=self.endpoint_name, errors=e.errors)
                status, payload = 400, {"error": str(e), "details": e.errors}
            except Exception as e:
                logger.error(
                    f"Error handling {self.endpoint_name} request: {e}",
                    exc_info=True,
                    endpoint=self.endpoint_name,
                )
                status, payload = 500, {"error": "internal server error"}

            send_json(self, status, payload, correlation_id=correlation_id)
