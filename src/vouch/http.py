"""HTTP adapter: turn validation outcomes into JSON responses.

Lives outside the core: it only reads ``passes()``, ``get_errors()`` and
``get_data()``, so any ``ValidationResult`` works, whatever engine made
it.

- ``FailedValidation`` becomes ``422 {"errors": {...}}``.
- ``PassedValidation`` becomes ``200`` with the result data as the body.

Usage::

    result = validator.validate(payload, create_user)
    status, body = to_http_response(result)      # framework-neutral

    response = to_response(result)                # JSON Response
    await response(scope, receive, send)          # serve it over ASGI
"""

from __future__ import annotations

import json as json_module
import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from vouch._internal.asgi import Receive, Scope, Send
from vouch.config import ResponseConfig
from vouch.result import ValidationResult

logger = logging.getLogger("vouch.http")

_DEFAULT_CONFIG = ResponseConfig()


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "application/json"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Body decoded as JSON."""
        return json_module.loads(self.text)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Serve this response as an ASGI application."""
        await send_response(self, send)


def to_http_response(
    result: ValidationResult,
    config: ResponseConfig | None = None,
) -> tuple[int, Any]:
    """Map an outcome to ``(status, body)`` without committing to a framework.

    The body is a plain Python value, ready for any JSON encoder.
    """
    config = config or _DEFAULT_CONFIG
    if result.passes():
        return config.passed_status, result.get_data()
    return config.failed_status, {config.errors_key: result.get_errors()}


def to_response(
    result: ValidationResult,
    config: ResponseConfig | None = None,
) -> Response:
    """Build a JSON ``Response`` from an outcome.

    Raises:
        TypeError: The passed data is not JSON-serializable. Transform
            it first (``result.transform(...)``).
    """
    config = config or _DEFAULT_CONFIG
    status, body = to_http_response(result, config)
    if not result.passes():
        logger.debug("Validation response %d for fields: %s", status, sorted(result.get_errors()))
    encoded = json_module.dumps(body, ensure_ascii=config.ensure_ascii)
    return Response(body=encoded, status=status, content_type=config.content_type)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
