"""Signup: JSON registration endpoint with validation.

A bare ASGI application: read the JSON body, validate it, answer with
``422 {"errors": {...}}`` or ``201`` with the new user.

Users are stored in memory. This is a demo, not production auth.

Demonstrates:
- ``Validator`` + ``RuleListChecker`` with ``required``, ``min_length``,
  ``max_length``, ``email``, ``matches``
- Unknown fields (``is_admin``) silently dropped before the callback runs
- ``transform()`` to shape the stored user for the response
- ``to_response()`` serving the outcome over ASGI

Run:
    uvicorn app:app
"""

import json

from vouch.config import ResponseConfig
from vouch.engines.rules import RuleListChecker, email, matches, max_length, min_length, required
from vouch.http import Response, to_response
from vouch.validator import Validator

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

_username_pattern = matches(
    r"^[a-zA-Z0-9_]+$",
    message="Only letters, numbers, and underscores allowed",
)

signup = Validator(
    RuleListChecker(),
    {
        "username": [required, min_length(3), max_length(20), _username_pattern],
        "email": [required, email],
        "password": [required, min_length(8)],
    },
)

config = ResponseConfig(passed_status=201)

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

_users: list[dict[str, str]] = []


def _create_user(fields: dict[str, str]) -> dict[str, str]:
    user = {"id": str(len(_users) + 1), **fields}
    _users.append(user)
    return user


def _public(user: dict[str, str]) -> dict[str, str]:
    return {key: value for key, value in user.items() if key != "password"}


# ---------------------------------------------------------------------------
# ASGI app
# ---------------------------------------------------------------------------


async def _read_body(receive) -> bytes:
    body = b""
    more_body = True
    while more_body:
        message = await receive()
        body += message.get("body", b"")
        more_body = message.get("more_body", False)
    return body


async def app(scope, receive, send) -> None:
    if scope["type"] != "http":
        return

    if scope["method"] != "POST" or scope["path"] != "/signup":
        await Response('{"error": "not found"}', status=404)(scope, receive, send)
        return

    try:
        payload = json.loads(await _read_body(receive) or b"{}")
    except json.JSONDecodeError:
        await Response('{"error": "invalid JSON"}', status=400)(scope, receive, send)
        return

    if not isinstance(payload, dict):
        await Response('{"error": "expected a JSON object"}', status=400)(scope, receive, send)
        return

    result = signup.validate(payload, _create_user).transform(_public)
    await to_response(result, config)(scope, receive, send)
