"""Assertion helpers for tests that exercise validators.

Each assertion produces a clear error message on failure::

    from vouch.testing import assert_failed, assert_passed

    assert_failed(validator.validate({"age": 176}), fields={"age"})
    assert_passed(validator.validate({"age": 16}, dict), data={"age": 16})
"""

from collections.abc import Iterable, Mapping
from typing import Any

from vouch.http import Response
from vouch.result import ValidationResult

_UNSET: Any = object()


def assert_passed(result: ValidationResult, *, data: Any = _UNSET) -> None:
    """Assert the outcome passed, optionally with exactly *data*."""
    assert result.passes(), (
        f"Expected validation to pass, but it failed.\n"
        f"Errors: {result.get_errors()}"
    )
    if data is not _UNSET:
        assert result.get_data() == data, (
            f"Expected data {data!r}, got {result.get_data()!r}"
        )


def assert_failed(
    result: ValidationResult,
    *,
    errors: Mapping[str, str] | None = None,
    fields: Iterable[str] | None = None,
) -> None:
    """Assert the outcome failed.

    *errors* must match the recorded errors exactly. *fields* only
    checks which field names carry an error.
    """
    assert not result.passes(), (
        f"Expected validation to fail, but it passed.\n"
        f"Data: {result.get_data()!r}"
    )
    if errors is not None:
        assert result.get_errors() == dict(errors), (
            f"Expected errors {dict(errors)!r}, got {result.get_errors()!r}"
        )
    if fields is not None:
        expected = set(fields)
        actual = set(result.get_errors())
        assert actual == expected, (
            f"Expected errors on {sorted(expected)}, got errors on {sorted(actual)}"
        )


def assert_error_response(
    response: Response,
    *,
    errors: Mapping[str, str] | None = None,
    status: int = 422,
    errors_key: str = "errors",
) -> None:
    """Assert the response is a validation error response."""
    assert response.status == status, (
        f"Expected status {status}, got {response.status}"
    )
    body = response.json()
    assert isinstance(body, dict) and errors_key in body, (
        f"Response body has no {errors_key!r} key.\n"
        f"Response body: {response.text[:500]}"
    )
    if errors is not None:
        assert body[errors_key] == dict(errors), (
            f"Expected errors {dict(errors)!r}, got {body[errors_key]!r}"
        )
