"""Built-in rule engine: plain callables, one error message per field.

Each rule is a callable with the signature::

    def rule(value: object) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized rules are factory functions that return a rule::

    def max_length(n: int) -> Rule:
        def check(value: object) -> str | None:
            if len(_text(value)) > n:
                return f"Must be at most {n} characters"
            return None
        return check

Custom rules follow the same protocol. A rule set maps each field to a
single rule or a list of rules, evaluated in order; the first message
wins::

    Validator(RuleListChecker(), {
        "title": [required, max_length(200)],
        "email": [required, email],
    })
"""

import re
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from vouch.result import FailedValidation, PassedValidation, ValidationResult

# Type alias for a rule function
Rule: TypeAlias = Callable[[Any], str | None]


def _text(value: Any) -> str:
    """Rules read values as text. ``None`` is the empty string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Field must be present and non-empty."""
    if not _text(value).strip():
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Rule:
    """Value must be at most *n* characters."""

    def check(value: Any) -> str | None:
        if len(_text(value)) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Rule:
    """Value must be at least *n* characters."""

    def check(value: Any) -> str | None:
        if len(_text(value)) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: Any) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if not _EMAIL_RE.match(_text(value)):
        return "Must be a valid email address"
    return None


# Basic URL pattern: checks scheme + host structure
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def url(value: Any) -> str | None:
    """Value must be a valid URL (http/https)."""
    if not _URL_RE.match(_text(value)):
        return "Must be a valid URL"
    return None


def matches(pattern: str, message: str | None = None) -> Rule:
    """Value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if not compiled.match(_text(value)):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Rule:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if _text(value) not in allowed:
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def integer(value: Any) -> str | None:
    """Value must be a whole number (an ``int`` or integer text)."""
    if isinstance(value, bool):
        return "Must be a whole number"
    if isinstance(value, int):
        return None
    try:
        int(_text(value))
    except ValueError:
        return "Must be a whole number"
    return None


def number(value: Any) -> str | None:
    """Value must be a number (int or float, or numeric text)."""
    if isinstance(value, bool):
        return "Must be a number"
    if isinstance(value, int | float):
        return None
    try:
        float(_text(value))
    except ValueError:
        return "Must be a number"
    return None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class RuleListChecker:
    """``RuleChecker`` that runs rule callables field by field.

    A field missing from the data is checked as ``None``, so
    ``required`` reports it. Only the first failing rule's message is
    kept for each field.
    """

    __slots__ = ()

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
        errors: dict[str, str] = {}

        for field_name, spec in rules.items():
            value = data.get(field_name)
            for rule in _as_rules(spec):
                error = rule(value)
                if error is not None:
                    errors[field_name] = error
                    break

        if errors:
            return FailedValidation(errors)
        return PassedValidation()

    def __repr__(self) -> str:
        return "RuleListChecker()"


def _as_rules(spec: Rule | list[Rule] | tuple[Rule, ...]) -> tuple[Rule, ...]:
    if isinstance(spec, list | tuple):
        return tuple(spec)
    if callable(spec):
        return (spec,)
    msg = f"Expected a rule or a list of rules, got {type(spec).__name__}"
    raise TypeError(msg)
