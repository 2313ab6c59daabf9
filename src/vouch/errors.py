"""Vouch exception hierarchy.

Configuration mistakes and programmer errors are raised. Data that fails
its rules is never raised: it comes back as a ``FailedValidation``.
"""

from __future__ import annotations

from typing import Any


class VouchError(Exception):
    """Base for all vouch-specific errors."""


class ValidationException(VouchError):
    """A validator cannot run because its rules are unusable.

    Always a configuration error. Fix how the validator was built.
    """

    def __init__(self, message: str, *, validator_name: str = "") -> None:
        super().__init__(message)
        self.validator_name = validator_name

    @classmethod
    def invalid_rules(cls, validator: Any) -> ValidationException:
        """The validator has no rules at all (``None``) or rules of the wrong shape."""
        name = type(validator).__name__
        return cls(f"{name} has invalid rules", validator_name=name)

    @classmethod
    def empty_rules(cls, validator: Any) -> ValidationException:
        """The validator has a rule mapping with zero entries."""
        name = type(validator).__name__
        return cls(f"{name} does not have any rules", validator_name=name)


class ValidationErrorDoesNotExist(VouchError):  # noqa: N818
    """Raised by ``get_error()`` for a field that has no recorded error."""

    def __init__(self, message: str, *, name: str = "") -> None:
        super().__init__(message)
        self.name = name

    @classmethod
    def for_name(cls, name: str) -> ValidationErrorDoesNotExist:
        return cls(f"{name} is not a valid validation error", name=name)


class EngineUnavailable(VouchError):  # noqa: N818
    """An optional rule-checking engine's library is not installed."""
