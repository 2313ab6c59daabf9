"""Validation outcomes: PassedValidation and FailedValidation.

Every call to ``Validator.validate()`` returns one of these. Callers
branch on ``passes()`` (or plain truthiness) and never need to know
which engine produced the result::

    result = validator.validate(data, save_user)
    if not result:
        return to_response(result)  # 422 {"errors": {...}}
    user = result.get_data()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Self

from vouch.errors import ValidationErrorDoesNotExist


class ValidationResult(ABC):
    """Common interface for pass/fail outcomes.

    Defaults describe an outcome with no errors and no data. Variants
    override only what they carry.
    """

    __slots__ = ()

    @abstractmethod
    def passes(self) -> bool:
        """True if validation passed, False if it failed."""

    def get_errors(self) -> dict[str, str]:
        """Field name to error message. Empty unless validation failed."""
        return {}

    def get_data(self) -> Any:
        """Payload produced by a successful validation. ``{}`` by default."""
        return {}

    def get_error(self, name: str) -> str:
        """Return the error message recorded for *name*.

        Raises:
            ValidationErrorDoesNotExist: No error is recorded for *name*.
        """
        raise ValidationErrorDoesNotExist.for_name(name)

    def transform(self, fn: Callable[[Any], Any]) -> Self:
        """Replace the stored data with ``fn(data)``. No-op unless passed."""
        return self

    def __bool__(self) -> bool:
        """Falsy when failed, enables ``if not result:``."""
        return self.passes()


class PassedValidation(ValidationResult):
    """Validation succeeded. Holds whatever the success callback returned.

    Any falsy payload (``None``, ``0``, ``""``, empty containers) is
    stored as ``{}``. The check calls ``bool()`` on the payload, so an
    object with no single truth value (a numpy array, a DataFrame)
    raises ``ValueError``. Wrap such objects before returning them.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Any = None) -> None:
        # Falsy payloads collapse to an empty dict
        self._data = data if data else {}

    def passes(self) -> bool:
        return True

    def get_data(self) -> Any:
        return self._data

    def transform(self, fn: Callable[[Any], Any]) -> Self:
        """Replace the stored data with ``fn(data)`` and return ``self``.

        Mutates this instance. Exceptions raised by *fn* propagate and
        leave the data as it was.
        """
        self._data = fn(self._data)
        return self

    def __repr__(self) -> str:
        return f"PassedValidation({self._data!r})"


class FailedValidation(ValidationResult):
    """Validation failed. Holds field name to human-readable message."""

    __slots__ = ("_errors",)

    def __init__(self, errors: Mapping[str, str] | None = None) -> None:
        self._errors: dict[str, str] = dict(errors) if errors else {}

    def passes(self) -> bool:
        return False

    def get_errors(self) -> dict[str, str]:
        return self._errors

    def get_error(self, name: str) -> str:
        if name not in self._errors:
            raise ValidationErrorDoesNotExist.for_name(name)
        return self._errors[name]

    def __repr__(self) -> str:
        return f"FailedValidation({self._errors!r})"
