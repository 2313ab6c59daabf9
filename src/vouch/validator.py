"""Validator: engine-agnostic orchestration around a pluggable RuleChecker.

A ``Validator`` owns a rule set and a ``RuleChecker``. It never evaluates
rules itself. Each ``validate()`` call:

1. Refuses to run with missing or empty rules (``ValidationException``).
2. Drops every input key that has no rule.
3. Hands the remaining data to ``check_data()`` (the engine).
4. Returns a failed outcome untouched, or wraps the success callback's
   return value in a fresh ``PassedValidation``.

Usage::

    from vouch import Validator
    from vouch.engines.rules import RuleListChecker, max_length, required

    users = Validator(RuleListChecker(), {
        "name": [required, max_length(100)],
        "age": [required],
    })

    result = users.validate(payload, lambda clean: User(**clean))
    if not result:
        print(result.get_errors())

Validators are immutable configuration values. ``rules()`` returns a new
validator and ``validate()`` mutates nothing, so one instance can be
shared freely across threads.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol, Self, runtime_checkable

from vouch.errors import ValidationException
from vouch.result import FailedValidation, PassedValidation, ValidationResult

logger = logging.getLogger("vouch.validator")


@runtime_checkable
class RuleChecker(Protocol):
    """A rule-checking engine.

    Receives data already filtered down to fields with rules, plus the
    rule set itself, whose shape the engine alone defines. Returns a
    ``PassedValidation`` or a ``FailedValidation``. Never raises for data
    that merely fails its rules.
    """

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult: ...


class Validator:
    """Validate untrusted mappings against a rule set.

    Args:
        checker: The engine that evaluates rules. May be omitted by
            subclasses that override ``check_data()`` directly.
        rules: Field name to engine-specific rule spec.
    """

    __slots__ = ("checker", "rule_list")

    def __init__(
        self,
        checker: RuleChecker | None = None,
        rules: Mapping[str, Any] | None = None,
    ) -> None:
        self.checker = checker
        self.rule_list = rules

    def rules(self, rules: Mapping[str, Any]) -> Self:
        """Return a new validator of the same class carrying *rules*.

        The checker is shared; this validator's rules are left unchanged.
        """
        return type(self)(self.checker, rules)

    # -- Steps --

    def check_rules(self, rules: Mapping[str, Any] | None) -> None:
        """Raise ``ValidationException`` unless *rules* is a non-empty mapping."""
        if rules is None or not isinstance(rules, Mapping):
            raise ValidationException.invalid_rules(self)
        if not rules:
            raise ValidationException.empty_rules(self)

    def filter_data_without_rules(
        self, data: Mapping[str, Any], rules: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Keep only the entries of *data* whose key has a rule."""
        filtered = {key: value for key, value in data.items() if key in rules}
        if len(filtered) != len(data):
            dropped = sorted(str(key) for key in data if key not in rules)
            logger.debug("%s ignoring fields without rules: %s", type(self).__name__, dropped)
        return filtered

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
        """Evaluate *data* against *rules* with the configured engine.

        Override in a subclass to plug an engine in by inheritance
        instead of passing a checker.
        """
        if self.checker is None:
            msg = f"{type(self).__name__} has no RuleChecker and does not override check_data()"
            raise NotImplementedError(msg)
        return self.checker.check_data(data, rules)

    # -- Outcome factories (override to return richer variants) --

    def passed(self, data: Any = None) -> PassedValidation:
        return PassedValidation(data)

    def failed(self, errors: Mapping[str, str] | None = None) -> FailedValidation:
        return FailedValidation(errors)

    # -- Entry point --

    def validate(
        self,
        data: Mapping[str, Any],
        callback: Callable[[dict[str, Any]], Any] | None = None,
    ) -> ValidationResult:
        """Validate *data* and, on success, run *callback* with the filtered data.

        Returns the engine's failed outcome unchanged when validation
        fails (the callback is not called). On success, returns a new
        ``PassedValidation`` holding the callback's return value, or an
        empty one when no callback was given.

        Raises:
            ValidationException: The rules are missing or empty.
        """
        self.check_rules(self.rule_list)
        filtered = self.filter_data_without_rules(data, self.rule_list)

        validated = self.check_data(filtered, self.rule_list)

        if not validated.passes():
            logger.debug(
                "%s failed on fields: %s",
                type(self).__name__,
                sorted(validated.get_errors()),
            )
            return validated

        if callback is not None:
            return self.passed(callback(filtered))

        return self.passed()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(checker={self.checker!r}, rules={self.rule_list!r})"
