"""Tests for vouch.validator: orchestration around a RuleChecker."""

import logging
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any

import pytest

from vouch.errors import ValidationException
from vouch.result import FailedValidation, PassedValidation, ValidationResult
from vouch.validator import RuleChecker, Validator

DEFAULT_RULES = {"cat": "dog", "pig": "horse"}


class AlwaysPasses:
    """Engine stub that passes everything and records what it saw."""

    def __init__(self) -> None:
        self.seen: list[tuple[dict[str, Any], Mapping[str, Any]]] = []

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
        self.seen.append((data, rules))
        return PassedValidation()


class AlwaysFails:
    def __init__(self, errors: dict[str, str] | None = None) -> None:
        self.result = FailedValidation(errors or {"cat": "must be a dog"})

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
        return self.result


def passes(rules: Any = DEFAULT_RULES) -> Validator:
    return Validator(AlwaysPasses(), rules)


def fails(rules: Any = DEFAULT_RULES) -> Validator:
    return Validator(AlwaysFails(), rules)


# ---------------------------------------------------------------------------
# Rules configuration
# ---------------------------------------------------------------------------


class TestRuleConfiguration:
    def test_empty_rules_raise(self) -> None:
        with pytest.raises(ValidationException, match="does not have any rules"):
            passes({}).validate({})

    def test_unset_rules_raise(self) -> None:
        with pytest.raises(ValidationException, match="has invalid rules"):
            Validator(AlwaysPasses()).validate({"a": 1})

    def test_non_mapping_rules_raise(self) -> None:
        with pytest.raises(ValidationException, match="has invalid rules"):
            passes(["cat", "dog"]).validate({"cat": 1})

    @pytest.mark.parametrize("data", [{}, {"a": 1}, {"cat": "dog"}])
    def test_empty_rules_raise_regardless_of_data(self, data: dict[str, Any]) -> None:
        with pytest.raises(ValidationException):
            passes({}).validate(data)

    def test_engine_not_called_for_bad_rules(self) -> None:
        engine = AlwaysPasses()
        with pytest.raises(ValidationException):
            Validator(engine, {}).validate({"a": 1})
        assert engine.seen == []

    def test_exception_names_validator_class(self) -> None:
        class UserValidator(Validator):
            pass

        with pytest.raises(ValidationException) as exc_info:
            UserValidator(AlwaysPasses(), {}).validate({})
        assert exc_info.value.validator_name == "UserValidator"
        assert str(exc_info.value) == "UserValidator does not have any rules"


class TestRulesFactory:
    def test_returns_new_instance(self) -> None:
        original = passes()
        updated = original.rules({"a": "required"})
        assert updated is not original
        assert updated.rule_list == {"a": "required"}

    def test_original_unchanged(self) -> None:
        original = passes()
        original.rules({"a": "required"})
        assert original.rule_list == DEFAULT_RULES

    def test_keeps_class_and_checker(self) -> None:
        class UserValidator(Validator):
            pass

        engine = AlwaysPasses()
        updated = UserValidator(engine, DEFAULT_RULES).rules({"a": "required"})
        assert type(updated) is UserValidator
        assert updated.checker is engine

    def test_new_rules_used_for_validation(self) -> None:
        engine = AlwaysPasses()
        Validator(engine, {"a": "x"}).rules({"b": "y"}).validate({"a": 1, "b": 2})
        assert engine.seen[0][0] == {"b": 2}


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


class TestFiltering:
    def test_engine_only_sees_ruled_keys(self) -> None:
        engine = AlwaysPasses()
        Validator(engine, {"a": "required", "b": "required"}).validate(
            {"a": 123, "b": "cats", "c": 345}
        )
        data, rules = engine.seen[0]
        assert data == {"a": 123, "b": "cats"}
        assert rules == {"a": "required", "b": "required"}

    def test_callback_only_sees_ruled_keys(self) -> None:
        rules = {"a": "required", "b": "required"}
        result = passes(rules).validate(
            {"a": 123, "b": "cats", "c": 345},
            lambda validated: validated,
        )
        assert result.get_data() == {"a": 123, "b": "cats"}
        assert "c" not in result.get_data()

    def test_missing_keys_are_not_invented(self) -> None:
        engine = AlwaysPasses()
        Validator(engine, {"a": "required", "b": "required"}).validate({"a": 1})
        assert engine.seen[0][0] == {"a": 1}

    def test_input_mapping_not_mutated(self) -> None:
        data = {"cat": "dog", "extra": 1}
        passes().validate(data, lambda validated: validated)
        assert data == {"cat": "dog", "extra": 1}

    def test_dropped_fields_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="vouch.validator"):
            passes().validate({"cat": "dog", "secret": "hunter2"})
        assert "secret" in caplog.text
        assert "hunter2" not in caplog.text


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class TestFailedOutcome:
    def test_returns_failed_validation(self) -> None:
        assert isinstance(fails().validate({"a": "b"}), FailedValidation)

    def test_returns_engine_result_unmodified(self) -> None:
        engine = AlwaysFails({"cat": "must be a dog"})
        result = Validator(engine, DEFAULT_RULES).validate({"cat": "pig"})
        assert result is engine.result
        assert result.get_errors() == {"cat": "must be a dog"}

    def test_callback_not_invoked(self) -> None:
        calls = 0

        def on_success(data: dict[str, Any]) -> None:
            nonlocal calls
            calls += 1

        fails().validate({"cat": "dog"}, on_success)
        assert calls == 0

    def test_transform_does_not_run(self) -> None:
        calls = 0

        def count(data: Any) -> Any:
            nonlocal calls
            calls += 1
            return data

        returned = fails().validate({"cat": "dog"}).transform(count)
        assert isinstance(returned, FailedValidation)
        assert calls == 0

    def test_failure_logged_by_field_name_only(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="vouch.validator"):
            fails().validate({"cat": "hunter2"})

        failures = [r for r in caplog.records if "failed on fields" in r.getMessage()]
        assert len(failures) == 1
        assert failures[0].levelno == logging.DEBUG
        assert "cat" in failures[0].getMessage()
        assert "hunter2" not in caplog.text
        assert not [r for r in caplog.records if r.levelno >= logging.INFO]


class TestPassedOutcome:
    def test_returns_passed_validation(self) -> None:
        assert isinstance(passes().validate({"a": "b"}), PassedValidation)

    def test_no_callback_gives_empty_data(self) -> None:
        assert passes().validate({"cat": "dog"}).get_data() == {}

    def test_callback_returning_nothing_gives_empty_data(self) -> None:
        passed = passes().validate({"a": "b"}, lambda validated: None)
        assert passed.get_data() == {}

    def test_callback_return_value_becomes_data(self) -> None:
        passed = passes().validate({"a": "b"}, lambda validated: "catfood")
        assert passed.get_data() == "catfood"

    def test_callback_object_returned_intact(self) -> None:
        obj = SimpleNamespace(cat="hello", dog="goodbye")
        passed = passes().validate({"a": "b"}, lambda validated: obj)
        assert passed.get_data() is obj
        assert passed.get_data().cat == "hello"
        assert passed.get_data().dog == "goodbye"

    def test_new_result_not_engine_result(self) -> None:
        engine_result = PassedValidation({"from": "engine"})

        class Fixed:
            def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
                return engine_result

        result = Validator(Fixed(), DEFAULT_RULES).validate({"cat": 1})
        assert result is not engine_result
        assert result.get_data() == {}

    def test_transform_mutates_data(self) -> None:
        passed = passes().validate({"cat": "dog"}, lambda validated: {"hello": "goodbye"})
        calls = 0

        def encode(data: Any) -> str:
            nonlocal calls
            calls += 1
            return str(sorted(data.items()))

        returned = passed.transform(encode)
        assert returned is passed
        assert calls == 1
        assert passed.get_data() == "[('hello', 'goodbye')]"

    def test_callback_error_propagates(self) -> None:
        def explode(data: dict[str, Any]) -> None:
            raise LookupError("db down")

        with pytest.raises(LookupError, match="db down"):
            passes().validate({"cat": "dog"}, explode)


class TestReuse:
    def test_validate_does_not_mutate_validator(self) -> None:
        validator = passes()
        validator.validate({"cat": "dog", "x": 1}, lambda validated: validated)
        assert validator.rule_list == DEFAULT_RULES

    def test_independent_results(self) -> None:
        validator = passes()
        first = validator.validate({"cat": 1}, lambda validated: validated)
        second = validator.validate({"cat": 2}, lambda validated: validated)
        first.transform(lambda data: "changed")
        assert second.get_data() == {"cat": 2}


# ---------------------------------------------------------------------------
# Subclass-based engines
# ---------------------------------------------------------------------------


class CatValidator(Validator):
    """Engine by inheritance: the value of ``cat`` must equal its rule."""

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
        errors = {
            name: f"must be {expected}"
            for name, expected in rules.items()
            if name in data and data[name] != expected
        }
        if errors:
            return self.failed(errors)
        return self.passed()


class TaggedPassed(PassedValidation):
    pass


class TaggedValidator(Validator):
    def passed(self, data: Any = None) -> PassedValidation:
        return TaggedPassed(data)


class TestSubclassing:
    def test_override_check_data_without_checker(self) -> None:
        validator = CatValidator(rules={"cat": "dog"})
        assert validator.validate({"cat": "dog"}).passes()
        assert validator.validate({"cat": "pig"}).get_errors() == {"cat": "must be dog"}

    def test_missing_engine_raises(self) -> None:
        with pytest.raises(NotImplementedError, match="no RuleChecker"):
            Validator(rules={"a": "b"}).validate({"a": 1})

    def test_custom_passed_factory(self) -> None:
        result = TaggedValidator(AlwaysPasses(), DEFAULT_RULES).validate(
            {"cat": "dog"}, lambda validated: validated
        )
        assert isinstance(result, TaggedPassed)
        assert result.get_data() == {"cat": "dog"}

    def test_failed_factory_coerces_none(self) -> None:
        assert Validator().failed(None).get_errors() == {}

    def test_passed_factory_coerces_none(self) -> None:
        assert Validator().passed(None).get_data() == {}


class TestRuleCheckerProtocol:
    def test_stubs_satisfy_protocol(self) -> None:
        assert isinstance(AlwaysPasses(), RuleChecker)
        assert isinstance(AlwaysFails(), RuleChecker)

    def test_plain_object_does_not(self) -> None:
        assert not isinstance(object(), RuleChecker)
