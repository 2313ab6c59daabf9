"""Vouch: framework-agnostic validation with pass/fail outcomes.

Validate untrusted mappings against a rule set. The rules are checked
by a pluggable engine; callers only ever see ``PassedValidation`` or
``FailedValidation``.

Basic usage::

    from vouch import Validator
    from vouch.engines.rules import RuleListChecker, integer, required

    validator = Validator(RuleListChecker(), {"name": required, "age": [required, integer]})

    result = validator.validate({"name": "Andrew", "age": 16, "height": "8ft"}, dict)
    result.get_data()  # {"name": "Andrew", "age": 16}  (no rule for height)

Pydantic rules (``pip install vouch[pydantic]``)::

    from vouch.engines import PydanticChecker
    validator = Validator(PydanticChecker(), {"age": int})

HTTP responses::

    from vouch.http import to_response
    response = to_response(result)  # 422 {"errors": {...}} or 200 data
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "EngineUnavailable",
    "FailedValidation",
    "PassedValidation",
    "ResponseConfig",
    "RuleChecker",
    "ValidationErrorDoesNotExist",
    "ValidationException",
    "ValidationResult",
    "Validator",
    "VouchError",
]


# Public name -> defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "EngineUnavailable": "vouch.errors",
    "FailedValidation": "vouch.result",
    "PassedValidation": "vouch.result",
    "ResponseConfig": "vouch.config",
    "RuleChecker": "vouch.validator",
    "ValidationErrorDoesNotExist": "vouch.errors",
    "ValidationException": "vouch.errors",
    "ValidationResult": "vouch.result",
    "Validator": "vouch.validator",
    "VouchError": "vouch.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import vouch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
