"""Pydantic-backed rule engine.

Rules are pydantic field definitions, the same values
``pydantic.create_model`` accepts::

    from typing import Annotated
    from pydantic import Field

    Validator(PydanticChecker(), {
        "name": Annotated[str, Field(max_length=100)],
        "age": (int, Field(ge=0, le=100)),
        "nickname": (str | None, None),
    })

A bare annotation makes the field required. A ``(annotation, default)``
tuple keeps its default. Rule names are used as aliases on generated
field names, so any key works, including ``_token`` or ``model_config``.

Requires ``pydantic``::

    pip install vouch[pydantic]
"""

from collections.abc import Mapping
from typing import Annotated, Any

from vouch.errors import EngineUnavailable
from vouch.result import FailedValidation, PassedValidation, ValidationResult

# Key used for errors pydantic does not attach to a single field
MODEL_ERROR_KEY = "__all__"


def _get_pydantic() -> Any:
    """Import pydantic or raise a clear error."""
    try:
        import pydantic

        return pydantic
    except ImportError:
        msg = (
            "PydanticChecker requires 'pydantic'. "
            "Install it with: pip install vouch[pydantic]"
        )
        raise EngineUnavailable(msg) from None


class PydanticChecker:
    """``RuleChecker`` that builds a throwaway pydantic model per rule set.

    Each failing field reports the first message pydantic produced for
    it (``"Field required"``, ``"Input should be less than or equal to
    100"``, ...).

    Args:
        model_name: Name given to the generated model. Shows up in
            pydantic's own error text only.
        strict: Disable pydantic's lax coercion (``"42"`` no longer
            satisfies ``int``).
    """

    __slots__ = ("_pydantic", "model_name", "strict")

    def __init__(self, model_name: str = "VouchRules", *, strict: bool = False) -> None:
        self._pydantic = _get_pydantic()
        self.model_name = model_name
        self.strict = strict

    def build_model(self, rules: Mapping[str, Any]) -> Any:
        """Create a pydantic model class from a rule set."""
        fields = {
            f"field_{index}": _field_definition(self._pydantic, name, spec)
            for index, (name, spec) in enumerate(rules.items())
        }
        config = self._pydantic.ConfigDict(strict=self.strict)
        return self._pydantic.create_model(self.model_name, __config__=config, **fields)

    def check_data(self, data: dict[str, Any], rules: Mapping[str, Any]) -> ValidationResult:
        model = self.build_model(rules)
        try:
            model.model_validate(data)
        except self._pydantic.ValidationError as exc:
            return FailedValidation(_first_errors(exc.errors()))
        return PassedValidation()

    def __repr__(self) -> str:
        return f"PydanticChecker(model_name={self.model_name!r}, strict={self.strict!r})"


def _field_definition(pydantic: Any, name: str, spec: Any) -> tuple[Any, Any]:
    # Errors report the alias in loc[0], so they stay keyed by rule name
    if isinstance(spec, tuple) and len(spec) == 2:
        annotation, default = spec
    else:
        annotation, default = spec, ...
    return (Annotated[annotation, pydantic.Field(alias=name)], default)


def _first_errors(details: list[dict[str, Any]]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for detail in details:
        loc = detail.get("loc") or ()
        key = str(loc[0]) if loc else MODEL_ERROR_KEY
        errors.setdefault(key, detail["msg"])
    return errors
