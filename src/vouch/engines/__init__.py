"""Rule-checking engines that plug into ``Validator``.

``RuleListChecker`` ships with vouch. ``PydanticChecker`` needs the
``pydantic`` extra and is only imported when asked for.
"""

from vouch.engines.rules import RuleListChecker

__all__ = ["PydanticChecker", "RuleListChecker"]


def __getattr__(name: str) -> object:
    if name == "PydanticChecker":
        from vouch.engines.schema import PydanticChecker

        return PydanticChecker

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
