"""Response configuration.

ResponseConfig is a frozen dataclass: immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResponseConfig:
    """How validation outcomes are turned into HTTP responses.

    All fields have sensible defaults. Override what you need::

        config = ResponseConfig(failed_status=400, errors_key="detail")
    """

    # Status codes
    failed_status: int = 422
    passed_status: int = 200

    # Body
    errors_key: str = "errors"
    content_type: str = "application/json"
    ensure_ascii: bool = False
