"""Input validation for user endpoints.

Both helpers are pure: they either return the parsed value or raise an error
whose ``message`` is safe to show to API clients.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from users_backend.api.models import UserPayload

INVALID_USER_ID_MESSAGE = "Invalid user ID format."

_USER_ID_PATTERN = re.compile(r"([+-]?)([0-9]+)")

# Longer digit strings parse as 10**_MAX_ID_DIGITS, far beyond any stored id.
_MAX_ID_DIGITS = 20


class UserValidationError(ValueError):
    """Raised when a user payload violates a field constraint."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidUserIdError(ValueError):
    """Raised when a path parameter is not an integer user id."""

    def __init__(self, raw: str) -> None:
        super().__init__(raw)
        self.raw = raw
        self.message = INVALID_USER_ID_MESSAGE


def validate_user_payload(data: Any) -> UserPayload:
    """Validate ``data`` as a ``{name, email}`` record."""
    try:
        return UserPayload.model_validate(data)
    except ValidationError as exc:
        raise UserValidationError(first_error_message(exc.errors())) from exc


def parse_user_id(raw: str) -> int:
    """Parse a decimal user id, rejecting anything else."""
    match = _USER_ID_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidUserIdError(raw)
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    value = 10**_MAX_ID_DIGITS if len(digits) > _MAX_ID_DIGITS else int(digits)
    return -value if sign == "-" else value


def first_error_message(errors: Sequence[Mapping[str, Any]], *, skip_loc: int = 0) -> str:
    """Render the first pydantic error as ``"<field>: <reason>"``."""
    if not errors:
        return "Invalid request."
    error = errors[0]
    field = ".".join(str(part) for part in tuple(error.get("loc", ()))[skip_loc:])
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message
