"""Lenient parsing of API response bodies.

None of these helpers raise on bad input: an empty body, invalid JSON or a
missing field all come back as "absent" so that the calling scenario can
turn it into an assertion with a readable message.
"""
import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from .models import ApiResponse, AuthResponse

logger = logging.getLogger(__name__)


def _load(body: Optional[str]) -> Any:
    if body is None or not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError:
        logger.warning("Response body is not valid JSON: %.80r", body)
        return None


def extract_field(body: Optional[str], name: str) -> str:
    """Return the string value of ``name`` in a JSON object body, or "".

    The field name is matched case-insensitively.
    """
    data = _load(body)
    if not isinstance(data, dict):
        return ""
    wanted = name.lower()
    for key, value in data.items():
        if str(key).lower() == wanted:
            return value if isinstance(value, str) else ""
    return ""


def extract_message(body: Optional[str]) -> str:
    return extract_field(body, "msg")


def parse_response(body: Optional[str]) -> Optional[ApiResponse]:
    """Parse a story endpoint envelope; None when the body is unusable."""
    data = _load(body)
    if not isinstance(data, dict):
        return None
    try:
        return ApiResponse.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected response shape: %s", e.errors()[0]["msg"])
        return None


def parse_auth_response(body: Optional[str]) -> Optional[AuthResponse]:
    data = _load(body)
    if not isinstance(data, dict):
        return None
    try:
        return AuthResponse.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected login response shape: %s", e.errors()[0]["msg"])
        return None


def parse_json_array(body: Optional[str]) -> Optional[list]:
    """Return the body as a list if it is a JSON array, otherwise None."""
    data = _load(body)
    return data if isinstance(data, list) else None
