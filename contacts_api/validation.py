"""
Field validation for contact payloads.
"""

from __future__ import annotations

import logging
from typing import Any

import phonenumbers

logger = logging.getLogger(__name__)

DEFAULT_REGION = "PL"


class ContactValidationError(ValueError):
    """Raised when a contact payload fails field validation."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def is_valid_phone_number(value: Any, region: str = DEFAULT_REGION) -> bool:
    """
    Check whether ``value`` is a plausible phone number.

    The number is parsed against ``region`` when it carries no country
    code, and must be both possible and valid under the numbering plan.
    Never raises; anything unparseable is simply rejected.
    """
    if not isinstance(value, str) or not value:
        return False

    try:
        parsed = phonenumbers.parse(value, region)
    except phonenumbers.NumberParseException as e:
        logger.debug("Could not parse phone number %r: %s", value, e)
        return False

    if not phonenumbers.is_possible_number(parsed):
        return False
    return phonenumbers.is_valid_number(parsed)


def validate_contact_payload(payload) -> None:
    """Raise ContactValidationError if a create/update body is not acceptable."""
    if not payload.name or not payload.name.strip():
        raise ContactValidationError("name", "field is required")
    if not payload.phone:
        raise ContactValidationError("phone", "field is required")
    if not is_valid_phone_number(payload.phone):
        raise ContactValidationError("phone", "invalid phone number")
