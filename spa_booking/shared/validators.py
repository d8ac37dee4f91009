"""Shared validation utilities"""

import re
import uuid
from typing import Optional


def validate_uuid(value: str) -> bool:
    """Validate UUID format"""
    try:
        uuid.UUID(value)
        return True
    except (ValueError, AttributeError, TypeError):
        return False


def validate_reference_id(value: Optional[str]) -> Optional[str]:
    """
    Validate an identifier referencing another document.

    Raises:
        ValueError: If the identifier is not a UUID
    """
    if value is None:
        return value
    value = value.strip()
    if not validate_uuid(value):
        raise ValueError("Invalid identifier format")
    return value


def validate_required_text(value: Optional[str]) -> Optional[str]:
    """
    Trim a required text field.

    Raises:
        ValueError: If nothing is left after trimming
    """
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Field must not be blank")
    return value


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number to digits with an optional leading +.

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    normalized = phone.strip()
    prefix = "+" if normalized.startswith("+") else ""
    digits = re.sub(r"\D", "", normalized)

    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must contain 7 to 15 digits")

    return f"{prefix}{digits}"
