"""
UUID helpers for the application.

Provides consistent UUID generation and parsing across models and routes.
"""
import uuid

from exceptions import ValidationError


def generate_uuid() -> str:
    """
    Generate a new UUID string.

    Returns:
        str: A new UUID4 string
    """
    return str(uuid.uuid4())


def parse_uuid(value: str) -> str:
    """
    Normalize a UUID received from a client.

    Returns:
        str: Canonical lower-case hyphenated form

    Raises:
        ValidationError: If value is not a UUID
    """
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError("Invalid ID", {"id": value})
