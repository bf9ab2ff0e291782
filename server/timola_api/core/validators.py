"""Input format checks shared by the public submission forms."""

import re
from typing import Any, Iterable, Mapping, Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# At least ten ASCII digits, spaces, dashes or parentheses, optional leading "+"
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{10,}$")


def is_valid_email(value: str) -> bool:
    """Return True if ``value`` looks like ``local@domain.tld``."""
    return bool(EMAIL_PATTERN.fullmatch(value))


def is_valid_phone(value: str) -> bool:
    """Return True if ``value`` is a plausible phone number."""
    return bool(PHONE_PATTERN.fullmatch(value))


def first_missing_field(payload: Mapping[str, Any], fields: Iterable[str]) -> Optional[str]:
    """
    Return the first of ``fields`` whose value is missing from ``payload``.

    Missing means absent or falsy: ``None``, an empty string and ``0`` all
    count as not provided.
    """
    for field in fields:
        value = payload.get(field)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            return field
    return None
