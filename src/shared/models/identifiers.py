"""
Repository identifier helpers.

Identifiers are 64-bit values written as lowercase "0x"-prefixed hex
strings with no leading zeros. "0" is the invalid id.
"""

import re
from typing import Any, Optional

INVALID_ID = "0"

_ID64_PATTERN = re.compile(r"^0x[1-9a-f][0-9a-f]{0,15}$")


def is_valid_id(value: Any) -> bool:
    """Return True if value is a well-formed, non-invalid identifier."""
    return isinstance(value, str) and value != INVALID_ID and bool(_ID64_PATTERN.match(value))


def id_from_json(value: Any) -> Optional[str]:
    """
    Extract an identifier from a navigation or foreign-id value.

    The value may be the id string itself or an object of the form
    {"id": "0x..", "relClassName": ".."}. Integers are converted to the
    hex form. Returns None when no id can be extracted.
    """
    if isinstance(value, dict):
        value = value.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return hex(value) if value > 0 else None
    if isinstance(value, str):
        return value
    return None
