"""Typed environment variable readers.

Blank values are treated as unset so that ``FOO=`` in a ``.env`` file does
not shadow a default.
"""

import os
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return a stripped string value or ``default`` when unset/blank."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default


def get_env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    """Return an integer value or ``default`` when unset/blank.

    Raises:
        ValueError: If the variable is set to a non-integer value.
    """
    value = get_env_str(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid integer for {name}: '{value}'") from exc


def get_env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Return a boolean value or ``default`` when unset/blank.

    Raises:
        ValueError: If the variable is set to an unrecognized value.
    """
    value = get_env_str(name)
    if value is None:
        return default
    normalized = value.lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: '{value}'")
