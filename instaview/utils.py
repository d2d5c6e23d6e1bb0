import math
import re

from .errors import InvalidUsernameError

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_\-.]")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def require_username(username: str | None) -> str:
    """
    Reject missing or blank usernames before any I/O happens.
    Returns the username unchanged.
    """
    if username is None or not str(username).strip():
        raise InvalidUsernameError("username is required")
    return username


def sanitize_username(username: str) -> str:
    """
    Map a username onto a safe cache file stem.

    Every character outside [A-Za-z0-9_-.] becomes "_", so "a b" and "a_b"
    share a cache file.
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", str(username))


def as_int(value) -> int:
    """
    Lenient integer coercion: ints and floats truncate, strings use their
    leading integer ("3 items" -> 3), anything else is 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        return int(m.group(1)) if m else 0
    return 0
