"""
Value coercion for stored options.

Stored values come back from the option store in whatever shape they were
written with. Reads normalise them to the declared field type so clients
always see a string, an integer or a boolean.
"""

from __future__ import annotations

import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")

# Parsed integers saturate at the signed 64-bit range
INT_MAX = 2**63 - 1
INT_MIN = -(2**63)
_MAX_DIGITS = len(str(INT_MAX))


def is_empty(value: Any) -> bool:
    """
    Check whether a stored value counts as "not set".

    None, False, zero, the empty string, the string "0" and empty
    containers are all empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _parse_leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    sign, digits = match.group(1), match.group(2).lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return INT_MIN if sign == "-" else INT_MAX
    return max(INT_MIN, min(INT_MAX, int(sign + digits)))


def to_integer(value: Any) -> int:
    """Parse the leading integer of a value, or 0 when there is none."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        return _parse_leading_int(value)
    if isinstance(value, (list, tuple, dict, set)):
        return 1 if value else 0
    return 0


def to_string(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_boolean(value: Any) -> bool:
    return not is_empty(value)


_COERCERS = {
    "string": to_string,
    "integer": to_integer,
    "boolean": to_boolean,
}


def coerce(value: Any, value_type: str) -> Any:
    """
    Coerce a value to the named type.

    Raises:
        ValueError: If the type name is not one of string, integer, boolean.
    """
    try:
        coercer = _COERCERS[value_type]
    except KeyError as e:
        raise ValueError(f"Unsupported value type: {value_type}") from e
    return coercer(value)
