"""
Input validation utilities.

Checks work on raw JSON / path values. Textual checks look at the value's
string form: missing or null becomes "", booleans become "true" / "false".
"""
import math
import re
from typing import Any, Optional

NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
INT_RE = re.compile(r"^[-+]?[0-9]+$")
BOOLEAN_STRINGS = {"true", "false", "1", "0"}


def as_text(value: Any) -> str:
    """String form of a raw request value"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_number(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    return float(as_text(value).strip())


def as_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return as_text(value) in ("true", "1")


def not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_numeric(value: Any) -> bool:
    if isinstance(value, (list, dict)):
        return False
    if NUMERIC_RE.match(as_text(value)) is None:
        return False
    # Digit strings and ints past the float range are not usable numbers
    try:
        return math.isfinite(as_number(value))
    except OverflowError:
        return False


def is_int(value: Any) -> bool:
    if isinstance(value, (list, dict)):
        return False
    return INT_RE.match(as_text(value)) is not None


def is_positive(value: Any, places: Optional[int] = None) -> bool:
    """Value coerces to a number strictly greater than zero.

    With ``places`` the number must still be above zero once rounded to that
    many decimals, so a NUMERIC column of that scale never stores 0.
    """
    if value is None or isinstance(value, (list, dict)):
        return False
    try:
        number = as_number(value)
    except ValueError:
        return False
    except OverflowError:
        # int too large for a float
        return value > 0
    if math.isnan(number):
        return False
    if places is not None:
        number = round(number, places)
    return number > 0


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, (list, dict)):
        return False
    return as_text(value) in BOOLEAN_STRINGS
