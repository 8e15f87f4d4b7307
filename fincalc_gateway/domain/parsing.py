"""Explicit numeric coercion for form values and loans-listing payloads"""

import math
import re
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple

from fincalc_gateway.domain.exceptions import InvalidInputError

_STRIP_CHARS = re.compile(r"[,\s₹]")
_RANGE_SPLIT = re.compile(r"^\s*(.+?)\s*(?:-|–|to)\s*(.+?)\s*$")


def parse_number(value: Any, field: str, required: bool = True) -> Optional[float]:
    """
    Coerce a number or numeric string to float.

    Accepts int, float, Decimal and strings such as "8.5", "12,00,000",
    "₹ 5,000" or "9.25%". Booleans, NaN and infinities are rejected.

    Raises:
        InvalidInputError: value is missing (when required) or not numeric
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise InvalidInputError(f"{field} is required", field=field)
        return None

    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number, got a boolean", field=field)

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = _STRIP_CHARS.sub("", value)
        if cleaned.endswith("%"):
            cleaned = cleaned[:-1]
        try:
            number = float(cleaned)
        except ValueError:
            raise InvalidInputError(f"{field} is not a number: {value!r}", field=field) from None
    else:
        raise InvalidInputError(
            f"{field} must be a number, got {type(value).__name__}", field=field
        )

    if math.isnan(number) or math.isinf(number):
        raise InvalidInputError(f"{field} must be finite", field=field)

    return number


def parse_int(value: Any, field: str, required: bool = True) -> Optional[int]:
    """parse_number, truncated to int (credit scores, month counts)"""
    number = parse_number(value, field, required=required)
    return None if number is None else int(number)


def parse_range(payload: Mapping[str, Any], key: str) -> Tuple[Optional[float], Optional[float]]:
    """
    Extract a (min, max) pair for ``key`` from a loosely shaped record.

    Recognised shapes, tried in order:
    - sibling fields ``minKey`` / ``maxKey`` (e.g. minInterestRate)
    - ``key`` holding {"min": .., "max": ..}
    - ``key`` holding a two-element list
    - ``key`` holding a string like "8.5 - 10.2"
    - ``key`` holding a scalar (min only)
    """
    suffix = key[0].upper() + key[1:]
    low = payload.get(f"min{suffix}")
    high = payload.get(f"max{suffix}")
    if low is not None or high is not None:
        return (
            parse_number(low, f"min{suffix}", required=False),
            parse_number(high, f"max{suffix}", required=False),
        )

    raw = payload.get(key)
    if raw is None:
        return None, None

    if isinstance(raw, Mapping):
        return (
            parse_number(raw.get("min"), f"{key}.min", required=False),
            parse_number(raw.get("max"), f"{key}.max", required=False),
        )

    if isinstance(raw, (list, tuple)):
        if not raw:
            return None, None
        low = parse_number(raw[0], f"{key}[0]", required=False)
        high = parse_number(raw[-1], f"{key}[-1]", required=False) if len(raw) > 1 else None
        return low, high

    if isinstance(raw, str):
        match = _RANGE_SPLIT.match(raw)
        # a leading minus is a sign, not a separator
        if match and not raw.strip().startswith("-"):
            return (
                parse_number(match.group(1), key, required=False),
                parse_number(match.group(2), key, required=False),
            )

    return parse_number(raw, key, required=False), None
