"""Indian-locale currency and range formatting for presentation"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.domain.parsing import parse_number

NOT_AVAILABLE = "N/A"
RUPEE = "₹"

LAKH = 100_000
CRORE = 10_000_000


def _group_indian(digits: str) -> str:
    """12345678 -> 1,23,45,678 (last three digits, then pairs)"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def _to_decimal(number: float) -> Decimal:
    return Decimal(repr(number))


def _trim(value: Decimal) -> str:
    """Two decimal places, trailing zeros dropped: 1.50 -> 1.5, 2.00 -> 2"""
    text = f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_currency(amount: Any) -> str:
    """
    Render an amount as whole rupees with Indian digit grouping.

    None -> "N/A"; 1234567 -> "₹12,34,567"; halves round away from zero.
    """
    if amount is None:
        return NOT_AVAILABLE

    number = parse_number(amount, "amount")
    rounded = _to_decimal(number).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{RUPEE}{_group_indian(str(abs(int(rounded))))}"


def format_indian_abbreviated(amount: Any) -> str:
    """
    Express large sums in crore / lakh.

    Examples:
        10000000 -> "₹1 Cr"
        12500000 -> "₹1.25 Cr"
        150000   -> "₹1.5 Lac"
        50000    -> "₹50,000"
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return NOT_AVAILABLE

    number = parse_number(amount, "amount")
    if number == 0:
        return NOT_AVAILABLE

    magnitude = abs(number)
    sign = "-" if number < 0 else ""

    in_lakh = (_to_decimal(magnitude) / LAKH).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    # 99.995 lakh and up displays as crore, never as "100 Lac"
    if magnitude >= CRORE or in_lakh >= 100:
        return f"{sign}{RUPEE}{_trim(_to_decimal(magnitude) / CRORE)} Cr"
    if magnitude >= LAKH:
        return f"{sign}{RUPEE}{_trim(_to_decimal(magnitude) / LAKH)} Lac"

    return format_currency(number)


def _render_bound(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    number = _to_decimal(parse_number(value, "range bound"))
    if number == number.to_integral_value():
        return str(int(number))
    return f"{number.normalize():f}"


def _same_bound(low: Any, high: Any) -> bool:
    try:
        return parse_number(low, "min") == parse_number(high, "max")
    except InvalidInputError:
        # preformatted text such as "₹5 Lac"
        return _render_bound(low) == _render_bound(high)


def format_range(min_value: Any, max_value: Any = None, suffix: str = "", style: str = "upto") -> str:
    """
    Render a band such as an interest-rate range or an age window.

    A missing or equal ``max_value`` is the single-value case:
    ``style="start"`` gives "Starting from 8%", anything else "upto 8%".
    Bounds may be numbers or already formatted strings.
    """
    if min_value is None:
        return NOT_AVAILABLE

    low = _render_bound(min_value)
    if max_value is None or _same_bound(min_value, max_value):
        if style == "start":
            return f"Starting from {low}{suffix}"
        return f"upto {low}{suffix}"

    return f"{low}{suffix} - {_render_bound(max_value)}{suffix}"
