"""
Resource quantity parsing.

Capacities and requests are carried as plain integers (bytes for storage).
Text quantities such as "5Gi", "10G", "1.5Ti", "500m" or "1e3" are converted
here, rounding fractional results up to the next whole unit.
"""

import math
import re
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Union

BINARY_SUFFIXES = {
    "Ki": 2 ** 10,
    "Mi": 2 ** 20,
    "Gi": 2 ** 30,
    "Ti": 2 ** 40,
    "Pi": 2 ** 50,
    "Ei": 2 ** 60,
}

DECIMAL_SUFFIXES = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?P<suffix>[eE][+-]?\d+|[KMGTPE]i|[numkMGTPE]?)$"
)


def _non_negative(result: int, value) -> int:
    if result < 0:
        raise ValueError(f"Quantity must not be negative: {value!r}")
    return result


def parse_quantity(value: Union[str, int, float]) -> int:
    """
    Convert a resource quantity to a non-negative integer value.

    Args:
        value: Quantity text ("5Gi", "100M", "2e3") or a number

    Returns:
        Integer value, rounded up when the quantity is fractional

    Raises:
        ValueError: malformed, out of range or negative quantity
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, int):
        return _non_negative(value, value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Invalid quantity: {value!r}")
        return _non_negative(math.ceil(value), value)

    text = str(value).strip()
    match = _QUANTITY_RE.match(text)
    if not match:
        raise ValueError(f"Invalid quantity: {value!r}")

    suffix = match.group("suffix")
    try:
        number = Decimal(match.group("number"))
        if suffix in BINARY_SUFFIXES:
            scaled = number * BINARY_SUFFIXES[suffix]
        elif suffix[:1] in ("e", "E") and len(suffix) > 1:
            scaled = number.scaleb(int(suffix[1:]))
        else:
            scaled = number * DECIMAL_SUFFIXES[suffix]
        result = int(scaled.to_integral_value(rounding=ROUND_CEILING))
    except (InvalidOperation, ArithmeticError) as exc:
        raise ValueError(f"Invalid quantity: {value!r}") from exc

    return _non_negative(result, value)
