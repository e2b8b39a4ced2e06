"""Currency utilities — rupee formatting and static USD conversion."""

import math

# Static rate, refreshed by hand
USD_TO_INR: float = 83.0

RUPEE = "₹"


def convert_to_inr(amount_usd: float) -> int:
    """Convert a USD amount to whole rupees at the static rate."""
    return round(amount_usd * USD_TO_INR)


def group_indian(value: int) -> str:
    """Group digits the Indian way: last three, then pairs (12,34,567)."""
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs + [tail])


def format_inr(amount: float | int | str | None) -> str:
    """Format an amount as rupees, e.g. ``₹1,50,000``.

    None, NaN and anything non-numeric render as ``₹0``. Fractions are
    rounded to the nearest rupee.
    """
    if amount is None or isinstance(amount, bool):
        return f"{RUPEE}0"
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return f"{RUPEE}0"
    if math.isnan(value) or math.isinf(value):
        return f"{RUPEE}0"
    return f"{RUPEE}{group_indian(round(value))}"
