"""
Conversions between integer cents and display amounts.

Amounts are kept as integer cents everywhere; these helpers are only used
at the presentation boundary.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union


def format_cents(cents: int) -> str:
    """
    Format cents as a US dollar string.

    Args:
        cents: Amount in cents (e.g., 25000)

    Returns:
        Formatted currency string (e.g., "$250.00", "-$47.00")
    """
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(int(cents)), 100)
    return f"{sign}${dollars:,}.{remainder:02d}"


def dollars_to_cents(dollars: Union[Decimal, int, float, str]) -> int:
    """
    Convert a dollar amount to cents, rounding half up.

    Floats are converted through ``str`` so 19.99 becomes 1999, not 1998.
    """
    amount = Decimal(str(dollars)) * 100
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> Decimal:
    """Convert cents to a two-place Decimal dollar amount."""
    return (Decimal(int(cents)) / 100).quantize(Decimal("0.01"))
