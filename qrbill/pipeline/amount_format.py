"""Utilities for formatting payment amounts."""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union


AmountInput = Union[Decimal, float, int, str]


def to_decimal(value: AmountInput) -> Decimal:
    """Convert an amount to Decimal without binary float noise.

    Floats go through their shortest repr, so 16.999 becomes Decimal("16.999").

    Raises:
        ValueError: If value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        result = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def format_amount(value: AmountInput) -> str:
    """Render an amount with exactly two decimals.

    Rules:
    - Extra decimals are cut off, not rounded (16.999 -> "16.99")
    - One decimal is padded with a zero (5.5 -> "5.50")
    - No decimals get ".00" appended (5 -> "5.00")

    Raises:
        ValueError: If value is not a finite number
    """
    text = format(to_decimal(value), "f")
    whole, _, decimals = text.partition(".")
    decimals = (decimals + "00")[:2]
    return f"{whole}.{decimals}"


def parse_amount(text: Optional[str]) -> Optional[Decimal]:
    """Parse an amount line; empty or unreadable text yields None."""
    if text is None or not text.strip():
        return None
    try:
        return to_decimal(text)
    except ValueError:
        return None
