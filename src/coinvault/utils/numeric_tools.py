from __future__ import annotations

from decimal import Decimal, ROUND_FLOOR
from typing import TypeAlias

from coinvault.domain.monetary.errors import ArithmeticOverflowError

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Largest amount of cents any valuation may produce (signed 64-bit range used by account storage)
MAX_CENTS: int = 2**63 - 1

_HALF = Decimal("0.5")


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def round_half_up(value: Decimal) -> int:
    """Round $value to the nearest integer; exact halves go toward positive infinity.

    Matches `floor(value + 0.5)`: 2.5 -> 3, -2.5 -> -2.

    Raises:
        ValueError: If $value is NaN or infinite.
    """
    # Raise: NaN and infinities have no integral value
    if not value.is_finite():
        raise ValueError(f"Cannot call `round_half_up` because $value ({value}) is not finite")

    return int((value + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def checked_multiply(cents: int, quantity: int) -> int:
    """Return $cents * $quantity, failing instead of leaving the storable cent range."""
    result = cents * quantity
    if abs(result) > MAX_CENTS:
        raise ArithmeticOverflowError(f"Cannot call `checked_multiply` because {cents} * {quantity} exceeds $MAX_CENTS ({MAX_CENTS})")
    return result


def checked_add(left: int, right: int) -> int:
    """Return $left + $right, failing instead of leaving the storable cent range."""
    result = left + right
    if abs(result) > MAX_CENTS:
        raise ArithmeticOverflowError(f"Cannot call `checked_add` because {left} + {right} exceeds $MAX_CENTS ({MAX_CENTS})")
    return result


# Note: No 'as_float' or 'as_int' functions are provided.
# Use the Python builtin functions like `float()`, `int()` directly for efficient conversion
