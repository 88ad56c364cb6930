from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from coinvault.domain.monetary.denomination import Denomination

SEPARATOR: str = ", "


@dataclass(frozen=True)
class Breakdown:
    """Result of splitting a cent amount into denominations, highest value first.

    Attributes:
        parts: (denomination, count) pairs with count > 0, in descending denomination order.
        remainder: Cents left over that no denomination could represent.
    """

    parts: tuple[tuple[Denomination, int], ...]
    remainder: int

    @property
    def total(self) -> int:
        """Cents represented by $parts plus $remainder; always equals the input amount."""
        return sum(d.value * count for d, count in self.parts) + self.remainder


def breakdown(cents: int, denominations: Sequence[Denomination]) -> Breakdown:
    """Greedy split of $cents into $denominations.

    Args:
        cents: Non-negative amount in cents.
        denominations: Denominations sorted descending by value.

    Returns:
        Breakdown: Non-zero counts per denomination and the uncovered remainder.

    Raises:
        ValueError: If $cents is negative.
    """
    # Raise: greedy split is defined for non-negative amounts only
    if cents < 0:
        raise ValueError(f"Cannot call `breakdown` because $cents ({cents}) < 0")

    parts: list[tuple[Denomination, int]] = []
    remaining = cents
    for denomination in denominations:
        count, remaining = divmod(remaining, denomination.value)
        if count > 0:
            parts.append((denomination, count))

    return Breakdown(parts=tuple(parts), remainder=remaining)


def render_pattern(pattern: str, amount: float, name: str, name_plural: str) -> str:
    """Apply the two-slot printf $pattern (e.g. "%.2f %s") to $amount and the currency name.

    The singular $name is used for exactly 1.0, $name_plural otherwise.
    """
    return pattern % (amount, name if amount == 1.0 else name_plural)


def render_breakdown(result: Breakdown) -> str:
    """Render the denomination parts of $result as "3 Golds, 7 Silvers"."""
    return SEPARATOR.join(f"{count} {denomination.name_for(count)}" for denomination, count in result.parts)
