from __future__ import annotations

from functools import total_ordering

from coinvault.domain.monetary.denomination_key import DenominationKey


@total_ordering
class Denomination:
    """A registered coin: an item kind worth a fixed number of cents.

    Denominations order by descending $value, so sorting a list of them puts the most
    valuable coin first. Equal values are ordered by $key to keep formatting deterministic.

    Attributes:
        key (DenominationKey): Item kind that counts as this coin.
        value (int): Worth of one item in cents, always > 0.
        unit_name (str): Display name for a single item.
        unit_name_plural (str): Display name for several items.
    """

    __slots__ = ("_key", "_value", "_unit_name", "_unit_name_plural")

    def __init__(self, key: DenominationKey, value: int, unit_name: str, unit_name_plural: str):
        """Initialize a Denomination.

        Raises:
            TypeError: If $key is not a DenominationKey or $value is not an int.
            ValueError: If $value <= 0.
        """
        # Raise: $key must be a DenominationKey
        if not isinstance(key, DenominationKey):
            raise TypeError(f"$key must be a DenominationKey instance, but provided value is: {key!r}")

        # Raise: $value must be an integer amount of cents
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"$value must be an int (cents), but provided value is: {value!r}")

        # Raise: a denomination worth nothing would break the greedy breakdown
        if value <= 0:
            raise ValueError(f"$value must be > 0, but provided value is: {value}")

        self._key = key
        self._value = value
        self._unit_name = unit_name
        self._unit_name_plural = unit_name_plural

    @property
    def key(self) -> DenominationKey:
        return self._key

    @property
    def value(self) -> int:
        return self._value

    @property
    def unit_name(self) -> str:
        return self._unit_name

    @property
    def unit_name_plural(self) -> str:
        return self._unit_name_plural

    def name_for(self, count: int) -> str:
        """Return the singular unit name for exactly one item, plural otherwise."""
        return self._unit_name if count == 1 else self._unit_name_plural

    def _order_key(self) -> tuple[int, tuple[str, str]]:
        return -self._value, self._key.sort_key()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Denomination):
            return False
        return (self._key, self._value, self._unit_name, self._unit_name_plural) == (other._key, other._value, other._unit_name, other._unit_name_plural)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Denomination):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash((self._key, self._value))

    def __str__(self) -> str:
        return f"{self._key}: {self._value}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._key!r}, {self._value}, '{self._unit_name}', '{self._unit_name_plural}')"
