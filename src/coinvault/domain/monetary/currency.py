from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional

from coinvault.domain.item.item_stack import StackLike
from coinvault.domain.monetary.denomination import Denomination
from coinvault.domain.monetary.denomination_key import DenominationKey
from coinvault.domain.monetary.errors import CurrencyFrozenError, InvalidConfigurationError
from coinvault.domain.monetary.formatting import SEPARATOR, Breakdown, breakdown, render_breakdown, render_pattern
from coinvault.domain.monetary.valuation import DEFAULT_CONTAINER_MATERIALS, DEFAULT_MAX_CONTAINER_DEPTH, StackValuator
from coinvault.utils.numeric_tools import DecimalLike, as_decimal, round_half_up

logger = logging.getLogger(__name__)


def _to_cents(display_value: DecimalLike, unit: int) -> int:
    return round_half_up(as_decimal(display_value) * unit)


class Currency:
    """A denomination-based currency whose coins are physical items.

    All money is handled internally as integer "cents", the smallest currency unit. Display
    values (floats in whole currency units) appear only at the boundary: `to_cents` converts
    user input once, `to_display` and `format` produce output for humans.

    A Currency is created by `CurrencyBuilder.build` and never changes afterwards, so any
    number of threads may read it concurrently.

    Attributes:
        name (str): Currency name, singular.
        name_plural (str): Currency name, plural.
        digits (int): Fractional digits; the smallest amount is 10 ** -digits.
        unit (int): 10 ** digits, cents per whole currency unit.
        named_denominations (bool): Format amounts as a denomination breakdown.
        include_containers (bool): Value container items by their contents.
    """

    __slots__ = ("_name", "_name_plural", "_digits", "_unit", "_named_denominations", "_by_key", "_sorted_descending", "_valuator")

    def __init__(
        self,
        name: str,
        name_plural: str,
        digits: int,
        named_denominations: bool,
        denominations: Iterable[Denomination] = (),
        include_containers: bool = False,
        max_container_depth: int = DEFAULT_MAX_CONTAINER_DEPTH,
        container_materials: Iterable[str] = DEFAULT_CONTAINER_MATERIALS,
    ):
        """Initialize an immutable Currency. Prefer `CurrencyBuilder` for registration by display value.

        Raises:
            InvalidConfigurationError: If $digits < 0 or names are empty or $max_container_depth < 1.
        """
        _validate_currency_args(name, name_plural, digits)
        _validate_container_depth(max_container_depth)

        by_key: dict[DenominationKey, Denomination] = {}
        for denomination in denominations:
            by_key[denomination.key] = denomination

        self._name = name
        self._name_plural = name_plural
        self._digits = digits
        self._unit = 10**digits
        self._named_denominations = named_denominations
        self._by_key: Mapping[DenominationKey, Denomination] = MappingProxyType(by_key)
        self._sorted_descending: tuple[Denomination, ...] = tuple(sorted(by_key.values()))
        self._valuator = StackValuator(self._by_key, include_containers, max_container_depth, container_materials)

    # region Properties

    @property
    def name(self) -> str:
        return self._name

    @property
    def name_plural(self) -> str:
        return self._name_plural

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def unit(self) -> int:
        """Cents per whole currency unit. With unit 100, every cent is worth 0.01 currency units."""
        return self._unit

    @property
    def named_denominations(self) -> bool:
        return self._named_denominations

    @property
    def include_containers(self) -> bool:
        return self._valuator.include_containers

    @property
    def denominations(self) -> tuple[Denomination, ...]:
        """Denominations used in this currency, in order of descending value."""
        return self._sorted_descending

    @property
    def denominations_by_key(self) -> Mapping[DenominationKey, Denomination]:
        """Read-only view of denominations indexed by their key."""
        return self._by_key

    # endregion

    # region Valuation

    def value_of(self, stack: Optional[StackLike]) -> int:
        """Get the value of an item stack in cents.

        This is the denomination value times the stack quantity, or the summed value of the
        contents for containers when container valuation is enabled. Stacks that are not a
        denomination are worth 0.

        Raises:
            ArithmeticOverflowError: If the value leaves the storable cent range.
            ContainerDepthExceededError: If containers nest too deep or contain themselves.
        """
        return self._valuator.value_of(stack)

    def value_of_all(self, stacks: Iterable[Optional[StackLike]]) -> int:
        """Get the summed value in cents of all $stacks, e.g. every slot of a vault inventory."""
        return self._valuator.value_of_all(stacks)

    def denomination_of(self, stack: StackLike) -> Optional[Denomination]:
        """Return the denomination of $stack, or None if it is not a registered denomination."""
        return self._valuator.denomination_of(stack)

    # endregion

    # region Conversion

    def to_cents(self, display_value: DecimalLike) -> int:
        """Convert a display value into cents, rounding exact halves toward positive infinity.

        Rounding applies to the shortest decimal repr of a float, not to its binary value, so
        2.675 becomes 268 cents even though the nearest double lies slightly below 2.675.

        Raises:
            ValueError: If $display_value is NaN or infinite.
        """
        return _to_cents(display_value, self._unit)

    def to_display(self, cents: int) -> float:
        """Convert cents into a display value. Lossy for huge amounts; never feed it back into arithmetic."""
        return cents / self._unit

    # endregion

    # region Formatting

    def breakdown(self, cents: int) -> Breakdown:
        """Split $cents greedily into this currency's denominations, highest value first."""
        return breakdown(cents, self._sorted_descending)

    def format(self, pattern: str, display_value: float) -> str:
        """Format $display_value for humans.

        With named denominations the amount is broken down into coins ("3 Golds, 7 Silvers");
        any remainder no coin can represent, or a zero amount, is rendered through $pattern with
        the currency name. Otherwise $pattern is applied directly.

        Args:
            pattern: Two-slot printf template for amount and currency name, e.g. "%.2f %s".
            display_value: Amount in whole currency units.

        Returns:
            str: Human-readable amount, never empty.
        """
        if not self._named_denominations:
            return render_pattern(pattern, display_value, self._name, self._name_plural)

        cents = self.to_cents(display_value)
        sign = "-" if cents < 0 else ""
        result = self.breakdown(abs(cents))

        text = render_breakdown(result)
        if result.remainder > 0 or not text:
            remainder_text = render_pattern(pattern, self.to_display(result.remainder), self._name, self._name_plural)
            text = f"{text}{SEPARATOR}{remainder_text}" if text else remainder_text

        return f"{sign}{text}"

    def describe(self) -> str:
        """One line per denomination, highest value first."""
        return "\n".join(str(d) for d in self._sorted_descending)

    # endregion

    # region Magic

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._name}', '{self._name_plural}', {self._digits}, named_denominations={self._named_denominations}, denominations={len(self._by_key)})"

    # endregion


class CurrencyBuilder:
    """Collects denominations at start-up and produces an immutable `Currency`.

    Registration is meant to run once, serially, while the host loads its configuration.
    After `build` the builder refuses further use, so nothing can change the currency that
    readers already share.

    Example:
        >>> builder = CurrencyBuilder("Emerald", "Emeralds", digits=2, named_denominations=True)
        >>> builder.register(ItemStack("EMERALD_BLOCK"), 9, "Block", "Blocks")
        >>> builder.register(ItemStack("EMERALD"), 1, "Emerald", "Emeralds")
        >>> currency = builder.build()
        >>> currency.format("%.2f %s", 10.5)
        '1 Block, 1 Emerald, 0.50 Emeralds'
    """

    def __init__(
        self,
        name: str,
        name_plural: str,
        digits: int,
        named_denominations: bool,
        include_containers: bool = False,
        max_container_depth: int = DEFAULT_MAX_CONTAINER_DEPTH,
        container_materials: Iterable[str] = DEFAULT_CONTAINER_MATERIALS,
    ):
        """Initialize a builder.

        Raises:
            InvalidConfigurationError: If $digits < 0, names are empty or $max_container_depth < 1.
        """
        _validate_currency_args(name, name_plural, digits)
        _validate_container_depth(max_container_depth)

        self._name = name
        self._name_plural = name_plural
        self._digits = digits
        self._unit = 10**digits
        self._named_denominations = named_denominations
        self._include_containers = include_containers
        self._max_container_depth = max_container_depth
        self._container_materials = tuple(container_materials)
        self._by_key: dict[DenominationKey, Denomination] = {}
        self._sorted_descending: list[Denomination] = []
        self._built = False

    @property
    def denominations(self) -> tuple[Denomination, ...]:
        """Denominations registered so far, in order of descending value."""
        return tuple(self._sorted_descending)

    def register(self, item: StackLike, display_value: DecimalLike, unit_name: str, unit_name_plural: str) -> Denomination:
        """Add a denomination and its value to the currency.

        Registering the same item kind again replaces the earlier denomination.

        Args:
            item: Item stack describing the coin; only its kind matters.
            display_value: Worth of one item in whole currency units.
            unit_name: Display name for one item.
            unit_name_plural: Display name for several items.

        Returns:
            Denomination: The registered denomination.

        Raises:
            CurrencyFrozenError: If `build` was already called.
            InvalidConfigurationError: If $display_value is negative, not finite or worth less than one cent.
        """
        # Raise: the built currency is shared with readers and must not change
        if self._built:
            raise CurrencyFrozenError("Cannot call `register` because `build` was already called")

        cents = self._denomination_cents(display_value)
        key = DenominationKey.of(item)
        denomination = Denomination(key, cents, unit_name, unit_name_plural)

        previous = self._by_key.get(key)
        if previous is not None:
            logger.warning(f"Denomination for $key '{key}' registered again; replacing value {previous.value} with {cents}")

        self._by_key[key] = denomination
        # Registration is rare, so re-sorting the full set on every insert is fine
        self._sorted_descending = sorted(self._by_key.values())

        logger.debug(f"Registered denomination '{key}' worth {cents} cents ('{unit_name}'/'{unit_name_plural}')")
        return denomination

    def build(self) -> Currency:
        """Freeze the registered denominations into a `Currency`.

        Raises:
            CurrencyFrozenError: If `build` was already called.
        """
        # Raise: one builder produces exactly one currency
        if self._built:
            raise CurrencyFrozenError("Cannot call `build` because `build` was already called")

        self._built = True
        currency = Currency(
            name=self._name,
            name_plural=self._name_plural,
            digits=self._digits,
            named_denominations=self._named_denominations,
            denominations=self._sorted_descending,
            include_containers=self._include_containers,
            max_container_depth=self._max_container_depth,
            container_materials=self._container_materials,
        )
        logger.info(f"Built currency '{self._name}' with {len(self._by_key)} denomination(s), digits={self._digits}")
        return currency

    def _denomination_cents(self, display_value: DecimalLike) -> int:
        # Raise: only real numbers can be converted into cents
        if isinstance(display_value, bool):
            raise InvalidConfigurationError(f"$display_value must be a number, but provided value is: {display_value!r}")

        try:
            decimal_value = as_decimal(display_value)
        except (ArithmeticError, ValueError, TypeError) as e:
            raise InvalidConfigurationError(f"$display_value ({display_value!r}) cannot be converted to a number") from e

        # Raise: NaN and infinities cannot be worth a number of cents
        if not decimal_value.is_finite():
            raise InvalidConfigurationError(f"$display_value must be finite, but provided value is: {display_value}")

        # Raise: negative coins would destroy money
        if decimal_value < 0:
            raise InvalidConfigurationError(f"$display_value must be >= 0, but provided value is: {display_value}")

        cents = _to_cents(decimal_value, self._unit)

        # Raise: a coin worth zero cents cannot take part in the breakdown
        if cents <= 0:
            raise InvalidConfigurationError(f"$display_value ({display_value}) is worth {cents} cents with $digits={self._digits}; a denomination must be worth at least one cent")

        return cents


def _validate_currency_args(name: str, name_plural: str, digits: int) -> None:
    # Raise: names are shown to users and must be present
    if not isinstance(name, str) or not name.strip():
        raise InvalidConfigurationError(f"$name must be a non-empty string, but provided value is: {name!r}")
    if not isinstance(name_plural, str) or not name_plural.strip():
        raise InvalidConfigurationError(f"$name_plural must be a non-empty string, but provided value is: {name_plural!r}")

    # Raise: $digits defines the unit as a power of ten
    if not isinstance(digits, int) or isinstance(digits, bool) or digits < 0:
        raise InvalidConfigurationError(f"$digits must be a non-negative integer, but provided value is: {digits!r}")


def _validate_container_depth(max_container_depth: int) -> None:
    # Raise: container valuation needs at least one level to open
    if not isinstance(max_container_depth, int) or isinstance(max_container_depth, bool) or max_container_depth < 1:
        raise InvalidConfigurationError(f"$max_container_depth must be an integer >= 1, but provided value is: {max_container_depth!r}")
