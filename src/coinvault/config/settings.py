from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

from coinvault.domain.item.item_stack import ItemStack
from coinvault.domain.monetary.currency import Currency, CurrencyBuilder
from coinvault.domain.monetary.errors import InvalidConfigurationError
from coinvault.domain.monetary.valuation import DEFAULT_MAX_CONTAINER_DEPTH
from coinvault.vault.sign_detection import DEFAULT_VAULT_PATTERN, VaultSignDetector

logger = logging.getLogger(__name__)

ENV_PREFIX = "COINVAULT_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DenominationSettings:
    """One configured coin.

    Attributes:
        material (str): Item type of the coin, e.g. "GOLD_INGOT".
        value (float): Worth of one item in whole currency units.
        unit_name (str): Display name for one item.
        unit_name_plural (str): Display name for several items.
        variant (str | None): Optional host variant discriminator.
    """

    material: str
    value: float
    unit_name: str
    unit_name_plural: str
    variant: Optional[str] = None


@dataclass(frozen=True)
class CurrencySettings:
    """Immutable settings handed to the currency engine at start-up."""

    name: str = "Emerald"
    name_plural: str = "Emeralds"
    digits: int = 2
    named_denominations: bool = False
    include_containers: bool = False
    max_container_depth: int = DEFAULT_MAX_CONTAINER_DEPTH
    vault_pattern: str = DEFAULT_VAULT_PATTERN
    denominations: tuple[DenominationSettings, ...] = field(default_factory=tuple)


def load_settings(config: Mapping[str, Any]) -> CurrencySettings:
    """Build `CurrencySettings` from a parsed configuration mapping (e.g. the plugin's config.yml).

    Recognised keys:
        currency.name.singular, currency.name.plural, currency.digits,
        currency.named-denominations, includeshulkerboxes, max-container-depth,
        vault-pattern, denominations (list of {material, variant, value, unit-name, unit-name-plural}).

    Missing keys fall back to the `CurrencySettings` defaults.

    Raises:
        InvalidConfigurationError: If a value has the wrong type or a denomination entry is incomplete.
    """
    defaults = CurrencySettings()
    currency_section = _section(config, "currency")
    name_section = _section(currency_section, "name")

    settings = CurrencySettings(
        name=str(name_section.get("singular", defaults.name)),
        name_plural=str(name_section.get("plural", defaults.name_plural)),
        digits=_as_int("currency.digits", currency_section.get("digits", defaults.digits)),
        named_denominations=_as_bool("currency.named-denominations", currency_section.get("named-denominations", defaults.named_denominations)),
        include_containers=_as_bool("includeshulkerboxes", config.get("includeshulkerboxes", defaults.include_containers)),
        max_container_depth=_as_int("max-container-depth", config.get("max-container-depth", defaults.max_container_depth)),
        vault_pattern=str(config.get("vault-pattern", defaults.vault_pattern)),
        denominations=tuple(_denomination(i, entry) for i, entry in enumerate(config.get("denominations") or ())),
    )
    logger.debug(f"Loaded currency settings for '{settings.name}' with {len(settings.denominations)} denomination(s)")
    return settings


def load_settings_from_env(
    denominations: Iterable[DenominationSettings] = (),
    dotenv_path: Optional[str] = None,
) -> CurrencySettings:
    """Build `CurrencySettings` from `COINVAULT_*` environment variables.

    A `.env` file is loaded first (existing environment variables win). Denominations are
    structured data and are passed in by the caller.

    Variables:
        COINVAULT_CURRENCY_NAME, COINVAULT_CURRENCY_NAME_PLURAL, COINVAULT_DIGITS,
        COINVAULT_NAMED_DENOMINATIONS, COINVAULT_INCLUDE_CONTAINERS,
        COINVAULT_MAX_CONTAINER_DEPTH, COINVAULT_VAULT_PATTERN
    """
    load_dotenv(dotenv_path=dotenv_path)
    defaults = CurrencySettings()

    def env(name: str) -> Optional[str]:
        return os.environ.get(f"{ENV_PREFIX}{name}")

    return CurrencySettings(
        name=env("CURRENCY_NAME") or defaults.name,
        name_plural=env("CURRENCY_NAME_PLURAL") or defaults.name_plural,
        digits=_as_int("COINVAULT_DIGITS", env("DIGITS") or defaults.digits),
        named_denominations=_as_bool("COINVAULT_NAMED_DENOMINATIONS", env("NAMED_DENOMINATIONS") or defaults.named_denominations),
        include_containers=_as_bool("COINVAULT_INCLUDE_CONTAINERS", env("INCLUDE_CONTAINERS") or defaults.include_containers),
        max_container_depth=_as_int("COINVAULT_MAX_CONTAINER_DEPTH", env("MAX_CONTAINER_DEPTH") or defaults.max_container_depth),
        vault_pattern=env("VAULT_PATTERN") or defaults.vault_pattern,
        denominations=tuple(denominations),
    )


def build_currency(settings: CurrencySettings) -> Currency:
    """Register every configured denomination and return the frozen `Currency`.

    Raises:
        InvalidConfigurationError: If the currency or any denomination is misconfigured.
    """
    builder = CurrencyBuilder(
        name=settings.name,
        name_plural=settings.name_plural,
        digits=settings.digits,
        named_denominations=settings.named_denominations,
        include_containers=settings.include_containers,
        max_container_depth=settings.max_container_depth,
    )
    for denomination in settings.denominations:
        item = ItemStack(material=denomination.material, variant=denomination.variant)
        builder.register(item, denomination.value, denomination.unit_name, denomination.unit_name_plural)

    return builder.build()


def build_vault_detector(settings: CurrencySettings) -> VaultSignDetector:
    """Compile the configured vault sign pattern.

    Raises:
        InvalidConfigurationError: If $vault_pattern is not a usable regular expression.
    """
    try:
        return VaultSignDetector(settings.vault_pattern)
    except ValueError as e:
        raise InvalidConfigurationError(f"'vault-pattern' is invalid: {e}") from e


def _section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = config.get(key) or {}
    # Raise: nested sections must be mappings
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError(f"Config section '{key}' must be a mapping, but provided value is: {value!r}")
    return value


def _denomination(index: int, entry: Any) -> DenominationSettings:
    # Raise: each denomination is a mapping with the required keys
    if not isinstance(entry, Mapping):
        raise InvalidConfigurationError(f"denominations[{index}] must be a mapping, but provided value is: {entry!r}")

    missing = [key for key in ("material", "value") if key not in entry]
    if missing:
        raise InvalidConfigurationError(f"denominations[{index}] is missing required key(s): {missing}")

    try:
        value = float(entry["value"])
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"denominations[{index}].value ({entry['value']!r}) is not a number") from e

    material = str(entry["material"])
    unit_name = str(entry.get("unit-name") or material.lower())
    variant = entry.get("variant")
    return DenominationSettings(
        material=material,
        value=value,
        unit_name=unit_name,
        unit_name_plural=str(entry.get("unit-name-plural") or f"{unit_name}s"),
        variant=str(variant) if variant is not None else None,
    )


def _as_int(key: str, value: Any) -> int:
    # Raise: booleans are ints in Python but never a valid count
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"'{key}' must be an integer, but provided value is: {value!r}")
    # Raise: int() would silently truncate a fractional count
    if isinstance(value, float) and not value.is_integer():
        raise InvalidConfigurationError(f"'{key}' must be an integer, but provided value is: {value!r}")

    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"'{key}' must be an integer, but provided value is: {value!r}") from e


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise InvalidConfigurationError(f"'{key}' must be a boolean, but provided value is: {value!r}")
