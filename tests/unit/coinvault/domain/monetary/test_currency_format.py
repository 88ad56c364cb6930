from __future__ import annotations

import pytest

from coinvault.domain.item.item_stack import ItemStack
from coinvault.domain.monetary.currency import CurrencyBuilder
from coinvault.domain.monetary.formatting import Breakdown, breakdown, render_breakdown, render_pattern
from tests.helpers.helper_currency import (
    EMERALD,
    EMERALD_BLOCK,
    PATTERN,
    create_coin_currency,
    create_emerald_currency,
    create_gold_silver_currency,
)


# region Conversion


def test_to_cents_and_to_display():
    currency = create_gold_silver_currency()

    assert currency.to_cents(3.07) == 307
    assert currency.to_cents(3) == 300
    assert currency.to_cents("12.34") == 1234
    assert currency.to_display(307) == 3.07
    assert currency.to_display(0) == 0.0


def test_to_cents_rounds_half_toward_positive_infinity():
    currency = create_gold_silver_currency()

    assert currency.to_cents(0.005) == 1
    assert currency.to_cents(0.004) == 0
    assert currency.to_cents(2.675) == 268
    assert currency.to_cents(-0.005) == 0
    assert currency.to_cents(-0.006) == -1


@pytest.mark.parametrize("digits", [0, 1, 2, 3])
def test_cents_round_trip_through_display(digits):
    """Every amount below one whole unit survives cents -> display -> cents unchanged."""
    currency = CurrencyBuilder("Crown", "Crowns", digits=digits, named_denominations=False).build()

    for cents in range(currency.unit):
        assert currency.to_cents(currency.to_display(cents)) == cents


def test_to_cents_rejects_non_finite():
    currency = create_gold_silver_currency()

    with pytest.raises(ValueError):
        currency.to_cents(float("nan"))
    with pytest.raises(ValueError):
        currency.to_cents(float("inf"))


# endregion

# region Named denominations


def test_whole_coins():
    currency = create_coin_currency()

    assert currency.format(PATTERN, 3.0) == "3 Coins"
    assert currency.format(PATTERN, 1.0) == "1 Coin"


def test_zero_renders_base_currency_amount():
    assert create_coin_currency().format(PATTERN, 0.0) == "0.00 Coins"
    assert create_gold_silver_currency().format(PATTERN, 0) == "0.00 Crowns"


def test_greedy_breakdown_over_several_denominations():
    currency = create_gold_silver_currency()

    assert currency.format(PATTERN, 3.07) == "3 Golds, 7 Silvers"
    assert currency.format(PATTERN, 1.01) == "1 Gold, 1 Silver"
    assert currency.format(PATTERN, 0.07) == "7 Silvers"
    assert currency.format(PATTERN, 12) == "12 Golds"


def test_remainder_is_rendered_with_currency_name():
    builder = CurrencyBuilder("Emerald", "Emeralds", digits=2, named_denominations=True)
    builder.register(EMERALD_BLOCK, 9, "Block", "Blocks")
    builder.register(EMERALD, 1, "Emerald", "Emeralds")
    currency = builder.build()

    assert currency.format(PATTERN, 10.5) == "1 Block, 1 Emerald, 0.50 Emeralds"
    assert currency.format(PATTERN, 0.25) == "0.25 Emeralds"
    assert currency.format(PATTERN, 18) == "2 Blocks"


def test_currency_without_denominations_uses_pattern():
    currency = CurrencyBuilder("Crown", "Crowns", digits=2, named_denominations=True).build()

    assert currency.format(PATTERN, 1.0) == "1.00 Crown"
    assert currency.format(PATTERN, 2.5) == "2.50 Crowns"


def test_negative_amount_is_prefixed():
    currency = create_gold_silver_currency()

    assert currency.format(PATTERN, -3.07) == "-3 Golds, 7 Silvers"


def test_equal_value_denominations_format_deterministically():
    builder = CurrencyBuilder("Crown", "Crowns", digits=2, named_denominations=True)
    builder.register(ItemStack("B_ITEM"), 1, "B", "Bs")
    builder.register(ItemStack("A_ITEM"), 1, "A", "As")
    currency = builder.build()

    assert currency.format(PATTERN, 2) == "2 As"


def test_breakdown_sums_to_original_amount():
    """Counts times values plus the remainder always give back the exact amount."""
    builder = CurrencyBuilder("Crown", "Crowns", digits=2, named_denominations=True)
    builder.register(ItemStack("A"), 9, "A", "As")
    builder.register(ItemStack("B"), 2.5, "B", "Bs")
    builder.register(ItemStack("C"), 0.07, "C", "Cs")
    currency = builder.build()

    for cents in range(0, 5000, 13):
        result = currency.breakdown(cents)
        assert result.total == cents
        assert sum(d.value * count for d, count in result.parts) + result.remainder == cents
        assert all(count > 0 for _, count in result.parts)
        assert 0 <= result.remainder < currency.denominations[-1].value


def test_breakdown_exposes_parts_and_remainder():
    currency = create_gold_silver_currency()
    gold, silver = currency.denominations

    result = currency.breakdown(307)

    assert isinstance(result, Breakdown)
    assert result.parts == ((gold, 3), (silver, 7))
    assert result.remainder == 0
    assert render_breakdown(result) == "3 Golds, 7 Silvers"
    assert render_breakdown(currency.breakdown(0)) == ""


def test_breakdown_rejects_negative_amount():
    with pytest.raises(ValueError, match="cents"):
        breakdown(-1, create_gold_silver_currency().denominations)


# endregion

# region Unnamed mode


def test_unnamed_mode_uses_singular_for_exactly_one():
    currency = create_coin_currency(named_denominations=False)

    assert currency.format("%.2f %s", 1.0) == "1.00 Coin"
    assert currency.format("%.2f %s", 2.5) == "2.50 Coins"
    assert currency.format("%.2f %s", 0.0) == "0.00 Coins"


def test_unnamed_mode_ignores_denominations():
    currency = create_emerald_currency()

    assert currency.format(PATTERN, 10.5) == "10.50 Emeralds"
    assert currency.format("%.0f %s", 9.0) == "9 Emeralds"


def test_render_pattern():
    assert render_pattern("%.2f %s", 1.0, "Coin", "Coins") == "1.00 Coin"
    assert render_pattern("%.0f %s", 3.0, "Coin", "Coins") == "3 Coins"


# endregion
