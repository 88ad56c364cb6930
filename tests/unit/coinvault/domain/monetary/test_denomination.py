import pytest

from coinvault.domain.item.item_stack import ItemStack
from coinvault.domain.monetary.denomination import Denomination
from coinvault.domain.monetary.denomination_key import DenominationKey


def test_key_ignores_quantity_and_case():
    """Stacks of the same kind of item map to equal keys with equal hashes."""
    a = DenominationKey.of(ItemStack("GOLD_INGOT", 5))
    b = DenominationKey.of(ItemStack("gold_ingot", 1))

    assert a == b
    assert hash(a) == hash(b)
    assert str(a) == "GOLD_INGOT"


def test_key_distinguishes_variants():
    plain = DenominationKey.of(ItemStack("GOLD_INGOT"))
    crown = DenominationKey.of(ItemStack("GOLD_INGOT", variant="Crown"))

    assert plain != crown
    assert str(crown) == "GOLD_INGOT[Crown]"
    assert {plain: 1, crown: 2}[DenominationKey("gold_ingot", "Crown")] == 2


def test_denominations_sort_by_descending_value():
    silver = Denomination(DenominationKey("IRON_NUGGET"), 1, "Silver", "Silvers")
    gold = Denomination(DenominationKey("GOLD_INGOT"), 100, "Gold", "Golds")
    ten = Denomination(DenominationKey("GOLD_NUGGET"), 10, "Ten", "Tens")

    assert sorted([silver, gold, ten]) == [gold, ten, silver]


def test_equal_values_are_ordered_by_key():
    """Ties are broken by key so the greedy breakdown is deterministic."""
    b = Denomination(DenominationKey("B_ITEM"), 100, "B", "Bs")
    a = Denomination(DenominationKey("A_ITEM"), 100, "A", "As")
    a_variant = Denomination(DenominationKey("A_ITEM", "x"), 100, "Ax", "Axs")

    assert sorted([b, a_variant, a]) == [a, a_variant, b]
    assert sorted([a, b, a_variant]) == [a, a_variant, b]


def test_name_for_count():
    gold = Denomination(DenominationKey("GOLD_INGOT"), 100, "Gold", "Golds")

    assert gold.name_for(1) == "Gold"
    assert gold.name_for(2) == "Golds"
    assert gold.name_for(0) == "Golds"
    assert str(gold) == "GOLD_INGOT: 100"


def test_denomination_validation():
    key = DenominationKey("GOLD_INGOT")

    with pytest.raises(ValueError, match="> 0"):
        Denomination(key, 0, "Gold", "Golds")

    with pytest.raises(TypeError):
        Denomination(key, 1.5, "Gold", "Golds")

    with pytest.raises(TypeError):
        Denomination("GOLD_INGOT", 100, "Gold", "Golds")
