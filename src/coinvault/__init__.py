__version__ = "0.1.0"

from coinvault.domain.item.item_stack import ItemStack, Material
from coinvault.domain.monetary.currency import Currency, CurrencyBuilder
from coinvault.domain.monetary.denomination import Denomination
from coinvault.domain.monetary.denomination_key import DenominationKey

__all__ = ["Currency", "CurrencyBuilder", "Denomination", "DenominationKey", "ItemStack", "Material"]
