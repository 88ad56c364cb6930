from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from coinvault.domain.item.item_stack import Material, StackLike


@dataclass(frozen=True)
class DenominationKey:
    """Identity of a denomination: which kind of item counts as which coin.

    Two stacks of "the same kind of object" map to equal keys. Quantity and container
    contents never take part in the identity.

    Attributes:
        material (str): Item type, upper case.
        variant (str | None): Host variant discriminator. None matches only plain items.
    """

    material: str
    variant: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "material", Material.normalize(self.material))

    @classmethod
    def of(cls, stack: StackLike) -> DenominationKey:
        """Classify $stack into its denomination key."""
        return cls(material=stack.material, variant=stack.variant)

    def sort_key(self) -> tuple[str, str]:
        """Stable ordering used to break ties between equally valued denominations."""
        return self.material, self.variant or ""

    def __str__(self) -> str:
        if self.variant is None:
            return self.material
        return f"{self.material}[{self.variant}]"
