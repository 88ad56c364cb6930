from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Protocol


class Material:
    """Item-type tokens the currency engine needs to recognise.

    Any other material string is an ordinary item type that may or may not be a denomination.
    """

    AIR = "AIR"
    SHULKER_BOX = "SHULKER_BOX"

    @staticmethod
    def normalize(material: str) -> str:
        """Return $material in the canonical upper-case form used for comparisons."""
        return material.strip().upper()


class StackLike(Protocol):
    """Shape of a host item stack that the engine can value.

    Host inventories may hand their own objects to the engine as long as they expose these attributes.
    """

    @property
    def material(self) -> str: ...

    @property
    def variant(self) -> Optional[str]: ...

    @property
    def quantity(self) -> int: ...

    @property
    def contents(self) -> Optional[Sequence[Optional[StackLike]]]: ...


def is_empty_stack(stack: Optional[StackLike]) -> bool:
    """True for a missing stack, air, or a stack holding no items."""
    return stack is None or Material.normalize(stack.material) == Material.AIR or stack.quantity == 0


@dataclass(frozen=True)
class ItemStack:
    """A stack of identical items, optionally a container holding further stacks.

    Attributes:
        material (str): Item type, e.g. "GOLD_INGOT". Normalized to upper case.
        quantity (int): Number of items in the stack.
        variant (str | None): Host-specific variant discriminator (custom name, model data, ...).
        contents (tuple | None): Stacks held by a container item. Empty slots are None.
            Non-container items keep this None.
    """

    material: str
    quantity: int = 1
    variant: Optional[str] = None
    contents: Optional[tuple[Optional[ItemStack], ...]] = None

    def __post_init__(self) -> None:
        """Validate and normalize the stack.

        Raises:
            TypeError: If $material is not a string.
            ValueError: If $material is empty or $quantity is negative.
        """
        # Raise: $material must be a string to classify the item
        if not isinstance(self.material, str):
            raise TypeError(f"$material must be a string, but provided value is: {self.material!r}")

        # Raise: $material must be non-empty
        if not self.material.strip():
            raise ValueError("$material must be a non-empty string, but provided value is: ''")

        # Raise: $quantity must be a non-negative integer
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool) or self.quantity < 0:
            raise ValueError(f"$quantity must be a non-negative integer, but provided value is: {self.quantity!r}")

        # Bypass frozen dataclass to store normalized values
        object.__setattr__(self, "material", Material.normalize(self.material))
        if self.contents is not None and not isinstance(self.contents, tuple):
            object.__setattr__(self, "contents", tuple(self.contents))

    @property
    def is_empty(self) -> bool:
        """True for air or a stack with no items."""
        return is_empty_stack(self)

    @classmethod
    def container(cls, contents: Sequence[Optional[ItemStack]], material: str = Material.SHULKER_BOX, variant: Optional[str] = None) -> ItemStack:
        """Create a single container item holding $contents."""
        return cls(material=material, quantity=1, variant=variant, contents=tuple(contents))

    def __str__(self) -> str:
        suffix = f"[{self.variant}]" if self.variant is not None else ""
        return f"{self.quantity}x{self.material}{suffix}"
