from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Optional

from coinvault.domain.item.item_stack import Material, StackLike, is_empty_stack
from coinvault.domain.monetary.denomination import Denomination
from coinvault.domain.monetary.denomination_key import DenominationKey
from coinvault.domain.monetary.errors import ContainerDepthExceededError
from coinvault.utils.numeric_tools import checked_add, checked_multiply

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_MATERIALS: frozenset[str] = frozenset({Material.SHULKER_BOX})
DEFAULT_MAX_CONTAINER_DEPTH: int = 8


class StackValuator:
    """Computes the worth of item stacks in cents.

    Containers are unwrapped recursively when $include_containers is enabled: a container is
    worth the sum of its contents and its own denomination (if any) is ignored. Recursion is
    bounded by $max_depth; a container found again on its own nesting path is a cycle and is
    rejected the same way. Unknown item kinds are worth 0.

    Every multiplication and sum is checked against `MAX_CENTS`.
    """

    __slots__ = ("_denominations_by_key", "_include_containers", "_container_materials", "_max_depth")

    def __init__(
        self,
        denominations_by_key: Mapping[DenominationKey, Denomination],
        include_containers: bool,
        max_depth: int = DEFAULT_MAX_CONTAINER_DEPTH,
        container_materials: Iterable[str] = DEFAULT_CONTAINER_MATERIALS,
    ):
        # Raise: at least the outermost container must be openable
        if max_depth < 1:
            raise ValueError(f"$max_depth must be >= 1, but provided value is: {max_depth}")

        self._denominations_by_key = denominations_by_key
        self._include_containers = include_containers
        self._container_materials = frozenset(Material.normalize(m) for m in container_materials)
        self._max_depth = max_depth

    @property
    def include_containers(self) -> bool:
        return self._include_containers

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def is_container(self, stack: StackLike) -> bool:
        """True when $stack is a container whose contents count as money."""
        return self._include_containers and Material.normalize(stack.material) in self._container_materials

    def denomination_of(self, stack: StackLike) -> Optional[Denomination]:
        return self._denominations_by_key.get(DenominationKey.of(stack))

    def value_of(self, stack: Optional[StackLike]) -> int:
        """Return the worth of $stack in cents.

        Raises:
            ArithmeticOverflowError: If the value leaves the storable cent range.
            ContainerDepthExceededError: If containers nest deeper than $max_depth or contain themselves.
        """
        return self._value_of(stack, depth=0, path=())

    def value_of_all(self, stacks: Iterable[Optional[StackLike]]) -> int:
        """Return the summed worth of $stacks (e.g. all slots of an inventory) in cents."""
        total = 0
        for stack in stacks:
            total = checked_add(total, self._value_of(stack, depth=0, path=()))
        return total

    def _value_of(self, stack: Optional[StackLike], depth: int, path: tuple[int, ...]) -> int:
        if is_empty_stack(stack):
            return 0

        if self.is_container(stack):
            return self._value_of_container(stack, depth, path)

        denomination = self.denomination_of(stack)
        if denomination is None:
            logger.debug(f"No denomination for $stack '{stack.material}' (variant {stack.variant!r}); valued at 0")
            return 0

        return checked_multiply(denomination.value, stack.quantity)

    def _value_of_container(self, stack: StackLike, depth: int, path: tuple[int, ...]) -> int:
        # Raise: a container reachable from itself would never finish unwrapping
        if id(stack) in path:
            raise ContainerDepthExceededError(f"Cannot call `value_of` because container '{stack.material}' contains itself")

        # Raise: nesting limit guards against runaway recursion
        if depth >= self._max_depth:
            raise ContainerDepthExceededError(f"Cannot call `value_of` because container nesting exceeds $max_depth ({self._max_depth})")

        contents = stack.contents
        if not contents:
            return 0

        inner_path = path + (id(stack),)
        total = 0
        for content in contents:
            total = checked_add(total, self._value_of(content, depth + 1, inner_path))
        return total
