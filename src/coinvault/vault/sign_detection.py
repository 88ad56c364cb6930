from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

# Matches sign lines like "[vault]" or "[town vault]"; group 1 is the vault type token
DEFAULT_VAULT_PATTERN: str = r"[^\[]*\[(\w*) ?vault\]"


class VaultType(Enum):
    """Owner kinds a vault can belong to."""

    PLAYER = "PLAYER"
    FACTION = "FACTION"
    TOWN = "TOWN"
    NATION = "NATION"
    REGION = "REGION"


@dataclass(frozen=True)
class VaultCreationRequest:
    """A marked sign that the host should turn into a vault.

    Attributes:
        vault_type: Owner kind parsed from the sign.
        first_line: The sign's first line as written.
    """

    vault_type: VaultType
    first_line: str


class VaultSignDetector:
    """Recognises vault marker signs.

    The configured pattern must match the whole first line of the sign, case-insensitively.
    Its first group names the vault type; an empty group means a player vault.
    """

    def __init__(self, pattern: str = DEFAULT_VAULT_PATTERN):
        """Compile $pattern.

        Raises:
            ValueError: If $pattern is not a valid regular expression or has no capture group.
        """
        try:
            self._pattern = re.compile(pattern, re.IGNORECASE | re.UNICODE)
        except re.error as e:
            raise ValueError(f"Cannot init `VaultSignDetector` because $pattern ('{pattern}') is not a valid regex: {e}") from e

        # Raise: the vault type is read from the first group
        if self._pattern.groups < 1:
            raise ValueError(f"Cannot init `VaultSignDetector` because $pattern ('{pattern}') has no capture group for the vault type")

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def parse_type(self, first_line: Optional[str]) -> Optional[VaultType]:
        """Return the vault type written on $first_line, or None if the line is not a vault marker."""
        if first_line is None:
            return None

        match = self._pattern.fullmatch(first_line)
        if match is None:
            return None

        token = (match.group(1) or "").upper()
        if not token:
            return VaultType.PLAYER

        try:
            return VaultType(token)
        except ValueError:
            logger.debug(f"Ignoring vault sign with unknown $token '{token}'")
            return None

    def detect(self, first_line: Optional[str], has_vault_block: bool) -> Optional[VaultCreationRequest]:
        """Decide whether a changed sign creates a vault.

        Args:
            first_line: Plain text of the sign's first line, or None if the line is empty.
            has_vault_block: Whether the host found a valid storage block attached to the sign.

        Returns:
            VaultCreationRequest | None: Request for the host to create the vault, or None.
        """
        vault_type = self.parse_type(first_line)
        if vault_type is None:
            return None

        if not has_vault_block:
            logger.debug(f"Vault sign '{first_line}' has no storage block attached")
            return None

        return VaultCreationRequest(vault_type=vault_type, first_line=first_line)
