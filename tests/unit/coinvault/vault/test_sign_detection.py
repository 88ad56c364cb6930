import pytest

from coinvault.vault.sign_detection import VaultCreationRequest, VaultSignDetector, VaultType


@pytest.mark.parametrize(
    "first_line, expected",
    [
        ("[vault]", VaultType.PLAYER),
        ("[VAULT]", VaultType.PLAYER),
        ("[player vault]", VaultType.PLAYER),
        ("[Town Vault]", VaultType.TOWN),
        ("[factionvault]", VaultType.FACTION),
        ("my [nation vault]", VaultType.NATION),
    ],
)
def test_parse_type_of_vault_signs(first_line, expected):
    assert VaultSignDetector().parse_type(first_line) == expected


@pytest.mark.parametrize("first_line", [None, "", "vault", "[bank vault]", "[vault] extra", "[chest]"])
def test_non_vault_lines_are_ignored(first_line):
    assert VaultSignDetector().parse_type(first_line) is None


def test_detect_requires_vault_block():
    detector = VaultSignDetector()

    request = detector.detect("[town vault]", has_vault_block=True)
    assert request == VaultCreationRequest(vault_type=VaultType.TOWN, first_line="[town vault]")

    assert detector.detect("[town vault]", has_vault_block=False) is None
    assert detector.detect(None, has_vault_block=True) is None


def test_custom_pattern():
    detector = VaultSignDetector(r"<(\w*)bank>")

    assert detector.pattern == r"<(\w*)bank>"
    assert detector.detect("<bank>", True).vault_type == VaultType.PLAYER
    assert detector.detect("<REGIONbank>", True).vault_type == VaultType.REGION
    assert detector.detect("[vault]", True) is None


def test_invalid_patterns_are_rejected():
    with pytest.raises(ValueError, match="not a valid regex"):
        VaultSignDetector("([")

    with pytest.raises(ValueError, match="no capture group"):
        VaultSignDetector(r"\[vault\]")
