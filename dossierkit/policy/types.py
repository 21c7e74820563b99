"""Policy enumerations; each member's value is its wire name."""

from enum import Enum


class PolicyMode(str, Enum):
    """How strictly export gates are enforced."""

    STRICT = "STRICT"
    BALANCED = "BALANCED"
    DRAFT_ONLY = "DRAFT_ONLY"


class NetworkMode(str, Enum):
    """Whether outbound network access is permitted."""

    OFFLINE = "OFFLINE"
    ONLINE_ALLOWLISTED = "ONLINE_ALLOWLISTED"


class ProofLevel(str, Enum):
    """Strength of the evidence that egress was restricted."""

    OFFLINE_STRICT = "OFFLINE_STRICT"
    ONLINE_ALLOWLIST_CORE_ONLY = "ONLINE_ALLOWLIST_CORE_ONLY"
    ONLINE_ALLOWLIST_WITH_OS_FIREWALL_PROFILE = "ONLINE_ALLOWLIST_WITH_OS_FIREWALL_PROFILE"


class InputExportProfile(str, Enum):
    """Whether exported bundles carry input bytes or only their hashes."""

    HASH_ONLY = "HASH_ONLY"
    INCLUDE_INPUT_BYTES = "INCLUDE_INPUT_BYTES"