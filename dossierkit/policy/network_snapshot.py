"""Snapshot of the effective network posture at run time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from dossierkit.policy.allowlist import AllowlistEntry
from dossierkit.policy.types import NetworkMode, ProofLevel


@dataclass(frozen=True)
class AdapterEndpointSnapshot:
    """An adapter endpoint and whether it resolves to loopback."""

    endpoint: str
    is_loopback: bool
    validation_error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"endpoint": self.endpoint, "is_loopback": self.is_loopback}
        if self.validation_error is not None:
            data["validation_error"] = self.validation_error
        return data


@dataclass(frozen=True)
class NetworkSnapshot:
    """Network mode, proof level, allowlist and adapter endpoints in effect."""

    network_mode: NetworkMode
    proof_level: ProofLevel
    allowlist: list[AllowlistEntry] = field(default_factory=list)
    ui_remote_fetch_disabled: bool = True
    adapter_endpoints: list[AdapterEndpointSnapshot] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "network_mode": self.network_mode.value,
            "proof_level": self.proof_level.value,
            "allowlist": [entry.to_dict() for entry in self.allowlist],
            "ui_remote_fetch_disabled": self.ui_remote_fetch_disabled,
            "adapter_endpoints": [ep.to_dict() for ep in self.adapter_endpoints],
        }