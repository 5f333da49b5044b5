"""Requests for creating and inspecting networks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dockapi.model import NetworkIpam


@dataclass
class CreateNetworkRequest:
    """Body of a network creation request."""

    name: str = ""
    check_duplicate: bool = True
    driver: str | None = None
    internal: bool | None = None
    attachable: bool | None = None
    ingress: bool | None = None
    ipam: NetworkIpam = field(default_factory=NetworkIpam)
    enable_ipv6: bool | None = None
    options: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    def option(self, key: str, value: str) -> CreateNetworkRequest:
        """Add a driver option; may be called more than once."""
        self.options[key] = value
        return self

    def label(self, key: str, value: str) -> CreateNetworkRequest:
        """Add a label; may be called more than once."""
        self.labels[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "CheckDuplicate": self.check_duplicate,
            "Driver": self.driver,
            "Internal": self.internal,
            "Attachable": self.attachable,
            "Ingress": self.ingress,
            "IPAM": self.ipam.to_dict(),
            "EnableIPv6": self.enable_ipv6,
            "Options": dict(self.options),
            "Labels": dict(self.labels),
        }


@dataclass
class InspectNetworkArgs:
    """Options for inspecting a network."""

    verbose: bool = False
    """Detailed inspect output for troubleshooting."""
    scope: str | None = None
    """Filter the network by scope: swarm, global or local."""