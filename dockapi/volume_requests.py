"""Requests for creating volumes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CreateVolumeRequest:
    """Body of a volume creation request."""

    name: str | None = None
    driver: str | None = None
    driver_opts: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    def driver_opt(self, key: str, value: str) -> CreateVolumeRequest:
        """Add a driver option; may be called more than once."""
        self.driver_opts[key] = value
        return self

    def label(self, key: str, value: str) -> CreateVolumeRequest:
        """Add a label; may be called more than once."""
        self.labels[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name is not None:
            result["Name"] = self.name
        if self.driver is not None:
            result["Driver"] = self.driver
        if self.driver_opts:
            result["DriverOpts"] = dict(self.driver_opts)
        if self.labels:
            result["Labels"] = dict(self.labels)
        return result