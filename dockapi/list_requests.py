"""Requests for listing containers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Filters:
    """Filters for listing containers, sent as JSON in a query parameter."""

    labels: dict[str, str | None] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """True when no filter is set."""
        return not self.labels

    def label_present(self, key: str) -> Filters:
        """Require a label to be present, whatever its value."""
        self.labels[key] = None
        return self

    def label_value(self, key: str, value: str) -> Filters:
        """Require a label to be present with a specific value."""
        self.labels[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": [
                key if value is None else f"{key}={value}"
                for key, value in self.labels.items()
            ]
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


@dataclass
class ListContainersRequest:
    """Options for listing containers."""

    all: bool | None = None
    limit: int | None = None
    size: bool | None = None
    filters: Filters = field(default_factory=Filters)

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must not be negative")