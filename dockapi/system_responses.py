"""Responses of the engine about image builds and the engine version."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dockapi.jsonmaps import MalformedResponseError, require


def _object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def _text(data: dict, key: str) -> str:
    value = require(data, key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"field {key!r} must be a string, got {value!r}")
    return value


def _optional_text(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedResponseError(f"field {key!r} must be a string, got {value!r}")
    return value


@dataclass
class BuildImageResponseStreamItemErrorDetail:
    """Details of an error reported during an image build."""

    message: str

    @classmethod
    def from_dict(cls, data: Any) -> BuildImageResponseStreamItemErrorDetail:
        return cls(message=_text(_object(data), "message"))


@dataclass
class BuildImageResponseStreamItem:
    """One item of the progress stream of an image build."""

    stream: str | None = None
    error_detail: BuildImageResponseStreamItemErrorDetail | None = None
    error: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> BuildImageResponseStreamItem:
        data = _object(data)
        detail = data.get("errorDetail")
        return cls(
            stream=_optional_text(data, "stream"),
            error_detail=(
                None
                if detail is None
                else BuildImageResponseStreamItemErrorDetail.from_dict(detail)
            ),
            error=_optional_text(data, "error"),
        )

    def has_error(self) -> bool:
        """True when the item reports an error or error details."""
        return self.error is not None or self.error_detail is not None


@dataclass
class Platform:
    """The platform the engine runs on."""

    name: str

    @classmethod
    def from_dict(cls, data: Any) -> Platform:
        return cls(name=_text(_object(data), "Name"))


@dataclass
class Component:
    """A component of the engine and its version."""

    name: str
    version: str
    details: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> Component:
        data = _object(data)
        return cls(
            name=_text(data, "Name"),
            version=_text(data, "Version"),
            details=require(data, "Details"),
        )


@dataclass
class VersionResponse:
    """Version information of the engine."""

    platform: Platform
    version: str
    api_version: str
    min_api_version: str
    git_commit: str
    go_version: str
    os: str
    arch: str
    kernel_version: str
    build_time: str
    components: list[Component] = field(default_factory=list)
    experimental: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> VersionResponse:
        data = _object(data)
        components = require(data, "Components")
        if not isinstance(components, list):
            raise MalformedResponseError("field 'Components' must be an array")
        experimental = data.get("Experimental", False)
        if not isinstance(experimental, bool):
            raise MalformedResponseError(
                f"field 'Experimental' must be a boolean, got {experimental!r}"
            )
        return cls(
            platform=Platform.from_dict(require(data, "Platform")),
            version=_text(data, "Version"),
            api_version=_text(data, "ApiVersion"),
            min_api_version=_text(data, "MinAPIVersion"),
            git_commit=_text(data, "GitCommit"),
            go_version=_text(data, "GoVersion"),
            os=_text(data, "Os"),
            arch=_text(data, "Arch"),
            kernel_version=_text(data, "KernelVersion"),
            build_time=_text(data, "BuildTime"),
            components=[Component.from_dict(item) for item in components],
            experimental=experimental,
        )