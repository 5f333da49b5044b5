"""Responses of the engine that list containers, images and volumes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from dockapi.jsonmaps import MalformedResponseError, require, string_list, string_map
from dockapi.model import Volume
from dockapi.network_responses import NetworkSettings

_T = TypeVar("_T")

_PORT_MAX = 65535


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


def _text_or_empty(data: dict, key: str) -> str:
    """A string that may be absent, reading as empty; null is still an error."""
    if key not in data:
        return ""
    return _text(data, key)


def _optional_text(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedResponseError(f"field {key!r} must be a string, got {value!r}")
    return value


def _check_integer(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _integer(data: dict, key: str) -> int:
    return _check_integer(require(data, key), key)


def _optional_integer(data: dict, key: str) -> int | None:
    value = data.get(key)
    return None if value is None else _check_integer(value, key)


def _unsigned(data: dict, key: str) -> int:
    value = _integer(data, key)
    if value < 0:
        raise MalformedResponseError(f"field {key!r} must not be negative")
    return value


def _check_port(value: Any, key: str) -> int:
    port = _check_integer(value, key)
    if not 0 <= port <= _PORT_MAX:
        raise MalformedResponseError(f"field {key!r} is not a port number: {port}")
    return port


def _boolean(data: dict, key: str) -> bool:
    value = require(data, key)
    if not isinstance(value, bool):
        raise MalformedResponseError(f"field {key!r} must be a boolean, got {value!r}")
    return value


def _boolean_or_false(data: dict, key: str) -> bool:
    if key not in data:
        return False
    return _boolean(data, key)


def _array(data: dict, key: str) -> list:
    value = require(data, key)
    if not isinstance(value, list):
        raise MalformedResponseError(f"field {key!r} must be an array")
    return value


def _objects(data: dict, key: str, factory: Callable[[Any], _T]) -> list[_T]:
    return [factory(item) for item in _array(data, key)]


def _strict_string_map(data: dict, key: str) -> dict[str, str]:
    """A map of strings that must be present and must not be null."""
    value = require(data, key)
    if value is None:
        raise MalformedResponseError(f"field {key!r} must be a JSON object, got null")
    return string_map(value)


def _optional_object(
    data: dict, key: str, factory: Callable[[Any], _T]
) -> _T | None:
    value = data.get(key)
    return None if value is None else factory(value)


@dataclass
class BindOptions:
    """Options of a bind mount."""

    propagation: str
    non_recursive: bool

    @classmethod
    def from_dict(cls, data: Any) -> BindOptions:
        data = _object(data)
        return cls(
            propagation=_text(data, "Propagation"),
            non_recursive=_boolean(data, "NonRecursive"),
        )


@dataclass
class DriverConfig:
    """The volume driver of a mount and its options."""

    name: str
    options: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> DriverConfig:
        data = _object(data)
        return cls(
            name=_text(data, "Name"),
            options=_strict_string_map(data, "Options"),
        )


@dataclass
class TmpfsOptions:
    """Options of a tmpfs mount."""

    size_bytes: int
    mode: int

    @classmethod
    def from_dict(cls, data: Any) -> TmpfsOptions:
        data = _object(data)
        return cls(
            size_bytes=_integer(data, "SizeBytes"),
            mode=_integer(data, "Mode"),
        )


@dataclass
class VolumeOptions:
    """Options of a volume mount."""

    no_copy: bool
    driver_config: DriverConfig
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> VolumeOptions:
        data = _object(data)
        return cls(
            no_copy=_boolean(data, "NoCopy"),
            driver_config=DriverConfig.from_dict(require(data, "DriverConfig")),
            labels=_strict_string_map(data, "Labels"),
        )


@dataclass
class Mount:
    """A mount of a listed container."""

    source: str
    mount_type: str
    target: str | None = None
    read_only: bool = False
    consistency: str = ""
    bind_options: BindOptions | None = None
    volume_options: VolumeOptions | None = None
    tmpfs_options: TmpfsOptions | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Mount:
        data = _object(data)
        return cls(
            source=_text(data, "Source"),
            mount_type=_text(data, "Type"),
            target=_optional_text(data, "Target"),
            read_only=_boolean_or_false(data, "ReadOnly"),
            consistency=_text_or_empty(data, "Consistency"),
            bind_options=_optional_object(data, "BindOptions", BindOptions.from_dict),
            volume_options=_optional_object(
                data, "VolumeOptions", VolumeOptions.from_dict
            ),
            tmpfs_options=_optional_object(
                data, "TmpfsOptions", TmpfsOptions.from_dict
            ),
        )


@dataclass
class ListedContainerHostConfig:
    """Host settings of a listed container."""

    network_mode: str

    @classmethod
    def from_dict(cls, data: Any) -> ListedContainerHostConfig:
        return cls(network_mode=_text(_object(data), "NetworkMode"))


@dataclass
class PortMapping:
    """A container's exposed port and its published address, if any."""

    private_port: int
    port_type: str
    ip: str | None = None
    public_port: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PortMapping:
        data = _object(data)
        public_port = data.get("PublicPort")
        return cls(
            private_port=_check_port(require(data, "PrivatePort"), "PrivatePort"),
            port_type=_text(data, "Type"),
            ip=_optional_text(data, "IP"),
            public_port=(
                None if public_port is None else _check_port(public_port, "PublicPort")
            ),
        )


@dataclass
class ListedContainer:
    """A container as reported by listing containers."""

    id: str
    names: list[str]
    """Each name starts with a forward slash."""
    image: str
    image_id: str
    command: str
    created: int
    ports: list[PortMapping]
    labels: dict[str, str]
    state: str
    status: str
    host_config: ListedContainerHostConfig
    network_settings: NetworkSettings
    mounts: list[Mount]
    size_rw: int | None = None
    size_root_fs: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ListedContainer:
        data = _object(data)
        return cls(
            id=_text(data, "Id"),
            names=string_list(_array(data, "Names")),
            image=_text(data, "Image"),
            image_id=_text(data, "ImageID"),
            command=_text(data, "Command"),
            created=_unsigned(data, "Created"),
            ports=_objects(data, "Ports", PortMapping.from_dict),
            labels=_strict_string_map(data, "Labels"),
            state=_text(data, "State"),
            status=_text(data, "Status"),
            host_config=ListedContainerHostConfig.from_dict(require(data, "HostConfig")),
            network_settings=NetworkSettings.from_dict(require(data, "NetworkSettings")),
            mounts=_objects(data, "Mounts", Mount.from_dict),
            size_rw=_optional_integer(data, "SizeRW"),
            size_root_fs=_optional_integer(data, "SizeRootFS"),
        )


@dataclass
class ListedImage:
    """An image as reported by listing images."""

    id: str
    parent_id: str
    created: int
    """Creation time as seconds since the Unix epoch."""
    size: int
    shared_size: int
    virtual_size: int
    containers: int
    repo_tags: list[str] = field(default_factory=list)
    repo_digests: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ListedImage:
        data = _object(data)
        return cls(
            id=_text(data, "Id"),
            parent_id=_text(data, "ParentId"),
            created=_integer(data, "Created"),
            size=_integer(data, "Size"),
            shared_size=_integer(data, "SharedSize"),
            virtual_size=_integer(data, "VirtualSize"),
            containers=_integer(data, "Containers"),
            repo_tags=string_list(require(data, "RepoTags")),
            repo_digests=string_list(require(data, "RepoDigests")),
            labels=string_map(require(data, "Labels")),
        )


@dataclass
class ListVolumesResponse:
    """Volumes and warnings reported by listing volumes."""

    volumes: list[Volume] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ListVolumesResponse:
        data = _object(data)
        volumes = require(data, "Volumes")
        if volumes is None:
            volumes = []
        elif not isinstance(volumes, list):
            raise MalformedResponseError("field 'Volumes' must be an array")
        return cls(
            volumes=[Volume.from_dict(item) for item in volumes],
            warnings=string_list(require(data, "Warnings")),
        )


@dataclass
class PruneVolumesResponse:
    """The result of pruning unused volumes."""

    volumes_deleted: list[str]
    space_reclaimed_bytes: int

    @classmethod
    def from_dict(cls, data: Any) -> PruneVolumesResponse:
        data = _object(data)
        return cls(
            volumes_deleted=string_list(_array(data, "VolumesDeleted")),
            space_reclaimed_bytes=_unsigned(data, "SpaceReclaimed"),
        )