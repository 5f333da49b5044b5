"""Value types shared by requests and responses of the engine API."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from dockapi.jsonmaps import MalformedResponseError, require, string_list, string_map


def _text(data: Any, key: str) -> str:
    value = require(data, key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"field {key!r} must be a string, got {value!r}")
    return value


def _optional_text(data: Any, key: str) -> str | None:
    value = data.get(key) if isinstance(data, dict) else require(data, key)
    if value is not None and not isinstance(value, str):
        raise MalformedResponseError(f"field {key!r} must be a string, got {value!r}")
    return value


def _integer(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data


@dataclass(frozen=True)
class Tar:
    """The contents of a .tar file."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))


@dataclass
class PortBinding:
    """A host address and port that a container port is published on."""

    host_port: str
    host_ip: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.host_ip is not None:
            result["HostIP"] = self.host_ip
        result["HostPort"] = self.host_port
        return result

    @classmethod
    def from_dict(cls, data: Any) -> PortBinding:
        data = _object(data)
        return cls(host_port=_text(data, "HostPort"), host_ip=_optional_text(data, "HostIP"))


@dataclass
class ContainerIpamConfig:
    """Addresses a container is given on a network."""

    ipv4_address: str = ""
    ipv6_address: str | None = None
    link_local_ips: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ipv4_address = str(self.ipv4_address)
        if self.ipv6_address is not None:
            self.ipv6_address = str(self.ipv6_address)
        self.link_local_ips = [str(ip) for ip in self.link_local_ips]

    @classmethod
    def from_ipv4(cls, address: Any) -> ContainerIpamConfig:
        return cls(ipv4_address=str(address))

    def link_local_ip(self, value: Any) -> ContainerIpamConfig:
        """Add a link-local IP address."""
        self.link_local_ips.append(str(value))
        return self

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"IPv4Address": self.ipv4_address}
        if self.ipv6_address is not None:
            result["IPv6Address"] = self.ipv6_address
        if self.link_local_ips:
            result["LinkLocalIPs"] = list(self.link_local_ips)
        return result

    @classmethod
    def from_dict(cls, data: Any) -> ContainerIpamConfig:
        data = _object(data)
        return cls(
            ipv4_address=_text(data, "IPv4Address"),
            ipv6_address=_optional_text(data, "IPv6Address"),
            link_local_ips=string_list(data.get("LinkLocalIPs")),
        )


def _to_nanos(value: timedelta) -> int:
    return value // timedelta(microseconds=1) * 1000


def _from_nanos(data: dict, key: str) -> timedelta | None:
    value = data.get(key)
    if value is None:
        return None
    nanos = _integer(value, key)
    if nanos < 0:
        raise MalformedResponseError(f"field {key!r} must not be negative")
    return timedelta(microseconds=nanos // 1000)


@dataclass
class HealthCheck:
    """A container health check; the first entry of ``test`` has a special meaning."""

    test: list[str] = field(default_factory=list)
    interval: timedelta | None = None
    timeout: timedelta | None = None
    retries: int | None = None
    start_period: timedelta | None = None

    def __post_init__(self) -> None:
        self.test = [str(item) for item in self.test]
        for name in ("interval", "timeout", "start_period"):
            value = getattr(self, name)
            if value is not None and value < timedelta(0):
                raise ValueError(f"{name} must not be negative")
        if self.retries is not None and self.retries < 0:
            raise ValueError("retries must not be negative")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.test:
            result["Test"] = list(self.test)
        if self.interval is not None:
            result["Interval"] = _to_nanos(self.interval)
        if self.timeout is not None:
            result["Timeout"] = _to_nanos(self.timeout)
        if self.retries is not None:
            result["Retries"] = self.retries
        if self.start_period is not None:
            result["StartPeriod"] = _to_nanos(self.start_period)
        return result

    @classmethod
    def from_dict(cls, data: Any) -> HealthCheck:
        data = _object(data)
        test = require(data, "Test")
        if not isinstance(test, list):
            raise MalformedResponseError("field 'Test' must be an array")
        retries = data.get("Retries")
        if retries is not None:
            retries = _integer(retries, "Retries")
        return cls(
            test=string_list(test),
            interval=_from_nanos(data, "Interval"),
            timeout=_from_nanos(data, "Timeout"),
            retries=retries,
            start_period=_from_nanos(data, "StartPeriod"),
        )


class MountMode(enum.Enum):
    """Whether a bind mount is read-only or writable by the container."""

    READ_ONLY = "ro"
    WRITABLE = "rw"

    def __str__(self) -> str:
        return self.value


@dataclass
class NetworkIpamConfig:
    """One address range of a network."""

    subnet: str | None = None
    ip_range: str | None = None
    gateway: str | None = None
    aux_address: str | None = None

    _KEYS = (
        ("subnet", "Subnet"),
        ("ip_range", "IPRange"),
        ("gateway", "Gateway"),
        ("aux_address", "AuxAddress"),
    )

    def to_dict(self) -> dict[str, str]:
        return {
            key: getattr(self, name)
            for name, key in self._KEYS
            if getattr(self, name) is not None
        }

    @classmethod
    def from_dict(cls, data: Any) -> NetworkIpamConfig:
        data = _object(data)
        return cls(**{name: _optional_text(data, key) for name, key in cls._KEYS})


@dataclass
class NetworkIpam:
    """IP address management settings of a network."""

    driver: str | None = None
    config: list[NetworkIpamConfig] = field(default_factory=list)
    options: dict[str, str] = field(default_factory=dict)

    def add_config(self, config: NetworkIpamConfig) -> NetworkIpam:
        """Add a configuration; may be called more than once."""
        self.config.append(config)
        return self

    def option(self, key: str, value: str) -> NetworkIpam:
        """Add an option; may be called more than once."""
        self.options[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "Driver": self.driver,
            "Config": [item.to_dict() for item in self.config],
            "Options": dict(self.options),
        }

    @classmethod
    def from_dict(cls, data: Any) -> NetworkIpam:
        data = _object(data)
        configs = require(data, "Config")
        if not isinstance(configs, list):
            raise MalformedResponseError("field 'Config' must be an array")
        return cls(
            driver=_optional_text(data, "Driver"),
            config=[NetworkIpamConfig.from_dict(item) for item in configs],
            options=string_map(require(data, "Options")),
        )


@dataclass
class RegistryConfig:
    """An entry of the registry configuration map sent when building images."""

    username: str
    password: str

    def to_dict(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}


@dataclass
class RegistryAuth:
    """Credentials for Docker Hub or a private registry."""

    username: str = ""
    password: str = ""
    email: str | None = None
    server: str | None = None
    """Registry host name or address, without an http or https prefix."""

    def to_dict(self) -> dict[str, str]:
        result = {"username": self.username, "password": self.password}
        if self.email is not None:
            result["email"] = self.email
        if self.server is not None:
            result["serveraddress"] = self.server
        return result

    def as_config(self) -> dict[str, RegistryConfig]:
        """The registry configuration map, keyed by server; empty without a server."""
        if self.server is None:
            return {}
        return {self.server: RegistryConfig(self.username, self.password)}


@dataclass
class VolumeUsage:
    """Disk usage of a volume; both values may be negative when unknown."""

    size: int
    ref_count: int

    @classmethod
    def from_dict(cls, data: Any) -> VolumeUsage:
        data = _object(data)
        return cls(
            size=_integer(require(data, "Size"), "Size"),
            ref_count=_integer(require(data, "RefCount"), "RefCount"),
        )


@dataclass
class Volume:
    """A volume as reported by inspecting or listing volumes."""

    name: str
    driver: str
    mountpoint: str
    created_at: str
    scope: str
    status: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    options: dict[str, str] = field(default_factory=dict)
    usage_data: VolumeUsage | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Volume:
        data = _object(data)
        usage = data.get("UsageData")
        return cls(
            name=_text(data, "Name"),
            driver=_text(data, "Driver"),
            mountpoint=_text(data, "Mountpoint"),
            created_at=_text(data, "CreatedAt"),
            scope=_text(data, "Scope"),
            status=string_map(data.get("Status")),
            labels=string_map(require(data, "Labels")),
            options=string_map(require(data, "Options")),
            usage_data=None if usage is None else VolumeUsage.from_dict(usage),
        )