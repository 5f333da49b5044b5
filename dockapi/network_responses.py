"""Network details the engine reports for containers and for networks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dockapi.jsonmaps import MalformedResponseError, require, string_list, string_map
from dockapi.model import ContainerIpamConfig, NetworkIpam, PortBinding


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


def _empty_as_none(data: dict, key: str) -> str | None:
    return _optional_text(data, key) or None


def _integer(data: dict, key: str) -> int:
    value = require(data, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _boolean(data: dict, key: str) -> bool:
    value = require(data, key)
    if not isinstance(value, bool):
        raise MalformedResponseError(f"field {key!r} must be a boolean, got {value!r}")
    return value


def _optional_strings(data: dict, key: str) -> list[str] | None:
    value = data.get(key)
    return None if value is None else string_list(value)


def _object_field(data: dict, key: str) -> dict:
    value = require(data, key)
    if not isinstance(value, dict):
        raise MalformedResponseError(f"field {key!r} must be a JSON object")
    return value


def _port_map(value: Any) -> dict[str, list[PortBinding]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedResponseError("field 'Ports' must be a JSON object")
    result: dict[str, list[PortBinding]] = {}
    for port, bindings in value.items():
        if bindings is None:
            result[port] = []
        elif isinstance(bindings, list):
            result[port] = [PortBinding.from_dict(item) for item in bindings]
        else:
            raise MalformedResponseError(f"bindings of port {port!r} must be an array")
    return result


@dataclass
class Network:
    """A container's attachment to one network."""

    ipam_config: ContainerIpamConfig | None = None
    links: list[str] | None = None
    aliases: list[str] | None = None
    network_id: str = ""
    endpoint_id: str = ""
    gateway: str = ""
    ip_address: str = ""
    ip_prefix_len: int = 0
    ipv6_gateway: str = ""
    global_ipv6_address: str = ""
    global_ipv6_prefix_len: int = 0
    mac_address: str = ""
    driver_opts: dict[str, str] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Network:
        data = _object(data)
        ipam = data.get("IPAMConfig")
        driver_opts = data.get("DriverOpts")
        return cls(
            ipam_config=(
                None if ipam is None or ipam == {} else ContainerIpamConfig.from_dict(ipam)
            ),
            links=_optional_strings(data, "Links"),
            aliases=_optional_strings(data, "Aliases"),
            network_id=_text(data, "NetworkID"),
            endpoint_id=_text(data, "EndpointID"),
            gateway=_text(data, "Gateway"),
            ip_address=_text(data, "IPAddress"),
            ip_prefix_len=_integer(data, "IPPrefixLen"),
            ipv6_gateway=_text(data, "IPv6Gateway"),
            global_ipv6_address=_text(data, "GlobalIPv6Address"),
            global_ipv6_prefix_len=_integer(data, "GlobalIPv6PrefixLen"),
            mac_address=_text(data, "MacAddress"),
            driver_opts=None if driver_opts is None else string_map(driver_opts),
        )


@dataclass
class NetworkSettings:
    """Published ports and attached networks of a container."""

    ports: dict[str, list[PortBinding]] = field(default_factory=dict)
    networks: dict[str, Network] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> NetworkSettings:
        data = _object(data)
        networks = _object_field(data, "Networks")
        return cls(
            ports=_port_map(data.get("Ports")),
            networks={name: Network.from_dict(item) for name, item in networks.items()},
        )

    def first_ip_address(self) -> str | None:
        """The first non-empty IP address of any network, whatever its kind."""
        return next(
            (network.ip_address for network in self.networks.values() if network.ip_address),
            None,
        )


@dataclass
class InspectNetworkResponseContainer:
    """A container attached to an inspected network."""

    endpoint_id: str
    mac_address: str
    name: str | None = None
    ipv4_address: str | None = None
    ipv6_address: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> InspectNetworkResponseContainer:
        data = _object(data)
        return cls(
            endpoint_id=_text(data, "EndpointID"),
            mac_address=_text(data, "MacAddress"),
            name=_optional_text(data, "Name"),
            ipv4_address=_empty_as_none(data, "IPv4Address"),
            ipv6_address=_empty_as_none(data, "IPv6Address"),
        )


@dataclass
class InspectNetworkResponse:
    """A network as reported by inspecting it."""

    name: str
    id: str
    scope: str
    driver: str
    ipam: NetworkIpam
    internal: bool
    attachable: bool
    ingress: bool
    containers: dict[str, InspectNetworkResponseContainer] = field(default_factory=dict)
    options: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> InspectNetworkResponse:
        data = _object(data)
        containers = _object_field(data, "Containers")
        return cls(
            name=_text(data, "Name"),
            id=_text(data, "Id"),
            scope=_text(data, "Scope"),
            driver=_text(data, "Driver"),
            ipam=NetworkIpam.from_dict(require(data, "IPAM")),
            internal=_boolean(data, "Internal"),
            attachable=_boolean(data, "Attachable"),
            ingress=_boolean(data, "Ingress"),
            containers={
                key: InspectNetworkResponseContainer.from_dict(item)
                for key, item in containers.items()
            },
            options=string_map(data.get("Options")),
            labels=string_map(require(data, "Labels")),
        )


@dataclass
class CreateNetworkResponse:
    """The result of creating a network."""

    id: str
    warning: str

    @classmethod
    def from_dict(cls, data: Any) -> CreateNetworkResponse:
        data = _object(data)
        return cls(id=_text(data, "Id"), warning=_text(data, "Warning"))