"""Requests and arguments for creating, running and controlling containers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from dockapi.jsonmaps import unit_map
from dockapi.model import ContainerIpamConfig, HealthCheck, MountMode, PortBinding


def _strings(values: Any) -> list[str]:
    return [str(item) for item in values]


@dataclass
class EndpointConfig:
    """How a container is attached to one network."""

    ipam_config: ContainerIpamConfig = field(default_factory=ContainerIpamConfig)

    @classmethod
    def from_ipv4(cls, address: Any) -> EndpointConfig:
        """An endpoint that gives the container a fixed IPv4 address."""
        return cls(ipam_config=ContainerIpamConfig.from_ipv4(address))

    def to_dict(self) -> dict[str, Any]:
        return {"IPAMConfig": self.ipam_config.to_dict()}


@dataclass
class HostConfig:
    """Host-side settings of a container: mounts, ports, capabilities and so on."""

    binds: list[str] = field(default_factory=list)
    cap_add: list[str] = field(default_factory=list)
    network_mode: str | None = None
    port_bindings: dict[str, list[PortBinding]] = field(default_factory=dict)
    privileged: bool = False
    sysctls: dict[str, str] = field(default_factory=dict)
    auto_remove: bool = False

    def _bind(
        self, container_port: str, host_ip: str | None, host_port: str
    ) -> HostConfig:
        binding = PortBinding(host_port=str(host_port), host_ip=host_ip)
        self.port_bindings.setdefault(str(container_port), []).append(binding)
        return self

    def bind_ip(self, container_port: str, host_ip: Any, host_port: str) -> HostConfig:
        """Publish a container port on a host address and port."""
        return self._bind(container_port, str(host_ip), host_port)

    def bind_port(self, container_port: str, host_port: str) -> HostConfig:
        """Publish a container port on a host port of every host address."""
        return self._bind(container_port, None, host_port)

    def add_capability(self, capability: str) -> HostConfig:
        """Add a kernel capability to the container."""
        self.cap_add.append(capability)
        return self

    def mount(
        self, host_path: str, container_path: str, mode: MountMode
    ) -> HostConfig:
        """Bind a host path into the container."""
        self.binds.append(f"{host_path}:{container_path}:{mode}")
        return self

    def sysctl(self, key: str, value: str) -> HostConfig:
        """Set a kernel parameter inside the container."""
        self.sysctls[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.binds:
            result["Binds"] = list(self.binds)
        if self.cap_add:
            result["CapAdd"] = list(self.cap_add)
        if self.network_mode is not None:
            result["NetworkMode"] = self.network_mode
        if self.port_bindings:
            result["PortBindings"] = {
                port: [binding.to_dict() for binding in bindings]
                for port, bindings in self.port_bindings.items()
            }
        result["Privileged"] = self.privileged
        if self.sysctls:
            result["Sysctls"] = dict(self.sysctls)
        result["AutoRemove"] = self.auto_remove
        return result


@dataclass
class NetworkingConfig:
    """The networks a container is attached to when it is created."""

    endpoints_config: dict[str, EndpointConfig] = field(default_factory=dict)

    def endpoint(self, network: str, config: EndpointConfig) -> NetworkingConfig:
        """Attach the container to a network with the given endpoint settings."""
        self.endpoints_config[network] = config
        return self

    def to_dict(self) -> dict[str, Any]:
        if not self.endpoints_config:
            return {}
        return {
            "EndpointsConfig": {
                network: config.to_dict()
                for network, config in self.endpoints_config.items()
            }
        }


@dataclass
class CreateContainerRequest:
    """Body of a container creation request; ``name`` travels in the query string."""

    name: str | None = None
    hostname: str | None = None
    domain_name: str | None = None
    user: str | None = None
    attach_stdin: bool | None = None
    attach_stdout: bool | None = None
    attach_stderr: bool | None = None
    exposed_ports: set[str] = field(default_factory=set)
    tty: bool | None = None
    open_stdin: bool | None = None
    stdin_once: bool | None = None
    env: list[str] = field(default_factory=list)
    cmd: list[str] = field(default_factory=list)
    health_check: HealthCheck | None = None
    args_escaped: bool | None = None
    """Only meaningful on Windows."""
    image: str | None = None
    volumes: set[str] = field(default_factory=set)
    working_dir: str | None = None
    entry_point: list[str] = field(default_factory=list)
    network_disabled: bool | None = None
    mac_address: str | None = None
    on_build: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)
    stop_signal: str | None = None
    stop_timeout_seconds: int | None = None
    """Whole seconds; a timedelta is accepted and truncated to seconds."""
    shell: list[str] = field(default_factory=list)
    host_config: HostConfig | None = None
    networking_config: NetworkingConfig | None = None

    def __post_init__(self) -> None:
        self.exposed_ports = {str(port) for port in self.exposed_ports}
        self.volumes = {str(path) for path in self.volumes}
        self.env = _strings(self.env)
        self.cmd = _strings(self.cmd)
        self.entry_point = _strings(self.entry_point)
        self.on_build = _strings(self.on_build)
        self.shell = _strings(self.shell)
        if isinstance(self.stop_timeout_seconds, timedelta):
            self.stop_timeout_seconds = int(self.stop_timeout_seconds.total_seconds())
        if self.stop_timeout_seconds is not None and self.stop_timeout_seconds < 0:
            raise ValueError("stop timeout must not be negative")

    def expose_port(self, port: str) -> CreateContainerRequest:
        """Expose a container port, such as ``"80/tcp"``."""
        self.exposed_ports.add(str(port))
        return self

    def add_env(self, value: str) -> CreateContainerRequest:
        """Append an environment variable in ``NAME=value`` form."""
        self.env.append(str(value))
        return self

    def volume(self, path: str) -> CreateContainerRequest:
        """Add a volume, either a path or a named volume."""
        self.volumes.add(str(path))
        return self

    def label(self, key: str, value: str) -> CreateContainerRequest:
        """Add user-defined key/value metadata."""
        self.labels[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        entries: list[tuple[str, Any]] = [
            ("Hostname", self.hostname),
            ("Domainname", self.domain_name),
            ("User", self.user),
            ("AttachStdin", self.attach_stdin),
            ("AttachStdout", self.attach_stdout),
            ("AttachStderr", self.attach_stderr),
            ("ExposedPorts", unit_map(sorted(self.exposed_ports)) or None),
            ("Tty", self.tty),
            ("OpenStdin", self.open_stdin),
            ("StdinOnce", self.stdin_once),
            ("Env", list(self.env) or None),
            ("Cmd", list(self.cmd) or None),
            (
                "Healthcheck",
                None if self.health_check is None else self.health_check.to_dict(),
            ),
            ("ArgsEscaped", self.args_escaped),
            ("Image", self.image),
            ("Volumes", unit_map(sorted(self.volumes)) or None),
            ("WorkingDir", self.working_dir),
            ("Entrypoint", list(self.entry_point) or None),
            ("NetworkDisabled", self.network_disabled),
            ("MacAddress", self.mac_address),
            ("OnBuild", list(self.on_build) or None),
            ("Labels", dict(self.labels) or None),
            ("StopSignal", self.stop_signal),
            ("StopTimeout", self.stop_timeout_seconds),
            ("Shell", list(self.shell) or None),
            (
                "HostConfig",
                None if self.host_config is None else self.host_config.to_dict(),
            ),
            (
                "NetworkingConfig",
                None
                if self.networking_config is None
                else self.networking_config.to_dict(),
            ),
        ]
        return {key: value for key, value in entries if value is not None}


@dataclass
class CreateExecRequest:
    """Body of a request to create a command to run in a container."""

    cmd: list[str] = field(default_factory=list)
    user: str = ""
    attach_stderr: bool = False
    attach_stdin: bool = False
    attach_stdout: bool = False

    def __post_init__(self) -> None:
        self.cmd = _strings(self.cmd)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"Cmd": list(self.cmd)}
        if self.user:
            result["User"] = self.user
        result["AttachStderr"] = self.attach_stderr
        result["AttachStdin"] = self.attach_stdin
        result["AttachStdout"] = self.attach_stdout
        return result


@dataclass
class ExecStartRequest:
    """Body of a request to start a created exec instance."""

    detach: bool = False
    tty: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {"Detach": self.detach, "Tty": self.tty}


@dataclass
class InspectContainerArgs:
    """Options for inspecting a container."""

    size: bool | None = None
    """Report the container sizes in ``size_rw`` and ``size_root_fs``."""


@dataclass
class LogsArgs:
    """Which streams of a container's log to fetch."""

    stdout: bool = True
    stderr: bool = True
    timestamps: bool = False


@dataclass
class RemoveContainerArgs:
    """Options for removing a container."""

    force: bool | None = None
    remove_link: bool | None = None
    remove_volumes: bool | None = None


class WaitCondition(enum.Enum):
    """What to wait for when waiting on a container."""

    NOT_RUNNING = "not-running"
    """Not supported by Docker on Windows."""
    NEXT_EXIT = "next-exit"
    """Wait until the container next exits, after being started if stopped."""
    REMOVED = "removed"
    """Wait until the container no longer exists."""