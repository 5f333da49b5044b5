"""Responses of the engine about containers and the commands run in them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, TypeVar

from dockapi.jsonmaps import (
    MalformedResponseError,
    key_set_map,
    require,
    string_list,
    string_map,
)
from dockapi.model import HealthCheck
from dockapi.network_responses import NetworkSettings

_T = TypeVar("_T")


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


def _check_integer(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _integer(data: dict, key: str) -> int:
    return _check_integer(require(data, key), key)


def _optional_integer(data: dict, key: str) -> int | None:
    value = data.get(key)
    return None if value is None else _check_integer(value, key)


def _boolean(data: dict, key: str) -> bool:
    value = require(data, key)
    if not isinstance(value, bool):
        raise MalformedResponseError(f"field {key!r} must be a boolean, got {value!r}")
    return value


def _optional_boolean(data: dict, key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise MalformedResponseError(f"field {key!r} must be a boolean, got {value!r}")
    return value


def _array(data: dict, key: str) -> list:
    value = require(data, key)
    if not isinstance(value, list):
        raise MalformedResponseError(f"field {key!r} must be an array")
    return value


def _strings(data: dict, key: str) -> list[str]:
    return string_list(_array(data, key))


def _objects(data: dict, key: str, factory: Callable[[Any], _T]) -> list[_T]:
    return [factory(item) for item in _array(data, key)]


@dataclass
class GraphDriver:
    """The storage driver of a container and its settings."""

    name: str = ""
    data: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> GraphDriver:
        data = _object(data)
        return cls(name=_text(data, "Name"), data=string_map(require(data, "Data")))


@dataclass
class HealthCheckResult:
    """One run of a container's health check."""

    start: str = ""
    end: str = ""
    exit_code: int = 0
    output: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> HealthCheckResult:
        data = _object(data)
        return cls(
            start=_text(data, "Start"),
            end=_text(data, "End"),
            exit_code=_integer(data, "ExitCode"),
            output=_text(data, "Output"),
        )


@dataclass
class Health:
    """Health status of a container with a health check."""

    status: str = ""
    failing_streak: int = 0
    log: list[HealthCheckResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Health:
        data = _object(data)
        return cls(
            status=_text(data, "Status"),
            failing_streak=_integer(data, "FailingStreak"),
            log=_objects(data, "Log", HealthCheckResult.from_dict),
        )


@dataclass
class State:
    """Run state of a container."""

    status: str = ""
    running: bool = False
    paused: bool = False
    restarting: bool = False
    oom_killed: bool = False
    dead: bool = False
    pid: int = 0
    exit_code: int = 0
    started_at: str = ""
    finished_at: str = ""
    health: Health | None = None

    @classmethod
    def from_dict(cls, data: Any) -> State:
        data = _object(data)
        health = data.get("Health")
        return cls(
            status=_text(data, "Status"),
            running=_boolean(data, "Running"),
            paused=_boolean(data, "Paused"),
            restarting=_boolean(data, "Restarting"),
            oom_killed=_boolean(data, "OOMKilled"),
            dead=_boolean(data, "Dead"),
            pid=_integer(data, "Pid"),
            exit_code=_integer(data, "ExitCode"),
            started_at=_text(data, "StartedAt"),
            finished_at=_text(data, "FinishedAt"),
            health=None if health is None else Health.from_dict(health),
        )


@dataclass
class MountPoint:
    """A mount of an inspected container."""

    mount_type: str = ""
    name: str | None = None
    source: str = ""
    destination: str = ""
    driver: str | None = None
    mode: str = ""
    rw: bool = False
    propagation: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> MountPoint:
        data = _object(data)
        return cls(
            mount_type=_text(data, "Type"),
            name=_optional_text(data, "Name"),
            source=_text(data, "Source"),
            destination=_text(data, "Destination"),
            driver=_optional_text(data, "Driver"),
            mode=_text(data, "Mode"),
            rw=_boolean(data, "RW"),
            propagation=_text(data, "Propagation"),
        )


@dataclass
class InspectedContainerHostConfig:
    """Host settings of an inspected container."""

    network_mode: str = ""
    privileged: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> InspectedContainerHostConfig:
        data = _object(data)
        return cls(
            network_mode=_text(data, "NetworkMode"),
            privileged=_boolean(data, "Privileged"),
        )


@dataclass
class InspectedContainerConfig:
    """Configuration of an inspected container."""

    hostname: str | None = None
    domain_name: str = ""
    user: str = ""
    attach_stdin: bool = False
    attach_stdout: bool = False
    attach_stderr: bool = False
    exposed_ports: dict[str, dict] = field(default_factory=dict)
    tty: bool = False
    open_stdin: bool = False
    stdin_once: bool = False
    env: list[str] = field(default_factory=list)
    cmd: list[str] = field(default_factory=list)
    health_check: HealthCheck | None = None
    image: str | None = None
    volumes: dict[str, dict] = field(default_factory=dict)
    working_dir: str = ""
    entry_point: list[str] = field(default_factory=list)
    network_disabled: bool | None = None
    mac_address: str | None = None
    on_build: list[str] = field(default_factory=list)
    """Not always present for images built with buildkit."""
    labels: dict[str, str] = field(default_factory=dict)
    stop_signal: str | None = None
    stop_timeout_seconds: int | None = None
    shell: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> InspectedContainerConfig:
        data = _object(data)
        health_check = data.get("Healthcheck")
        stop_timeout = _optional_integer(data, "StopTimeout")
        if stop_timeout is not None and stop_timeout < 0:
            raise MalformedResponseError("field 'StopTimeout' must not be negative")
        return cls(
            hostname=_optional_text(data, "Hostname"),
            domain_name=_text(data, "Domainname"),
            user=_text(data, "User"),
            attach_stdin=_boolean(data, "AttachStdin"),
            attach_stdout=_boolean(data, "AttachStdout"),
            attach_stderr=_boolean(data, "AttachStderr"),
            exposed_ports=key_set_map(data.get("ExposedPorts")),
            tty=_boolean(data, "Tty"),
            open_stdin=_boolean(data, "OpenStdin"),
            stdin_once=_boolean(data, "StdinOnce"),
            env=string_list(require(data, "Env")),
            cmd=string_list(require(data, "Cmd")),
            health_check=None if health_check is None else HealthCheck.from_dict(health_check),
            image=_optional_text(data, "Image"),
            volumes=key_set_map(data.get("Volumes")),
            working_dir=_text(data, "WorkingDir"),
            entry_point=string_list(require(data, "Entrypoint")),
            network_disabled=_optional_boolean(data, "NetworkDisabled"),
            mac_address=_optional_text(data, "MacAddress"),
            on_build=string_list(data.get("OnBuild")),
            labels=string_map(require(data, "Labels")),
            stop_signal=_optional_text(data, "StopSignal"),
            stop_timeout_seconds=stop_timeout,
            shell=string_list(data.get("Shell")),
        )


@dataclass
class InspectContainerResponse:
    """Everything the engine reports when a container is inspected."""

    id: str = ""
    created: str = ""
    path: str = ""
    args: list[str] = field(default_factory=list)
    state: State = field(default_factory=State)
    image: str = ""
    resolv_conf_path: str = ""
    hostname_path: str = ""
    hosts_path: str = ""
    log_path: str = ""
    name: str = ""
    restart_count: int = 0
    driver: str = ""
    platform: str = ""
    mount_label: str = ""
    process_label: str = ""
    app_armor_profile: str = ""
    exec_ids: list[str] = field(default_factory=list)
    host_config: InspectedContainerHostConfig = field(
        default_factory=InspectedContainerHostConfig
    )
    graph_driver: GraphDriver = field(default_factory=GraphDriver)
    size_rw: int | None = None
    size_root_fs: int | None = None
    mounts: list[MountPoint] = field(default_factory=list)
    config: InspectedContainerConfig = field(default_factory=InspectedContainerConfig)
    network_settings: NetworkSettings = field(default_factory=NetworkSettings)

    @classmethod
    def from_dict(cls, data: Any) -> InspectContainerResponse:
        data = _object(data)
        return cls(
            id=_text(data, "Id"),
            created=_text(data, "Created"),
            path=_text(data, "Path"),
            args=_strings(data, "Args"),
            state=State.from_dict(require(data, "State")),
            image=_text(data, "Image"),
            resolv_conf_path=_text(data, "ResolvConfPath"),
            hostname_path=_text(data, "HostnamePath"),
            hosts_path=_text(data, "HostsPath"),
            log_path=_text(data, "LogPath"),
            name=_text(data, "Name"),
            restart_count=_integer(data, "RestartCount"),
            driver=_text(data, "Driver"),
            platform=_text(data, "Platform"),
            mount_label=_text(data, "MountLabel"),
            process_label=_text(data, "ProcessLabel"),
            app_armor_profile=_text(data, "AppArmorProfile"),
            exec_ids=string_list(require(data, "ExecIDs")),
            host_config=InspectedContainerHostConfig.from_dict(require(data, "HostConfig")),
            graph_driver=GraphDriver.from_dict(require(data, "GraphDriver")),
            size_rw=_optional_integer(data, "SizeRw"),
            size_root_fs=_optional_integer(data, "SizeRootFs"),
            mounts=_objects(data, "Mounts", MountPoint.from_dict),
            config=InspectedContainerConfig.from_dict(require(data, "Config")),
            network_settings=NetworkSettings.from_dict(require(data, "NetworkSettings")),
        )

    def first_ip_address(self) -> str | None:
        """The first non-empty IP address of any network the container is on."""
        return self.network_settings.first_ip_address()


@dataclass
class CreateContainerResponse:
    """The result of creating a container."""

    id: str
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CreateContainerResponse:
        data = _object(data)
        return cls(id=_text(data, "Id"), warnings=string_list(require(data, "Warnings")))


@dataclass
class ErrorResponse:
    """The JSON body that accompanies an error status from the engine."""

    message: str

    @classmethod
    def from_dict(cls, data: Any) -> ErrorResponse:
        return cls(message=_text(_object(data), "message"))

    def __str__(self) -> str:
        return self.message


@dataclass
class WaitResponse:
    """The result of waiting on a container."""

    exit_code: int
    """Process exit code of the container; on Windows it can exceed 32 bits."""
    error: str | None = None
    """Message of the container waiting error, if any."""

    @classmethod
    def from_dict(cls, data: Any) -> WaitResponse:
        data = _object(data)
        error = data.get("Error")
        return cls(
            exit_code=_integer(data, "StatusCode"),
            error=None if error is None else ErrorResponse.from_dict(error).message,
        )


@dataclass
class TopResponse:
    """The processes running in a container, as a table."""

    titles: list[str] = field(default_factory=list)
    processes: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> TopResponse:
        data = _object(data)
        processes = _array(data, "Processes")
        for row in processes:
            if not isinstance(row, list):
                raise MalformedResponseError("each process must be an array")
        return cls(
            titles=_strings(data, "Titles"),
            processes=[string_list(row) for row in processes],
        )


@dataclass(frozen=True)
class FileSystemChangeKind:
    """How a path changed in a container; unknown codes are kept as they are."""

    code: int

    MODIFIED: ClassVar[FileSystemChangeKind]
    ADDED: ClassVar[FileSystemChangeKind]
    DELETED: ClassVar[FileSystemChangeKind]

    _NAMES: ClassVar[dict[int, str]] = {0: "modified", 1: "added", 2: "deleted"}

    @classmethod
    def from_int(cls, value: int) -> FileSystemChangeKind:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"change kind must be an integer, got {value!r}")
        return cls(value)

    @property
    def is_other(self) -> bool:
        """True for a code the engine documentation does not define."""
        return self.code not in self._NAMES

    def __str__(self) -> str:
        return self._NAMES.get(self.code, f"other {self.code}")


FileSystemChangeKind.MODIFIED = FileSystemChangeKind(0)
FileSystemChangeKind.ADDED = FileSystemChangeKind(1)
FileSystemChangeKind.DELETED = FileSystemChangeKind(2)


@dataclass
class FileSystemChange:
    """A path that changed in a container's filesystem."""

    path: str
    kind_code: int

    @classmethod
    def from_dict(cls, data: Any) -> FileSystemChange:
        data = _object(data)
        return cls(path=_text(data, "Path"), kind_code=_integer(data, "Kind"))

    def kind(self) -> FileSystemChangeKind:
        return FileSystemChangeKind.from_int(self.kind_code)


@dataclass
class ExecInspectResponse:
    """State of an exec instance."""

    can_remove: bool
    detach_keys: str
    id: str
    running: bool
    exit_code: int
    open_stdin: bool
    open_stderr: bool
    open_stdout: bool
    container_id: str
    pid: int

    @classmethod
    def from_dict(cls, data: Any) -> ExecInspectResponse:
        data = _object(data)
        return cls(
            can_remove=_boolean(data, "CanRemove"),
            detach_keys=_text(data, "DetachKeys"),
            id=_text(data, "ID"),
            running=_boolean(data, "Running"),
            exit_code=_integer(data, "ExitCode"),
            open_stdin=_boolean(data, "OpenStdin"),
            open_stderr=_boolean(data, "OpenStderr"),
            open_stdout=_boolean(data, "OpenStdout"),
            container_id=_text(data, "ContainerID"),
            pid=_integer(data, "Pid"),
        )


@dataclass
class CreateExecResponse:
    """The result of creating an exec instance."""

    id: str

    @classmethod
    def from_dict(cls, data: Any) -> CreateExecResponse:
        return cls(id=_text(_object(data), "Id"))