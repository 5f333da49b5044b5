from datetime import timedelta

import pytest

from dockapi.container_responses import (
    CreateContainerResponse,
    CreateExecResponse,
    ErrorResponse,
    ExecInspectResponse,
    FileSystemChange,
    FileSystemChangeKind,
    GraphDriver,
    Health,
    HealthCheckResult,
    InspectContainerResponse,
    InspectedContainerConfig,
    InspectedContainerHostConfig,
    MountPoint,
    State,
    TopResponse,
    WaitResponse,
)
from dockapi.jsonmaps import MalformedResponseError


def _network_doc(ip="172.17.0.2"):
    return {
        "IPAMConfig": None,
        "Links": None,
        "Aliases": None,
        "NetworkID": "net1",
        "EndpointID": "ep1",
        "Gateway": "172.17.0.1",
        "IPAddress": ip,
        "IPPrefixLen": 16,
        "IPv6Gateway": "",
        "GlobalIPv6Address": "",
        "GlobalIPv6PrefixLen": 0,
        "MacAddress": "00:00:5e:00:53:01",
        "DriverOpts": None,
    }


def _state_doc():
    return {
        "Status": "created",
        "Running": False,
        "Paused": False,
        "Restarting": False,
        "OOMKilled": False,
        "Dead": False,
        "Pid": 0,
        "ExitCode": 0,
        "StartedAt": "0001-01-01T00:00:00Z",
        "FinishedAt": "0001-01-01T00:00:00Z",
    }


def _config_doc():
    return {
        "Hostname": "abc123",
        "Domainname": "",
        "User": "",
        "AttachStdin": False,
        "AttachStdout": False,
        "AttachStderr": False,
        "ExposedPorts": {"80/tcp": {}, "443/tcp": {}},
        "Tty": False,
        "OpenStdin": False,
        "StdinOnce": False,
        "Env": ["CADDY_VERSION=v2.6.1"],
        "Cmd": ["caddy", "run"],
        "Image": "caddy:2.6.1",
        "Volumes": None,
        "WorkingDir": "/srv",
        "Entrypoint": None,
        "OnBuild": None,
        "Labels": {"org.opencontainers.image.title": "Caddy"},
        "StopSignal": "SIGQUIT",
    }


def _inspect_doc():
    return {
        "Id": "c1",
        "Created": "2022-10-01T12:00:00Z",
        "Path": "caddy",
        "Args": ["run"],
        "State": _state_doc(),
        "Image": "sha256:abc",
        "ResolvConfPath": "",
        "HostnamePath": "",
        "HostsPath": "",
        "LogPath": "",
        "Name": "/web",
        "RestartCount": 0,
        "Driver": "overlay2",
        "Platform": "linux",
        "MountLabel": "",
        "ProcessLabel": "",
        "AppArmorProfile": "",
        "ExecIDs": None,
        "HostConfig": {"NetworkMode": "default", "Privileged": False},
        "GraphDriver": {"Name": "overlay2", "Data": {"LowerDir": "/lower"}},
        "SizeRw": 0,
        "Mounts": [],
        "Config": _config_doc(),
        "NetworkSettings": {"Ports": {}, "Networks": {"bridge": _network_doc()}},
    }


def test_inspect_with_null_volumes():
    response = InspectContainerResponse.from_dict(_inspect_doc())
    assert len(response.config.volumes) == 0


def test_inspect_null_graph_driver_data_is_empty():
    doc = _inspect_doc()
    doc["GraphDriver"] = {"Name": "btrfs", "Data": None}
    response = InspectContainerResponse.from_dict(doc)
    assert len(response.graph_driver.data) == 0


def test_inspect_parses_config():
    response = InspectContainerResponse.from_dict(_inspect_doc())
    assert response.config.stop_signal == "SIGQUIT"
    assert response.config.exposed_ports == {"80/tcp": {}, "443/tcp": {}}
    assert response.config.entry_point == []
    assert response.config.on_build == []
    assert response.config.shell == []
    assert response.config.health_check is None
    assert response.config.stop_timeout_seconds is None


def test_inspect_parses_host_config():
    response = InspectContainerResponse.from_dict(_inspect_doc())
    assert response.host_config.network_mode == "default"
    assert response.host_config.privileged is False


def test_inspect_top_level_fields():
    response = InspectContainerResponse.from_dict(_inspect_doc())
    assert response.id == "c1"
    assert response.name == "/web"
    assert response.exec_ids == []
    assert response.size_rw == 0
    assert response.size_root_fs is None
    assert response.state.status == "created"
    assert response.state.health is None
    assert response.first_ip_address() == "172.17.0.2"


def test_inspect_missing_field_raises():
    doc = _inspect_doc()
    del doc["Args"]
    with pytest.raises(MalformedResponseError):
        InspectContainerResponse.from_dict(doc)


def test_inspect_default_has_no_ip_address():
    assert InspectContainerResponse().first_ip_address() is None


def test_config_health_check_parses():
    doc = _config_doc()
    doc["Healthcheck"] = {"Test": ["CMD", "true"], "Interval": 2_000_000_000, "Retries": 3}
    config = InspectedContainerConfig.from_dict(doc)
    assert config.health_check.test == ["CMD", "true"]
    assert config.health_check.interval == timedelta(seconds=2)
    assert config.health_check.retries == 3


def test_state_with_health():
    doc = _state_doc()
    doc["Health"] = {
        "Status": "unhealthy",
        "FailingStreak": 2,
        "Log": [{"Start": "s", "End": "e", "ExitCode": 1, "Output": "does_not_exist"}],
    }
    state = State.from_dict(doc)
    assert state.health == Health(
        status="unhealthy",
        failing_streak=2,
        log=[HealthCheckResult(start="s", end="e", exit_code=1, output="does_not_exist")],
    )


def test_state_rejects_non_boolean():
    doc = _state_doc()
    doc["Running"] = "yes"
    with pytest.raises(MalformedResponseError):
        State.from_dict(doc)


def test_mount_point_parses():
    mount = MountPoint.from_dict(
        {
            "Type": "volume",
            "Name": "data",
            "Source": "/var/lib/docker/volumes/data",
            "Destination": "/data",
            "Driver": "local",
            "Mode": "z",
            "RW": True,
            "Propagation": "",
        }
    )
    assert mount.mount_type == "volume"
    assert mount.name == "data"
    assert mount.rw is True


def test_graph_driver_and_host_config_from_dict():
    assert GraphDriver.from_dict({"Name": "x", "Data": {"a": "b"}}) == GraphDriver("x", {"a": "b"})
    assert InspectedContainerHostConfig.from_dict(
        {"NetworkMode": "bridge", "Privileged": True}
    ) == InspectedContainerHostConfig("bridge", True)


def test_error_response_display():
    assert str(ErrorResponse(message="Boom!")) == "Boom!"


def test_error_response_from_dict():
    assert ErrorResponse.from_dict({"message": "no such container"}).message == "no such container"


def test_wait_response_without_error():
    response = WaitResponse.from_dict({"StatusCode": 137, "Error": None})
    assert response.exit_code == 137
    assert response.error is None


def test_wait_response_with_error():
    response = WaitResponse.from_dict({"StatusCode": 3221225473, "Error": {"message": "oops"}})
    assert response.exit_code == 3221225473
    assert response.error == "oops"


def test_top_response():
    top = TopResponse.from_dict({"Titles": ["PID", "CMD"], "Processes": [["1", "caddy run"]]})
    assert top.titles == ["PID", "CMD"]
    assert top.processes == [["1", "caddy run"]]


def test_top_response_rejects_bad_rows():
    with pytest.raises(MalformedResponseError):
        TopResponse.from_dict({"Titles": [], "Processes": ["x"]})


def test_file_system_change_kind_modified():
    assert FileSystemChangeKind.from_int(0) == FileSystemChangeKind.MODIFIED


def test_file_system_change_kind_other():
    kind = FileSystemChangeKind.from_int(123)
    assert kind == FileSystemChangeKind(123)
    assert kind.is_other
    assert str(kind) == "other 123"


def test_file_system_change_kind():
    change = FileSystemChange.from_dict({"Path": "/config/caddy/autosave.json", "Kind": 1})
    assert change.path == "/config/caddy/autosave.json"
    assert change.kind() == FileSystemChangeKind.ADDED
    assert str(change.kind()) == "added"


def test_exec_inspect_response():
    response = ExecInspectResponse.from_dict(
        {
            "CanRemove": False,
            "DetachKeys": "",
            "ID": "e1",
            "Running": False,
            "ExitCode": 0,
            "OpenStdin": False,
            "OpenStderr": False,
            "OpenStdout": True,
            "ContainerID": "c1",
            "Pid": 42,
        }
    )
    assert response.id == "e1"
    assert response.container_id == "c1"
    assert response.open_stdout is True
    assert response.pid == 42


def test_create_exec_response():
    assert CreateExecResponse.from_dict({"Id": "e1"}).id == "e1"


def test_create_container_response():
    response = CreateContainerResponse.from_dict({"Id": "c1", "Warnings": []})
    assert response == CreateContainerResponse(id="c1", warnings=[])


def test_create_container_response_missing_id():
    with pytest.raises(MalformedResponseError):
        CreateContainerResponse.from_dict({"Warnings": []})