from datetime import timedelta
from ipaddress import IPv4Address

import pytest

from dockapi.container_requests import (
    CreateContainerRequest,
    CreateExecRequest,
    EndpointConfig,
    ExecStartRequest,
    HostConfig,
    InspectContainerArgs,
    LogsArgs,
    NetworkingConfig,
    RemoveContainerArgs,
    WaitCondition,
)
from dockapi.model import HealthCheck, MountMode


def test_empty_create_container_request_serializes_to_empty_object():
    assert CreateContainerRequest().to_dict() == {}


def test_name_is_not_part_of_body():
    request = CreateContainerRequest(name="web", image="nginx")
    body = request.to_dict()
    assert body == {"Image": "nginx"}
    assert request.name == "web"


def test_expose_port_and_volume_are_unit_maps():
    request = (
        CreateContainerRequest(image="nginx")
        .expose_port("80/tcp")
        .expose_port("443/tcp")
        .volume("/data")
    )
    body = request.to_dict()
    assert body["ExposedPorts"] == {"80/tcp": {}, "443/tcp": {}}
    assert body["Volumes"] == {"/data": {}}


def test_env_and_labels_accumulate():
    request = (
        CreateContainerRequest()
        .add_env("REGISTRY_AUTH=htpasswd")
        .add_env("B=2")
        .label("example-label-key", "example-label-value")
    )
    body = request.to_dict()
    assert body["Env"] == ["REGISTRY_AUTH=htpasswd", "B=2"]
    assert body["Labels"] == {"example-label-key": "example-label-value"}


def test_command_lists_are_stringified():
    request = CreateContainerRequest(
        cmd=["ls", "-l"], shell=["/bin/bash", "-c"], entry_point=["run", 5]
    )
    body = request.to_dict()
    assert body["Cmd"] == ["ls", "-l"]
    assert body["Shell"] == ["/bin/bash", "-c"]
    assert body["Entrypoint"] == ["run", "5"]
    assert "OnBuild" not in body


def test_stop_timeout_accepts_timedelta():
    request = CreateContainerRequest(stop_timeout_seconds=timedelta(seconds=30))
    assert request.stop_timeout_seconds == 30
    assert request.to_dict()["StopTimeout"] == 30


def test_stop_timeout_rejects_negative():
    with pytest.raises(ValueError):
        CreateContainerRequest(stop_timeout_seconds=-1)


def test_false_flags_are_serialized():
    body = CreateContainerRequest(tty=False, attach_stdout=True).to_dict()
    assert body == {"AttachStdout": True, "Tty": False}


def test_nested_health_check_and_host_config():
    check = HealthCheck(test=["CMD", "does_not_exist"], retries=3)
    request = CreateContainerRequest(
        image="nginx",
        health_check=check,
        host_config=HostConfig().mount("/host", "/ctr", MountMode.READ_ONLY),
    )
    body = request.to_dict()
    assert body["Healthcheck"] == check.to_dict()
    assert body["HostConfig"]["Binds"] == ["/host:/ctr:ro"]


def test_host_config_defaults():
    assert HostConfig().to_dict() == {"Privileged": False, "AutoRemove": False}


def test_host_config_port_bindings():
    config = (
        HostConfig()
        .bind_port("80", "8080")
        .bind_ip("80", IPv4Address("127.0.0.4"), "8081")
    )
    body = config.to_dict()
    assert body["PortBindings"] == {
        "80": [
            {"HostPort": "8080"},
            {"HostIP": "127.0.0.4", "HostPort": "8081"},
        ]
    }


def test_host_config_other_settings():
    config = HostConfig(network_mode="bridge", privileged=True, auto_remove=True)
    config.add_capability("NET_ADMIN").sysctl("net.ipv4.ip_forward", "1")
    config.mount("/a", "/b", MountMode.WRITABLE)
    body = config.to_dict()
    assert body["CapAdd"] == ["NET_ADMIN"]
    assert body["Sysctls"] == {"net.ipv4.ip_forward": "1"}
    assert body["NetworkMode"] == "bridge"
    assert body["Binds"] == ["/a:/b:rw"]
    assert body["Privileged"] is True
    assert body["AutoRemove"] is True


def test_endpoint_config_from_ipv4():
    config = EndpointConfig.from_ipv4(IPv4Address("10.20.30.40"))
    assert config.ipam_config.ipv4_address == "10.20.30.40"
    assert config.to_dict() == {"IPAMConfig": {"IPv4Address": "10.20.30.40"}}


def test_networking_config():
    assert NetworkingConfig().to_dict() == {}
    endpoint = EndpointConfig.from_ipv4("10.0.0.230")
    config = NetworkingConfig().endpoint("locallan", endpoint)
    assert config.to_dict() == {"EndpointsConfig": {"locallan": endpoint.to_dict()}}
    body = CreateContainerRequest(networking_config=config).to_dict()
    assert body["NetworkingConfig"] == config.to_dict()


def test_create_exec_request_defaults():
    assert CreateExecRequest().to_dict() == {
        "Cmd": [],
        "AttachStderr": False,
        "AttachStdin": False,
        "AttachStdout": False,
    }


def test_create_exec_request_with_user():
    request = CreateExecRequest(
        cmd=["echo", "Hello,", "world."], user="root", attach_stdout=True
    )
    body = request.to_dict()
    assert body["Cmd"] == ["echo", "Hello,", "world."]
    assert body["User"] == "root"
    assert body["AttachStdout"] is True


def test_exec_start_request():
    assert ExecStartRequest().to_dict() == {"Detach": False, "Tty": False}
    assert ExecStartRequest(detach=True).to_dict()["Detach"] is True


def test_logs_args_defaults():
    args = LogsArgs()
    assert (args.stdout, args.stderr, args.timestamps) == (True, True, False)


def test_optional_args_default_to_none():
    assert InspectContainerArgs().size is None
    args = RemoveContainerArgs(force=True)
    assert (args.force, args.remove_link, args.remove_volumes) == (True, None, None)


def test_wait_conditions_are_distinct():
    values = {condition.value for condition in WaitCondition}
    assert len(values) == 3
    assert WaitCondition("not-running") is WaitCondition.NOT_RUNNING