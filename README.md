# dockapi

Python models for the JSON bodies and streams of the Docker Engine REST API
(v1.41). It has no dependencies outside the standard library.

The package holds:

- request models that turn into the JSON bodies the engine expects:
  `CreateContainerRequest`, `HostConfig`, `NetworkingConfig`,
  `EndpointConfig`, `CreateExecRequest` and `ExecStartRequest`
  (`dockapi.container_requests`), `CreateNetworkRequest`
  (`dockapi.network_requests`), `CreateVolumeRequest`
  (`dockapi.volume_requests`), and `Filters` for listing containers
  (`dockapi.list_requests`);
- plain option holders for the query-string arguments of other calls:
  `InspectContainerArgs`, `LogsArgs`, `RemoveContainerArgs`, `WaitCondition`,
  `BuildImageRequest`, `CreateImageRequest` (`dockapi.image_requests`),
  `InspectNetworkArgs` and `ListContainersRequest`;
- response models read from the engine's JSON with `from_dict`:
  `InspectContainerResponse`, `CreateContainerResponse`, `WaitResponse`,
  `TopResponse`, `FileSystemChange`, `ExecInspectResponse`
  (`dockapi.container_responses`), `NetworkSettings`,
  `InspectNetworkResponse`, `CreateNetworkResponse`
  (`dockapi.network_responses`), `ListedContainer`, `ListedImage`,
  `ListVolumesResponse`, `PruneVolumesResponse` (`dockapi.list_responses`),
  `VersionResponse` and `BuildImageResponseStreamItem`
  (`dockapi.system_responses`);
- shared value types in `dockapi.model`: `PortBinding`,
  `ContainerIpamConfig`, `HealthCheck`, `MountMode`, `NetworkIpam`,
  `NetworkIpamConfig`, `RegistryAuth`, `Volume`, `Tar`;
- a reader for the multiplexed stdout/stderr stream of the logs, attach and
  exec endpoints (`dockapi.streams`).

## Building a container request

```python
from datetime import timedelta

from dockapi.container_requests import CreateContainerRequest, HostConfig
from dockapi.model import HealthCheck, MountMode

request = CreateContainerRequest(name="web", image="nginx:latest")
request.expose_port("80/tcp")
request.add_env("MODE=production")
request.label("team", "platform")
request.health_check = HealthCheck(
    test=["CMD", "true"],
    interval=timedelta(seconds=2),
    retries=3,
)

host = HostConfig()
host.bind_port("80/tcp", "8080")
host.mount("/srv/site", "/usr/share/nginx/html", MountMode.READ_ONLY)
request.host_config = host

body = request.to_dict()
```

`name` is not part of the body; it belongs in the query string of the
creation call. Empty lists, maps and unset options are left out of the body,
and health check durations are written in nanoseconds.

## Networks and volumes

```python
from dockapi.model import NetworkIpam, NetworkIpamConfig
from dockapi.network_requests import CreateNetworkRequest
from dockapi.volume_requests import CreateVolumeRequest

ipam = NetworkIpam().add_config(
    NetworkIpamConfig(subnet="172.97.97.0/24", gateway="172.97.97.1")
)
network_body = CreateNetworkRequest(name="backend", ipam=ipam).to_dict()

volume_body = CreateVolumeRequest(name="data").label("team", "platform").to_dict()
```

`CreateNetworkRequest` sets `CheckDuplicate` to true unless told otherwise.

## Filtering container lists

```python
from dockapi.list_requests import Filters, ListContainersRequest

filters = Filters().label_present("team").label_value("env", "test")
listing = ListContainersRequest(all=True, filters=filters)
query_value = filters.to_json()   # {"label":["team","env=test"]}
```

## Parsing responses

```python
from dockapi.container_responses import FileSystemChangeKind, InspectContainerResponse

inspected = InspectContainerResponse.from_dict(json_body)
print(inspected.state.status, inspected.first_ip_address())
```

The readers accept the `null` the engine often sends in place of an empty map
or list. A missing required field, or a value of the wrong type, raises
`dockapi.jsonmaps.MalformedResponseError`, a subclass of `ValueError`.

Change kinds and stream kinds keep codes the documentation does not define,
so compare them with `==`, for example
`change.kind() == FileSystemChangeKind.ADDED`.

## Reading log streams

```python
import io

from dockapi.streams import StreamKind, StreamLine

for line in StreamLine.read_all(io.BytesIO(raw_bytes)):
    if line.kind == StreamKind.STDERR:
        print("err:", line.text, end="")
```

`StreamLine.read` returns `None` at a clean end of the stream, and
`iter_stream_lines` yields frames lazily. A truncated frame or a payload that
is not UTF-8 raises `dockapi.streams.StreamLineReadError`.

## Registry credentials

`RegistryAuth(username=..., password=..., server=...)` gives the JSON object
for the registry authentication header through `to_dict()`, and the registry
configuration map used when building images through `as_config()`. Encoding
these for a header is left to the caller.

## What this package does not do

`dockapi` only builds and reads the data that goes over the wire. It has no
HTTP client, does not connect to the engine's socket or TCP port, and does
not send requests or handle status codes. Pair it with whichever HTTP client
you prefer.

## Tests

The test suite uses pytest, which the `test` extra installs.