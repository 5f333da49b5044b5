"""Request and response models for the Docker Engine REST API, with a log stream reader."""

__version__ = "0.1.0"

__all__ = [
    "container_requests",
    "container_responses",
    "image_requests",
    "jsonmaps",
    "list_requests",
    "list_responses",
    "model",
    "network_requests",
    "network_responses",
    "streams",
    "system_responses",
    "volume_requests",
]