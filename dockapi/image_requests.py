"""Requests for building images and for pulling or importing them."""

from __future__ import annotations

from dataclasses import dataclass, field

_UNSIGNED_FIELDS = (
    "memory_limit",
    "cpu_shares",
    "cpu_set_cpus",
    "cpu_period",
    "cpu_quota",
    "shm_size_bytes",
)


@dataclass
class BuildImageRequest:
    """Options for building an image from a tar archive of a build context."""

    dockerfile: str | None = None
    """Path of the Dockerfile within the build context; the engine assumes "Dockerfile"."""
    tags: list[str] = field(default_factory=list)
    """Names in ``name:tag`` form; ``:latest`` is assumed when the tag is omitted."""
    extra_hosts: str | None = None
    remote: str | None = None
    quiet: bool | None = None
    no_cache: bool | None = None
    cache_from: list[str] = field(default_factory=list)
    """Images used for build cache resolution."""
    pull: str | None = None
    """Attempt to pull the image even if an older image exists locally."""
    remove_intermediates: bool | None = None
    """Remove intermediate containers after a successful build."""
    force_remove_intermediates: bool | None = None
    """Always remove intermediate containers, even upon failure."""
    memory_limit: int | None = None
    memory_and_swap: int | None = None
    cpu_shares: int | None = None
    cpu_set_cpus: int | None = None
    cpu_period: int | None = None
    cpu_quota: int | None = None
    build_args: dict[str, str] = field(default_factory=dict)
    shm_size_bytes: int | None = None
    squash: bool | None = None
    labels: dict[str, str] = field(default_factory=dict)
    network_mode: str | None = None
    platform: str | None = None
    target: str | None = None
    outputs: str | None = None

    def __post_init__(self) -> None:
        for name in _UNSIGNED_FIELDS:
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative")

    def tag(self, value: str) -> BuildImageRequest:
        """Add a name for the image, ``image:tag`` or just ``image``."""
        self.tags.append(value)
        return self

    def add_cache_from(self, image: str) -> BuildImageRequest:
        """Add an image to use for build cache resolution."""
        self.cache_from.append(image)
        return self

    def build_arg(self, key: str, value: str) -> BuildImageRequest:
        """Set a build-time variable."""
        self.build_args[key] = value
        return self

    def label(self, key: str, value: str) -> BuildImageRequest:
        """Add a label to the built image."""
        self.labels[key] = value
        return self


@dataclass
class CreateImageRequest:
    """Options for pulling an image or importing one from a source."""

    from_image: str | None = None
    from_src: str | None = None
    repo: str | None = None
    tag: str | None = None
    message: str | None = None
    platform: str | None = None