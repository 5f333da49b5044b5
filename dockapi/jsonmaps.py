"""Helpers for reading the loosely shaped JSON documents the engine returns."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class MalformedResponseError(ValueError):
    """A JSON document did not have the shape that was expected."""


def require(data: Any, key: str) -> Any:
    """Return ``data[key]``, raising if ``data`` is not an object or lacks the key."""
    if not isinstance(data, Mapping):
        raise MalformedResponseError(
            f"expected a JSON object holding {key!r}, got {type(data).__name__}"
        )
    try:
        return data[key]
    except KeyError:
        raise MalformedResponseError(f"missing field {key!r}") from None


def string_map(value: Any) -> dict[str, str]:
    """Read an object of strings; JSON null reads as an empty map."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise MalformedResponseError(
            f"expected a JSON object of strings, got {type(value).__name__}"
        )
    result: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise MalformedResponseError(
                f"expected string entries, got {key!r}: {item!r}"
            )
        result[key] = item
    return result


def string_list(value: Any) -> list[str]:
    """Read an array of strings; JSON null reads as an empty list."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise MalformedResponseError(
            f"expected a JSON array of strings, got {type(value).__name__}"
        )
    for item in value:
        if not isinstance(item, str):
            raise MalformedResponseError(f"expected a string item, got {item!r}")
    return list(value)


def unit_map(keys: Iterable[Any]) -> dict[str, dict]:
    """Build a map whose values are all empty objects, as the engine uses for sets."""
    return {str(key): {} for key in keys}


def key_set_map(value: Any) -> dict[str, dict]:
    """Read a map whose values carry no meaning; JSON null reads as an empty map."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise MalformedResponseError(
            f"expected a JSON object, got {type(value).__name__}"
        )
    for key in value:
        if not isinstance(key, str):
            raise MalformedResponseError(f"expected a string key, got {key!r}")
    return unit_map(value)