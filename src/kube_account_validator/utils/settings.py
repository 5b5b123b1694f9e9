"""Field extraction helpers for loosely-typed settings documents.

Account and service settings arrive as plain nested dictionaries. These
helpers pull typed values out of them by key or dotted path.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def get_path(document: Mapping[str, Any] | None, path: str) -> Any:
    """Get a value from a nested mapping by dotted path.

    Args:
        document: Nested mapping to traverse.
        path: Dotted path, e.g. ``"kubernetes.serviceAccountName"``.

    Returns:
        The value at ``path``, or None if any segment is missing.

    Example:
        {"kubernetes": {"serviceAccountName": "spin"}}
        -> get_path(doc, "kubernetes.serviceAccountName") == "spin"
    """
    current: Any = document
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current


def get_string(document: Mapping[str, Any] | None, path: str) -> str:
    """Get a string value by dotted path.

    Raises:
        KeyError: If the path is absent or empty.
        TypeError: If the value is not a string.
    """
    value = get_path(document, path)
    if value is None or value == "":
        raise KeyError(path)
    if not isinstance(value, str):
        raise TypeError(f"{path} must be a string, got {type(value).__name__}")
    return value


def get_string_list(document: Mapping[str, Any] | None, path: str) -> list[str]:
    """Get a list of strings by dotted path.

    Raises:
        KeyError: If the path is absent.
        TypeError: If the value is not a list of strings.
    """
    value = get_path(document, path)
    if value is None:
        raise KeyError(path)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"{path} must be a list of strings")
    return list(value)


def get_string_list_or_empty(document: Mapping[str, Any] | None, path: str) -> list[str]:
    """Get a list of strings, treating absence or a type mismatch as empty."""
    try:
        return get_string_list(document, path)
    except (KeyError, TypeError):
        return []
