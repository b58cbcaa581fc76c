# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted path resolution over a JSON-like document.

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - Array elements are addressed by decimal index: 'items.0.name'

The container helpers below (has_key, read_key, ...) hide the difference
between objects and arrays, so callers work with a (container, key) pair
returned by resolve_parent.
"""

from __future__ import annotations

from typing import Any

from .exceptions import (
    InvalidPathError,
    KeyNotFoundError,
    MissingSegmentError,
    NotAnObjectError,
)
from .values import is_container


def split_path(path: Any) -> list[str]:
    """Split a dotted path into segments.

    Args:
        path: Dotted path string (e.g., 'a.b.c').

    Returns:
        List of non-empty segments.

    Raises:
        InvalidPathError: If path is not a non-empty string or has an
            empty segment ('a..b', '.a', 'a.').
    """
    if not isinstance(path, str) or not path:
        raise InvalidPathError(f"Invalid path {path!r}")
    parts = path.split('.')
    if '' in parts:
        raise InvalidPathError(f"Invalid path {path!r}: empty segment")
    return parts


def _list_index(segment: str) -> int | None:
    """Parse an array index segment.

    Only canonical decimal indexes are accepted ('1', not '01'), so one
    element is always reached through one path.

    Returns:
        The index, or None if segment is not a canonical index.
    """
    if not (segment.isdigit() and segment.isascii()):
        return None
    if segment != '0' and segment.startswith('0'):
        return None
    return int(segment)


def has_key(container: dict | list, key: str) -> bool:
    """True if key exists in container."""
    if isinstance(container, dict):
        return key in container
    index = _list_index(key)
    return index is not None and index < len(container)


def read_key(container: dict | list, key: str) -> Any:
    """Return the live value at key (no copy).

    Raises:
        KeyNotFoundError: If key does not exist.
    """
    if not has_key(container, key):
        raise KeyNotFoundError(f"'{key}' does not exist")
    if isinstance(container, dict):
        return container[key]
    return container[int(key)]


def write_key(container: dict | list, key: str, value: Any) -> None:
    """Store value at key, replacing or adding it.

    For arrays key may be an existing index or len(array), which appends.

    Raises:
        KeyNotFoundError: If key is not a writable array position.
    """
    if isinstance(container, dict):
        container[key] = value
        return
    index = _list_index(key)
    if index is None or index > len(container):
        raise KeyNotFoundError(
            f"'{key}' is not a valid position in an array of {len(container)}"
        )
    if index == len(container):
        container.append(value)
    else:
        container[index] = value


def check_writable(container: dict | list, key: str) -> None:
    """Raise KeyNotFoundError if write_key would refuse key."""
    if isinstance(container, list):
        index = _list_index(key)
        if index is None or index > len(container):
            raise KeyNotFoundError(
                f"'{key}' is not a valid position in an array of {len(container)}"
            )


def remove_key(container: dict | list, key: str) -> Any:
    """Remove key and return its value. Array elements after it shift down.

    Raises:
        KeyNotFoundError: If key does not exist.
    """
    if not has_key(container, key):
        raise KeyNotFoundError(f"'{key}' does not exist")
    if isinstance(container, dict):
        return container.pop(key)
    return container.pop(int(key))


def insert_key(container: dict | list, key: str, value: Any) -> None:
    """Put back a removed key. Array elements at and after it shift up."""
    if isinstance(container, dict):
        container[key] = value
        return
    index = _list_index(key)
    if index is None or index > len(container):
        raise KeyNotFoundError(
            f"'{key}' is not a valid position in an array of {len(container)}"
        )
    container.insert(index, value)


def resolve_parent(
    root: dict | list, path: Any, create_missing: bool = False
) -> tuple[dict | list, str]:
    """Walk path down to the container holding its final segment.

    Intermediate objects are created only inside objects, and only after
    every existing segment has been checked, so a failed call leaves the
    document unchanged. The final key itself is never created.

    Args:
        root: Document root (dict or list).
        path: Dotted path string.
        create_missing: If True, create missing intermediate objects.

    Returns:
        Tuple of (parent_container, final_key).

    Raises:
        InvalidPathError: If path is malformed.
        NotAnObjectError: If an intermediate segment holds a scalar.
        MissingSegmentError: If an intermediate segment is absent and
            create_missing is False, or it would have to be created
            inside an array.
    """
    parts = split_path(path)
    current = root

    for i, part in enumerate(parts[:-1]):
        if has_key(current, part):
            child = read_key(current, part)
            if not is_container(child):
                remaining = '.'.join(parts[i + 1:])
                raise NotAnObjectError(
                    f"'{part}' is not an object, cannot access '{remaining}'"
                )
            current = child
            continue

        if not create_missing:
            raise MissingSegmentError(f"Path segment '{part}' not found")
        if not isinstance(current, dict):
            raise MissingSegmentError(
                f"Path segment '{part}' not found, cannot create it inside an array"
            )
        # Everything below this point is new, so no later segment can fail.
        for new_part in parts[i:-1]:
            current[new_part] = {}
            current = current[new_part]
        break

    return current, parts[-1]
