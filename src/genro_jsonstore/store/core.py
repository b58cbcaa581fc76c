# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DocumentStore - owner of the live JSON-like document.

This module provides the DocumentStore class, which holds the document root
and performs raw mutations on it. Raw mutations know nothing about history
or listeners: each one returns a Change describing what happened, and the
engine decides what to record and whom to notify.

Key Features:
    - **Path navigation**: Dotted paths ('a.b.c'), array indexes ('items.0')
    - **Autocreate**: raw_set creates missing intermediate objects
    - **No aliasing**: values are copied on the way in and on the way out
    - **Same-value folding**: writing an identical value is not a change

Example:
    Basic usage::

        store = DocumentStore({'a': 1})
        change = store.raw_set('b.c', 2)
        print(change.kind)          # ChangeKind.ADD
        print(store.get('b.c'))     # 2
        print(store.snapshot())     # {'a': 1, 'b': {'c': 2}}
"""

from __future__ import annotations

from typing import Any

from ..change import Change, ChangeKind
from ..exceptions import KeyNotFoundError, NotAnObjectError, PathNotFoundError
from ..paths import (
    check_writable,
    has_key,
    insert_key,
    read_key,
    remove_key,
    resolve_parent,
    write_key,
)
from ..values import clone_value, dump_value, same_value


class DocumentStore:
    """Container owning the document root.

    DocumentStore provides:
    - get(path): Copy of the value at path
    - has(path): Existence check
    - raw_set(path, value): Write with autocreate, returns Change or None
    - raw_delete(path): Remove, returns Change
    - raw_restore(path, value): Put back a removed key, returns Change
    - snapshot() / dump(): Whole-document copy and debug text

    Attributes:
        root_type: type of the document root (dict or list).
    """

    __slots__ = ('_root',)

    def __init__(self, source: dict | list | None = None) -> None:
        """Initialize a DocumentStore.

        Args:
            source: Initial document, deep-copied. Must be a dict or a list.
                Defaults to an empty object.

        Raises:
            TypeError: If source is neither dict nor list.
            InvalidValueError: If source contains non JSON-like data.
        """
        if source is None:
            source = {}
        if not isinstance(source, (dict, list)):
            raise TypeError(
                f"source must be dict or list, not {type(source).__name__}"
            )
        self._root: dict | list = clone_value(source)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if isinstance(self._root, dict):
            return f"DocumentStore({list(self._root.keys())})"
        return f"DocumentStore([{len(self._root)} items])"

    def __len__(self) -> int:
        """Return the number of top-level keys (or array items)."""
        return len(self._root)

    @property
    def root_type(self) -> type:
        return type(self._root)

    # ==================== Read API ====================

    def get(self, path: str) -> Any:
        """Return a copy of the value at path.

        Raises:
            InvalidPathError: If path is malformed.
            MissingSegmentError: If an intermediate segment is absent.
            NotAnObjectError: If an intermediate segment is a scalar.
            KeyNotFoundError: If the final key is absent.
        """
        parent, key = resolve_parent(self._root, path, create_missing=False)
        return clone_value(read_key(parent, key))

    def has(self, path: str) -> bool:
        """True if a value exists at path.

        Malformed paths still raise InvalidPathError.
        """
        try:
            parent, key = resolve_parent(self._root, path, create_missing=False)
        except (PathNotFoundError, NotAnObjectError):
            return False
        return has_key(parent, key)

    def snapshot(self) -> dict | list:
        """Return a deep copy of the whole document."""
        return clone_value(self._root)

    def dump(self) -> str:
        """Return the document as indented JSON text (debug only)."""
        return dump_value(self._root)

    # ==================== Raw Mutations ====================

    def raw_set(self, path: str, value: Any) -> Change | None:
        """Write value at path, creating intermediate objects as needed.

        Args:
            path: Dotted path to the key.
            value: JSON-like value, copied before being stored.

        Returns:
            An ADD or UPDATE Change, or None if the key already holds
            the same value.

        Raises:
            InvalidValueError: If value is not JSON-like.
            InvalidPathError, NotAnObjectError, MissingSegmentError,
            KeyNotFoundError: See resolve_parent and write_key.
        """
        new_value = clone_value(value)
        parent, key = resolve_parent(self._root, path, create_missing=True)
        check_writable(parent, key)

        existed = has_key(parent, key)
        if existed:
            old_value = read_key(parent, key)
            if same_value(old_value, new_value):
                return None
            write_key(parent, key, new_value)
            return Change(
                ChangeKind.UPDATE, path, old_value, clone_value(new_value)
            )

        write_key(parent, key, new_value)
        return Change(ChangeKind.ADD, path, new_value=clone_value(new_value))

    def raw_delete(self, path: str) -> Change:
        """Remove the key at path.

        Returns:
            A DELETE Change carrying the removed value.

        Raises:
            KeyNotFoundError: If the key does not exist.
            InvalidPathError, NotAnObjectError, MissingSegmentError:
                See resolve_parent.
        """
        parent, key = resolve_parent(self._root, path, create_missing=False)
        if not has_key(parent, key):
            raise KeyNotFoundError(f"'{key}' does not exist")
        old_value = remove_key(parent, key)
        return Change(ChangeKind.DELETE, path, old_value=old_value)

    def raw_restore(self, path: str, value: Any) -> Change:
        """Put back a key removed by raw_delete.

        Unlike raw_set, an array element is inserted at its old index
        instead of overwriting the element now sitting there.

        Returns:
            An ADD Change.
        """
        new_value = clone_value(value)
        parent, key = resolve_parent(self._root, path, create_missing=True)
        insert_key(parent, key, new_value)
        return Change(ChangeKind.ADD, path, new_value=clone_value(new_value))
