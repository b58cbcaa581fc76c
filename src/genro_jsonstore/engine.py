# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JsonEngine - path-addressable JSON document with undo/redo.

This module provides the JsonEngine class, the public entry point of the
library. It composes a DocumentStore (the data), a History (undo/redo and
batches) and a ChangeNotifier (listeners).

Data flow of a mutation:
    set/delete_key -> DocumentStore raw mutation -> Change
    -> History records a command (or buffers it inside a batch)
    -> ChangeNotifier dispatches the change (once per batch, at commit)

Example:
    Basic usage::

        engine = JsonEngine({'a': 1})
        engine.on_change(print, 'b')
        engine.set('b.c.d', 3)        # prints the ADD change
        engine.delete_key('b.c.d')    # prints the DELETE change
        engine.undo()                 # prints the re-ADD change
        engine.get_data()             # {'a': 1, 'b': {'c': {'d': 3}}}

    Batches::

        with engine.transaction():
            engine.set('x', 1)
            engine.set('y', 2)
        engine.undo()                 # removes both x and y
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from .change import Change
from .exceptions import HistoryError, PathNotFoundError
from .history import Command, History, command_for
from .store import ChangeNotifier, DocumentStore
from .store.subscription import ChangeCallback
from .values import MISSING

logger = logging.getLogger(__name__)

T = TypeVar('T')


class JsonEngine:
    """In-memory JSON document with change listeners and undo/redo.

    JsonEngine provides:
    - get(path) / engine[path]: Copy of the value at path
    - set(path, value) / engine[path] = value: Write with autocreate
    - delete_key(path) / del engine[path]: Remove a key
    - on_change(callback, prefix) / off_change(callback, prefix): Listeners
    - undo() / redo(): History navigation
    - batch(fn) / transaction(): Atomic groups of mutations
    - get_data() / dump() / log(): Whole-document access

    Values never alias the live document: everything passed in or handed
    out is a copy.

    Args:
        initial: Initial document (dict or list), deep-copied. Defaults to {}.
        history_limit: Maximum number of undo steps kept, None for no limit.

    Example:
        >>> engine = JsonEngine({'a': 1})
        >>> engine.set('b', 2)
        >>> engine.undo()
        >>> 'b' in engine
        False
    """

    __slots__ = ('_store', '_history', '_notifier')

    def __init__(
        self,
        initial: dict | list | None = None,
        *,
        history_limit: int | None = None,
    ) -> None:
        self._store = DocumentStore(initial)
        self._history = History(limit=history_limit)
        self._notifier = ChangeNotifier()

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return (
            f"JsonEngine({self._store!r}, undo={self._history.undo_depth}, "
            f"redo={self._history.redo_depth})"
        )

    def __len__(self) -> int:
        """Return the number of top-level keys (or array items)."""
        return len(self._store)

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __getitem__(self, path: str) -> Any:
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        self.delete_key(path)

    # ==================== Read API ====================

    def get_data(self) -> dict | list:
        """Return a deep copy of the whole document."""
        return self._store.snapshot()

    def get(self, path: str, default: Any = MISSING) -> Any:
        """Return a copy of the value at path.

        Args:
            path: Dotted path (e.g., 'a.b.c').
            default: Returned instead of raising when the key or an
                intermediate segment does not exist.

        Raises:
            InvalidPathError: If path is malformed.
            KeyNotFoundError: If the final key is absent (no default).
            MissingSegmentError: If an intermediate segment is absent
                (no default).
            NotAnObjectError: If an intermediate segment is a scalar.
        """
        if default is MISSING:
            return self._store.get(path)
        try:
            return self._store.get(path)
        except PathNotFoundError:
            return default

    def has(self, path: str) -> bool:
        """True if a value exists at path."""
        return self._store.has(path)

    def dump(self) -> str:
        """Return the document as indented JSON text (debug only)."""
        return self._store.dump()

    def log(self) -> None:
        """Print the document to stderr (debug only)."""
        print(self.dump(), file=sys.stderr)

    # ==================== Mutations ====================

    def set(self, path: str, value: Any) -> None:
        """Set value at path, creating intermediate objects as needed.

        Setting a key to the value it already holds does nothing: no
        history entry, no notification.
        """
        change = self._store.raw_set(path, value)
        if change is not None:
            self._record(command_for(change), change)

    def delete_key(self, path: str) -> None:
        """Delete the key at path.

        Raises:
            KeyNotFoundError: If the key does not exist.
        """
        change = self._store.raw_delete(path)
        self._record(command_for(change), change)

    def _record(self, command: Command, change: Change) -> None:
        if self._history.record(command):
            self._notify(change)

    def _notify(self, change: Change | None) -> None:
        if change is not None:
            self._notifier.dispatch(change.copy())

    # ==================== Listeners ====================

    def on_change(self, callback: ChangeCallback, prefix: str = '') -> None:
        """Call callback(change) for changes related to prefix.

        The callback hears changes at prefix, below it and above it;
        the empty prefix hears every change. Exceptions raised by a
        callback are logged and never reach the mutating caller.

        Raises:
            InvalidListenerError: If callback is not callable.
        """
        self._notifier.subscribe(callback, prefix)

    def off_change(self, callback: ChangeCallback, prefix: str = '') -> None:
        """Remove a listener registered with on_change.

        Raises:
            InvalidListenerError: If callback is not callable.
        """
        self._notifier.unsubscribe(callback, prefix)

    # ==================== History ====================

    @property
    def can_undo(self) -> bool:
        return self._history.undo_depth > 0

    @property
    def can_redo(self) -> bool:
        return self._history.redo_depth > 0

    def clear_history(self) -> None:
        """Forget every undo and redo step."""
        self._history.clear()

    def undo(self) -> None:
        """Revert the most recent change (or batch). No-op if none.

        Raises:
            HistoryError: If called while a batch is open.
        """
        if self._history.in_batch:
            raise HistoryError("undo() is not allowed inside a batch")
        command = self._history.pop_undo()
        if command is None:
            return
        change = command.revert(self._store)
        self._history.push_redo(command)
        logger.debug("Undo %r", command)
        self._notify(change)

    def redo(self) -> None:
        """Re-apply the most recently undone change (or batch). No-op if none.

        Raises:
            HistoryError: If called while a batch is open.
        """
        if self._history.in_batch:
            raise HistoryError("redo() is not allowed inside a batch")
        command = self._history.pop_redo()
        if command is None:
            return
        change = command.apply(self._store)
        self._history.push_undo(command)
        logger.debug("Redo %r", command)
        self._notify(change)

    # ==================== Batches ====================

    @contextmanager
    def transaction(self) -> Iterator[JsonEngine]:
        """Group the mutations made in the block into one undo step.

        Listeners are notified once, at the end of the outermost block,
        with a BATCH change listing every leaf change in order. Nested
        blocks fold into the outer one. If the block raises, the
        mutations it made are reverted and the exception propagates.

        Example:
            >>> with engine.transaction():
            ...     engine.set('a', 1)
            ...     engine.delete_key('b')
        """
        savepoint = self._history.begin()
        try:
            yield self
        except BaseException:
            for command in reversed(self._history.rollback(savepoint)):
                command.revert(self._store)
            raise
        batch = self._history.commit()
        if batch is not None:
            self._notify(batch.change)

    def batch(self, fn: Callable[[], T]) -> T:
        """Run fn as a transaction and return its result.

        Raises:
            TypeError: If fn is not callable.
        """
        if not callable(fn):
            raise TypeError(f"batch callback must be callable, not {type(fn).__name__}")
        with self.transaction():
            return fn()
