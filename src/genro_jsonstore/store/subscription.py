# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Change listeners scoped by path prefix.

A listener registered at a prefix hears about every change along the same
branch of the tree: the prefix itself, anything below it, and anything
above it. The empty prefix hears everything.

Example:
    >>> notifier = ChangeNotifier()
    >>> notifier.subscribe(print, 'config')
    >>> notifier.dispatch(Change(ChangeKind.ADD, 'config.host', new_value='x'))
    Change(add, 'config.host', old=<missing>, new='x')
    1
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..change import Change
from ..exceptions import InvalidListenerError, InvalidPathError

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Change], Any]


def prefix_matches(prefix: str, path: str) -> bool:
    """True if a listener at prefix should hear about a change at path."""
    return (
        prefix == ''
        or prefix == path
        or path.startswith(prefix + '.')
        or prefix.startswith(path + '.')
    )


class ChangeNotifier:
    """Registry of listeners keyed by path prefix.

    Callbacks under one prefix are kept in registration order. They are
    compared with ==, not hashed, so unhashable callables are accepted and
    bound methods of the same object count as one listener.
    """

    __slots__ = ('_listeners',)

    def __init__(self) -> None:
        self._listeners: dict[str, list[ChangeCallback]] = {}

    def __len__(self) -> int:
        """Return the number of (prefix, callback) registrations."""
        return sum(len(callbacks) for callbacks in self._listeners.values())

    def __repr__(self) -> str:
        return f"ChangeNotifier({list(self._listeners.keys())})"

    @staticmethod
    def _check(callback: Any, prefix: Any, action: str) -> None:
        if not callable(callback):
            raise InvalidListenerError(f"{action}: listener must be callable")
        if not isinstance(prefix, str):
            raise InvalidPathError(
                f"{action}: prefix must be str, not {type(prefix).__name__}"
            )

    def subscribe(self, callback: ChangeCallback, prefix: str = '') -> None:
        """Register callback for changes related to prefix.

        Registering the same callback twice under one prefix is a no-op.

        Raises:
            InvalidListenerError: If callback is not callable.
            InvalidPathError: If prefix is not a string.
        """
        self._check(callback, prefix, 'subscribe')
        callbacks = self._listeners.setdefault(prefix, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def unsubscribe(self, callback: ChangeCallback, prefix: str = '') -> None:
        """Remove a registration; unknown registrations are ignored.

        Raises:
            InvalidListenerError: If callback is not callable.
            InvalidPathError: If prefix is not a string.
        """
        self._check(callback, prefix, 'unsubscribe')
        callbacks = self._listeners.get(prefix)
        if callbacks is None:
            return
        if callback in callbacks:
            callbacks.remove(callback)
        if not callbacks:
            del self._listeners[prefix]

    def is_subscribed(self, callback: ChangeCallback, prefix: str = '') -> bool:
        return callback in self._listeners.get(prefix, [])

    def listeners_for(self, change: Change) -> list[ChangeCallback]:
        """Collect callbacks interested in change, each at most once.

        A BATCH change matches a prefix if any of its leaf paths does.
        """
        paths = change.paths
        selected: list[ChangeCallback] = []
        for prefix, callbacks in self._listeners.items():
            if any(prefix_matches(prefix, path) for path in paths):
                for callback in callbacks:
                    if callback not in selected:
                        selected.append(callback)
        return selected

    def dispatch(self, change: Change) -> int:
        """Call every interested listener with change.

        Listeners are collected before the first call, so listeners added or
        removed by a callback take effect from the next dispatch. A failing
        listener is logged and skipped.

        Returns:
            Number of listeners called.
        """
        callbacks = self.listeners_for(change)
        for callback in callbacks:
            try:
                callback(change)
            except Exception:
                logger.exception(
                    "Listener %r failed on %s change at %r",
                    callback, change.kind.value, change.path,
                )
        return len(callbacks)
