# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JsonStore exceptions.

Every error raised by the library derives from JsonStoreError. Each concrete
error also derives from the builtin exception closest in meaning, so callers
may catch either ``KeyNotFoundError`` or a plain ``KeyError``.
"""

from __future__ import annotations


class JsonStoreError(Exception):
    """Base exception for JsonStore errors."""

    pass


class InvalidPathError(JsonStoreError, ValueError):
    """Raised when a path is empty, not a string, or has an empty segment."""

    pass


class InvalidListenerError(JsonStoreError, TypeError):
    """Raised when a non-callable is registered or unregistered as listener."""

    pass


class InvalidValueError(JsonStoreError, TypeError):
    """Raised when a value is not representable as JSON-like data."""

    pass


class PathNotFoundError(JsonStoreError, KeyError):
    """Base for errors about a path location that does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep the plain text instead.
        return str(self.args[0]) if self.args else ''


class MissingSegmentError(PathNotFoundError):
    """Raised when an intermediate path segment is absent and cannot be created."""

    pass


class KeyNotFoundError(PathNotFoundError):
    """Raised when the final key of a path does not exist."""

    pass


class NotAnObjectError(JsonStoreError, TypeError):
    """Raised when an intermediate path segment holds a scalar value."""

    pass


class HistoryError(JsonStoreError, RuntimeError):
    """Raised when undo or redo is requested while a batch is open."""

    pass
