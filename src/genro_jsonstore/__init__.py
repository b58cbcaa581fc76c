# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-JsonStore - Path-addressable JSON documents with undo/redo.

A lightweight, zero-dependency library providing an in-memory JSON-like
document with dotted-path access, change listeners scoped by path prefix,
undo/redo history and atomic batches.
"""

__version__ = "0.1.0"

from .change import Change, ChangeKind
from .engine import JsonEngine
from .exceptions import (
    HistoryError,
    InvalidListenerError,
    InvalidPathError,
    InvalidValueError,
    JsonStoreError,
    KeyNotFoundError,
    MissingSegmentError,
    NotAnObjectError,
    PathNotFoundError,
)
from .history import BatchCommand, Command, DeleteCommand, History, SetCommand
from .store import ChangeNotifier, DocumentStore
from .values import MISSING

__all__ = [
    # Core classes
    "JsonEngine",
    "DocumentStore",
    "ChangeNotifier",
    # Changes and history
    "Change",
    "ChangeKind",
    "MISSING",
    "Command",
    "SetCommand",
    "DeleteCommand",
    "BatchCommand",
    "History",
    # Exceptions
    "JsonStoreError",
    "InvalidPathError",
    "InvalidListenerError",
    "InvalidValueError",
    "PathNotFoundError",
    "MissingSegmentError",
    "KeyNotFoundError",
    "NotAnObjectError",
    "HistoryError",
]
