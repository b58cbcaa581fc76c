# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Reversible commands and the undo/redo history.

Commands replay and revert changes through the DocumentStore raw API only,
so replay never records history of its own.

- SetCommand: an ADD or UPDATE change
- DeleteCommand: a DELETE change
- BatchCommand: leaf commands applied in order, reverted in reverse order

History owns the undo and redo stacks and the open batch buffer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .change import Change, ChangeKind

if TYPE_CHECKING:
    from .store import DocumentStore

logger = logging.getLogger(__name__)


class Command(ABC):
    """A recorded mutation that can be re-applied and reverted."""

    __slots__ = ()

    @abstractmethod
    def apply(self, store: DocumentStore) -> Change | None:
        """Re-apply the mutation and return the resulting change."""

    @abstractmethod
    def revert(self, store: DocumentStore) -> Change | None:
        """Revert the mutation and return the resulting change."""

    @property
    @abstractmethod
    def change(self) -> Change:
        """The change recorded when the command was first executed."""


class SetCommand(Command):
    """Command for an ADD or UPDATE change."""

    __slots__ = ('_change',)

    def __init__(self, change: Change) -> None:
        self._change = change

    def __repr__(self) -> str:
        return f"SetCommand({self._change.path!r})"

    @property
    def change(self) -> Change:
        return self._change

    def apply(self, store: DocumentStore) -> Change | None:
        return store.raw_set(self._change.path, self._change.new_value)

    def revert(self, store: DocumentStore) -> Change | None:
        if self._change.kind is ChangeKind.ADD:
            return store.raw_delete(self._change.path)
        return store.raw_set(self._change.path, self._change.old_value)


class DeleteCommand(Command):
    """Command for a DELETE change."""

    __slots__ = ('_change',)

    def __init__(self, change: Change) -> None:
        self._change = change

    def __repr__(self) -> str:
        return f"DeleteCommand({self._change.path!r})"

    @property
    def change(self) -> Change:
        return self._change

    def apply(self, store: DocumentStore) -> Change | None:
        return store.raw_delete(self._change.path)

    def revert(self, store: DocumentStore) -> Change | None:
        return store.raw_restore(self._change.path, self._change.old_value)


class BatchCommand(Command):
    """Group of leaf commands undone and redone as one step."""

    __slots__ = ('_commands',)

    def __init__(self, commands: list[Command]) -> None:
        self._commands = list(commands)

    def __repr__(self) -> str:
        return f"BatchCommand({self._commands!r})"

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def commands(self) -> list[Command]:
        return list(self._commands)

    @property
    def change(self) -> Change:
        return Change.batch([command.change for command in self._commands])

    def apply(self, store: DocumentStore) -> Change | None:
        changes = [command.apply(store) for command in self._commands]
        return _bundle(changes)

    def revert(self, store: DocumentStore) -> Change | None:
        changes = [command.revert(store) for command in reversed(self._commands)]
        return _bundle(changes)


def _bundle(changes: list[Change | None]) -> Change | None:
    leaves = [change for change in changes if change is not None]
    if not leaves:
        return None
    return Change.batch(leaves)


def command_for(change: Change) -> Command:
    """Build the leaf command recording change.

    Raises:
        ValueError: If change is a BATCH change.
    """
    if change.kind is ChangeKind.DELETE:
        return DeleteCommand(change)
    if change.kind in (ChangeKind.ADD, ChangeKind.UPDATE):
        return SetCommand(change)
    raise ValueError(f"cannot build a leaf command for a {change.kind.value} change")


class History:
    """Undo/redo stacks plus the buffer of the open batch.

    The undo stack holds the most recent command last. Recording a new
    command clears the redo stack; moving commands between the stacks
    during undo/redo does not.

    Args:
        limit: Maximum undo depth, None for unbounded. The oldest entries
            are dropped first.

    Example:
        >>> from genro_jsonstore import DocumentStore
        >>> store = DocumentStore()
        >>> history = History(limit=100)
        >>> history.record(SetCommand(store.raw_set('a', 1)))
        True
        >>> history.pop_undo()
        SetCommand('a')
    """

    __slots__ = ('_undo', '_redo', '_limit', '_depth', '_buffer')

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and (
            not isinstance(limit, int) or isinstance(limit, bool) or limit < 1
        ):
            raise ValueError(f"history limit must be a positive int, got {limit!r}")
        self._undo: list[Command] = []
        self._redo: list[Command] = []
        self._limit = limit
        self._depth = 0
        self._buffer: list[Command] = []

    def __repr__(self) -> str:
        return f"History(undo={len(self._undo)}, redo={len(self._redo)})"

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    @property
    def in_batch(self) -> bool:
        """True while a batch is open."""
        return self._depth > 0

    def _push_undo(self, command: Command) -> None:
        self._undo.append(command)
        if self._limit is not None and len(self._undo) > self._limit:
            del self._undo[: len(self._undo) - self._limit]

    # ==================== Recording ====================

    def record(self, command: Command) -> bool:
        """Record a freshly executed command.

        Inside a batch the command is buffered and nothing else happens.

        Returns:
            True if the command was committed to the undo stack (so the
            caller should notify listeners now), False if it was buffered.
        """
        if self._depth > 0:
            self._buffer.append(command)
            return False
        self._redo.clear()
        self._push_undo(command)
        return True

    def clear(self) -> None:
        """Drop both stacks. An open batch buffer is kept."""
        self._undo.clear()
        self._redo.clear()

    # ==================== Batches ====================

    def begin(self) -> int:
        """Open a (possibly nested) batch.

        Returns:
            A savepoint to hand back to rollback().
        """
        self._depth += 1
        return len(self._buffer)

    def commit(self) -> BatchCommand | None:
        """Close the innermost batch.

        Nested batches fold into the outer one. When the outermost batch
        closes with buffered commands they become one BatchCommand on the
        undo stack and the redo stack is cleared.

        Returns:
            The committed BatchCommand, or None if nothing was committed.
        """
        if self._depth == 0:
            raise RuntimeError("commit() called with no open batch")
        self._depth -= 1
        if self._depth > 0 or not self._buffer:
            return None
        batch = BatchCommand(self._buffer)
        self._buffer = []
        self._redo.clear()
        self._push_undo(batch)
        logger.debug("Committed batch of %d commands", len(batch))
        return batch

    def rollback(self, savepoint: int) -> list[Command]:
        """Close the innermost batch, discarding what it buffered.

        Returns:
            Commands buffered since savepoint, in execution order. The
            caller reverts them (in reverse order).
        """
        if self._depth == 0:
            raise RuntimeError("rollback() called with no open batch")
        self._depth -= 1
        discarded = self._buffer[savepoint:]
        del self._buffer[savepoint:]
        logger.debug("Rolled back %d buffered commands", len(discarded))
        return discarded

    # ==================== Undo / Redo ====================

    def pop_undo(self) -> Command | None:
        return self._undo.pop() if self._undo else None

    def pop_redo(self) -> Command | None:
        return self._redo.pop() if self._redo else None

    def push_undo(self, command: Command) -> None:
        """Put a redone command back on the undo stack (redo is kept)."""
        self._push_undo(command)

    def push_redo(self, command: Command) -> None:
        """Put an undone command on the redo stack."""
        self._redo.append(command)
