# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Change records describing one mutation of the document."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

from .values import MISSING, clone_value, same_value


class ChangeKind(str, Enum):
    """Kind of a change record."""

    ADD = 'add'
    UPDATE = 'update'
    DELETE = 'delete'
    BATCH = 'batch'


class Change:
    """Before/after state of one key, or an ordered group of such records.

    Each change has:
    - kind: ADD (key did not exist), UPDATE, DELETE or BATCH
    - path: Dotted path of the key ('' for a BATCH change)
    - old_value: Previous value, MISSING for ADD
    - new_value: Current value, MISSING for DELETE
    - changes: Leaf changes in commit order (BATCH only, empty otherwise)

    Example:
        >>> change = Change(ChangeKind.UPDATE, 'a.b', 1, 2)
        >>> change.kind, change.path
        (<ChangeKind.UPDATE: 'update'>, 'a.b')
    """

    __slots__ = ('kind', 'path', 'old_value', 'new_value', 'changes')

    def __init__(
        self,
        kind: ChangeKind,
        path: str,
        old_value: Any = MISSING,
        new_value: Any = MISSING,
        changes: tuple[Change, ...] = (),
    ) -> None:
        self.kind = kind
        self.path = path
        self.old_value = old_value
        self.new_value = new_value
        self.changes = changes

    @classmethod
    def batch(cls, changes: list[Change] | tuple[Change, ...]) -> Change:
        """Build a BATCH change bundling leaf changes in order."""
        return cls(ChangeKind.BATCH, '', changes=tuple(changes))

    def __repr__(self) -> str:
        if self.kind is ChangeKind.BATCH:
            return f"Change(batch, {list(self.changes)!r})"
        return (
            f"Change({self.kind.value}, {self.path!r}, "
            f"old={self.old_value!r}, new={self.new_value!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Change):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.path == other.path
            and _same(self.old_value, other.old_value)
            and _same(self.new_value, other.new_value)
            and self.changes == other.changes
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_batch(self) -> bool:
        """True for a BATCH change."""
        return self.kind is ChangeKind.BATCH

    def iter_leaves(self) -> Iterator[Change]:
        """Yield leaf changes (self for a leaf change)."""
        if self.kind is ChangeKind.BATCH:
            for change in self.changes:
                yield from change.iter_leaves()
        else:
            yield self

    @property
    def paths(self) -> list[str]:
        """Paths touched by this change, in order."""
        return [leaf.path for leaf in self.iter_leaves()]

    def copy(self) -> Change:
        """Return a deep copy, so the record can be handed out safely."""
        return Change(
            self.kind,
            self.path,
            _copy(self.old_value),
            _copy(self.new_value),
            tuple(change.copy() for change in self.changes),
        )


def _copy(value: Any) -> Any:
    return value if value is MISSING else clone_value(value)


def _same(a: Any, b: Any) -> bool:
    if a is MISSING or b is MISSING:
        return a is b
    return same_value(a, b)
