# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON-like value helpers.

A value is one of: None, bool, int/float, str, list of values, or dict
mapping str to values. These helpers are the only place where the variants
are inspected, so every traversal and comparison site agrees on them.
"""

from __future__ import annotations

import json
import math
from typing import Any

from .exceptions import InvalidValueError

_SCALARS = (str, int, float, bool)


class _Missing:
    """Sentinel for an absent value (distinct from JSON null)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return '<missing>'

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict) -> _Missing:
        return self


MISSING: Any = _Missing()


def is_container(value: Any) -> bool:
    """True if value is an object (dict) or an array (list)."""
    return isinstance(value, (dict, list))


def clone_value(value: Any) -> Any:
    """Return a deep, validated copy of a JSON-like value.

    Tuples are copied as lists. Dict keys must be strings.

    Args:
        value: The value to copy.

    Returns:
        A copy sharing no mutable container with the original.

    Raises:
        InvalidValueError: If value (or a nested member) is not JSON-like.
    """
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, dict):
        result: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidValueError(
                    f"object keys must be str, not {type(key).__name__}"
                )
            result[key] = clone_value(item)
        return result
    if isinstance(value, (list, tuple)):
        return [clone_value(item) for item in value]
    raise InvalidValueError(
        f"unsupported value type {type(value).__name__}"
    )


def _variant(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    return 'object'


def same_value(a: Any, b: Any) -> bool:
    """Strict same-value comparison.

    Booleans never equal numbers, NaN equals NaN, 0.0 and -0.0 differ.
    Containers compare member by member with the same rules.
    """
    if a is b:
        return True
    kind = _variant(a)
    if kind != _variant(b):
        return False
    if kind == 'number':
        a_nan = isinstance(a, float) and math.isnan(a)
        b_nan = isinstance(b, float) and math.isnan(b)
        if a_nan or b_nan:
            return a_nan and b_nan
        if a != b:
            return False
        if a == 0:
            return math.copysign(1.0, a) == math.copysign(1.0, b)
        return True
    if kind == 'array':
        return len(a) == len(b) and all(same_value(x, y) for x, y in zip(a, b))
    if kind == 'object':
        if a.keys() != b.keys():
            return False
        return all(same_value(a[key], b[key]) for key in a)
    return a == b


def dump_value(value: Any) -> str:
    """Render a value as indented JSON text for debugging."""
    return json.dumps(value, indent=2, ensure_ascii=False)
