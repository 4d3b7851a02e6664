"""Equality and clone primitives used by the change engine."""

from __future__ import annotations

import copy
import enum
import math
from collections.abc import Mapping, Sequence
from typing import Any, Final


class _Absent(enum.Enum):
    """Marker for "no value stored under this name"."""

    ABSENT = "ABSENT"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent.ABSENT
"""Returned by ``get`` for missing attributes; distinct from ``None``."""


def is_equal(left: Any, right: Any) -> bool:
    """Deep value equality.

    Differs from plain ``==`` in a few places that matter for change
    detection:

    * ``ABSENT`` only equals itself.
    * ``bool`` never equals ``int`` (``True`` -> ``1`` is a change).
    * NaN equals NaN.
    * Sequences must share a type (``[1]`` does not equal ``(1,)``).
    * Values whose ``==`` cannot produce a truth value (array-likes)
      compare unequal unless identical.
    """
    if left is right:
        return True
    if left is ABSENT or right is ABSENT:
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if len(left) != len(right):
            return False
        for key, value in left.items():
            if key not in right or not is_equal(value, right[key]):
                return False
        return True
    if _is_sequence(left) and _is_sequence(right):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        return all(is_equal(a, b) for a, b in zip(left, right, strict=True))
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def clone_mapping(mapping: Mapping[str, Any] | None, *, deep: bool = False) -> dict[str, Any]:
    """Return a new dict with the items of *mapping*.

    Values are shared with the source unless *deep* is set.
    """
    if not mapping:
        return {}
    if deep:
        return copy.deepcopy(dict(mapping))
    return dict(mapping)
