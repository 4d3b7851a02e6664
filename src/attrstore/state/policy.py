"""Deterministic per-attribute diff policy.

This module contains *no* store state.  The store feeds it current,
previous and incoming values and applies the returned flags.
"""

from __future__ import annotations

from typing import Any

from attrstore._compare import is_equal
from attrstore.state.events import UNFLUSHED, ChangeState


def differs_from_current(current: Any, incoming: Any, *, unset: bool, present: bool) -> bool:
    """Whether a write changes what ``get`` returns right now."""
    return not is_equal(current, incoming) or (unset and present)


def differs_from_snapshot(previous: Any, incoming: Any, *, present_now: bool, present_before: bool) -> bool:
    """Whether a written value differs from the settled snapshot."""
    return not is_equal(previous, incoming) or present_now != present_before


def record_write(
    state: ChangeState,
    *,
    changed_now: bool,
    unsettled: bool,
    silent: bool,
) -> ChangeState:
    """Fold one attribute write into its tracking flags.

    A write that lands back on the settled value clears ``CHANGED`` and
    ``PENDING``; an outstanding ``SILENT`` survives so the silent change
    is still surfaced.
    """
    if changed_now and silent:
        state |= ChangeState.SILENT
    if unsettled:
        state |= ChangeState.CHANGED
        if not silent:
            state |= ChangeState.PENDING
    else:
        state &= ~(ChangeState.CHANGED | ChangeState.PENDING)
    return state


def surface_silent(state: ChangeState) -> ChangeState:
    """Turn a silent change into a pending one."""
    return (state & ~ChangeState.SILENT) | ChangeState.PENDING


def is_unflushed(state: ChangeState) -> bool:
    """Whether the attribute still owes an event to listeners."""
    return bool(state & UNFLUSHED)
