"""Observable attribute store.

This is the only component allowed to mutate attributes or announce
changes.  Listeners subscribe with ``on("change", ...)`` for the
aggregate event or ``on("change:<name>", ...)`` for a single attribute.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from attrstore._compare import ABSENT, clone_mapping
from attrstore._emitter import EventEmitter
from attrstore._redact import names_for_log, redact_attribute
from attrstore.config import StoreConfig
from attrstore.exceptions import AttrStoreCycleError, AttrStoreNotImplementedError
from attrstore.state.events import ChangeState, SetOptions
from attrstore.state.policy import (
    differs_from_current,
    differs_from_snapshot,
    is_unflushed,
    record_write,
    surface_silent,
)

_logger = logging.getLogger(__name__)

OptionsArg = SetOptions | Mapping[str, Any] | None


class AttributeStore(EventEmitter):
    """Attribute mapping that announces every settled change.

    Usage::

        store = AttributeStore({"a": 1})
        store.on("change:a", lambda s, value, options: print(value))
        store.set("a", 2)

    The store is synchronous and single-threaded.  Listeners may call
    ``set`` on the store that is notifying them; such writes are folded
    into the running change cycle instead of starting a nested one.
    """

    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        *,
        config: StoreConfig | None = None,
    ) -> None:
        super().__init__()
        self._config = config or StoreConfig()
        self.attributes: dict[str, Any] = {}
        self._states: dict[str, ChangeState] = {}
        self._changing = False

        self._previous: dict[str, Any] = {}
        self.set(attributes, silent=True)

        # Construction is not a change.
        self._states = {}
        self._previous = self._snapshot()

        self.initialize()

    def initialize(self) -> None:
        """Hook for subclasses; runs once the initial attributes are in place."""

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def separator(self) -> str:
        return self._config.separator

    @property
    def changing(self) -> bool:
        """Whether a change cycle is currently emitting events."""
        return self._changing

    @property
    def previous_attributes(self) -> dict[str, Any]:
        """Copy of the attributes as of the last settled change cycle."""
        return dict(self._previous)

    @property
    def changed(self) -> dict[str, Any]:
        """Attributes that differ from the settled snapshot, with current values."""
        return {
            name: self.attributes.get(name, ABSENT)
            for name, state in self._states.items()
            if state & ChangeState.CHANGED
        }

    @property
    def pending(self) -> frozenset[str]:
        """Names whose loud change has not reached an aggregate event yet."""
        return frozenset(name for name, state in self._states.items() if state & ChangeState.PENDING)

    @property
    def silent(self) -> frozenset[str]:
        """Names changed silently and not surfaced yet."""
        return frozenset(name for name, state in self._states.items() if state & ChangeState.SILENT)

    def change_state(self, name: str) -> ChangeState:
        return self._states.get(name, ChangeState.SETTLED)

    def has(self, name: str) -> bool:
        return name in self.attributes

    def get(self, name: str) -> Any:
        """Return the value stored for *name*, or ``ABSENT``."""
        return self.attributes.get(name, ABSENT)

    def previous(self, name: str) -> Any:
        """Return the settled value of *name*, or ``ABSENT``."""
        return self._previous.get(name, ABSENT)

    def has_changed(self, name: str | None = None) -> bool:
        """Whether *name* (or any attribute) differs from the settled snapshot.

        A silent write made by a ``change`` listener is already part of the
        snapshot taken at the end of that iteration, yet still reports as
        changed until a later cycle surfaces it.  ``previous(name)`` and
        ``get(name)`` are equal in that window.
        """
        if name is None:
            return any(state & ChangeState.CHANGED for state in self._states.values())
        return bool(self.change_state(name) & ChangeState.CHANGED)

    def changed_attributes(self) -> dict[str, Any] | None:
        """Like :attr:`changed` but ``None`` when nothing changed."""
        return self.changed or None

    def to_json(self) -> dict[str, Any]:
        """Return the live attribute mapping (not a copy)."""
        return self.attributes

    def clone(self) -> AttributeStore:
        """New store of the same type seeded with a copy of the attributes.

        Listeners and change tracking are not carried over.
        """
        return type(self)(dict(self.attributes), config=self._config)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(
        self,
        key: str | Mapping[str, Any] | None,
        value: Any = None,
        options: OptionsArg = None,
        **flags: Any,
    ) -> AttributeStore:
        """Set one attribute or a mapping of attributes.

        Accepts ``set(name, value, options)`` and ``set(mapping, options)``.
        Options may also be passed as keyword flags (``silent=True``,
        ``unset=True`` or any custom flag for listeners to read).
        Assigning ``ABSENT`` removes the attribute.
        """
        if key is None:
            return self
        if isinstance(key, Mapping):
            if options is None and (value is None or isinstance(value, (SetOptions, Mapping))):
                options = value
            attrs = dict(key)
        else:
            attrs = {key: value}
        if not attrs:
            return self

        opts = SetOptions.coerce(options, **flags)
        changes: list[str] = []
        previous = self._previous
        current = self.attributes

        for name, incoming in attrs.items():
            unset = opts.unset or incoming is ABSENT
            if unset:
                incoming = ABSENT

            changed_now = differs_from_current(
                current.get(name, ABSENT),
                incoming,
                unset=unset,
                present=name in current,
            )
            if changed_now and not opts.silent:
                changes.append(name)

            if unset:
                current.pop(name, None)
            else:
                current[name] = incoming

            state = record_write(
                self._states.get(name, ChangeState.SETTLED),
                changed_now=changed_now,
                unsettled=differs_from_snapshot(
                    previous.get(name, ABSENT),
                    incoming,
                    present_now=name in current,
                    present_before=name in previous,
                ),
                silent=opts.silent,
            )
            if state:
                self._states[name] = state
            else:
                self._states.pop(name, None)

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "set silent=%s unset=%s attrs=%s changed=%s",
                opts.silent,
                opts.unset,
                {name: redact_attribute(name, v) for name, v in attrs.items()},
                names_for_log(changes),
            )

        if not opts.silent:
            self.change(opts.with_changes(tuple(changes)))
        return self

    def unset(self, name: str, options: OptionsArg = None, **flags: Any) -> AttributeStore:
        """Remove *name*; a change event fires if it was present."""
        flags["unset"] = True
        return self.set(name, ABSENT, options, **flags)

    def clear(self, options: OptionsArg = None, **flags: Any) -> AttributeStore:
        """Remove every attribute in a single call."""
        flags["unset"] = True
        return self.set(dict.fromkeys(self.attributes, ABSENT), options, **flags)

    def link(self, *args: Any, **kwargs: Any) -> AttributeStore:
        """Link attributes onto a foreign object.  Not implemented."""
        raise AttrStoreNotImplementedError("AttributeStore.link is not implemented")

    # ------------------------------------------------------------------
    # Change cycle
    # ------------------------------------------------------------------

    def change(self, options: OptionsArg = None, **flags: Any) -> AttributeStore:
        """Announce outstanding changes.

        Fires ``change:<name>`` for the attributes changed by the
        triggering call and for every silent change, then, unless a cycle
        is already running, fires ``change`` until no attribute is pending.
        Call it directly to flush silent changes.
        """
        opts = SetOptions.coerce(options, **flags)

        if self._changing:
            self._surface(opts)
            return self

        self._changing = True
        try:
            self._surface(opts)
            self._drain(opts)
        except Exception:
            _logger.debug(
                "Change cycle aborted pending=%s",
                names_for_log(sorted(self.pending)),
                exc_info=True,
            )
            raise
        finally:
            self._changing = False
        return self

    def _surface(self, opts: SetOptions) -> None:
        surfaced = list(opts.changes)
        for name, state in list(self._states.items()):
            if state & ChangeState.SILENT:
                self._states[name] = surface_silent(state)
                if name not in surfaced:
                    surfaced.append(name)

        for name in surfaced:
            self.emit(self._config.attribute_event(name), self, self.get(name), opts)

    def _drain(self, opts: SetOptions) -> None:
        limit = self._config.max_cycle_iterations
        iterations = 0
        while self._has_pending():
            if limit is not None and iterations >= limit:
                raise AttrStoreCycleError(
                    f"Change cycle did not settle after {iterations} iterations",
                    iterations=iterations,
                    pending=self.pending,
                )
            iterations += 1

            for name, state in list(self._states.items()):
                self._states[name] = state & ~ChangeState.PENDING
            _logger.debug("Change cycle iteration=%d", iterations)

            self.emit(self._config.change_event, self, opts)

            # Whatever a listener touched during the emit is still unflushed.
            for name, state in list(self._states.items()):
                if not is_unflushed(state):
                    del self._states[name]

            self._previous = self._snapshot()

        if iterations:
            _logger.debug("Change cycle settled iterations=%d", iterations)

    def _has_pending(self) -> bool:
        return any(state & ChangeState.PENDING for state in self._states.values())

    def _snapshot(self) -> dict[str, Any]:
        return clone_mapping(self.attributes, deep=self._config.deep_snapshots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attributes!r})"


def create(
    attributes: Mapping[str, Any] | None = None,
    *,
    config: StoreConfig | None = None,
) -> AttributeStore:
    """Create an :class:`AttributeStore` seeded silently with *attributes*."""
    return AttributeStore(attributes, config=config)
