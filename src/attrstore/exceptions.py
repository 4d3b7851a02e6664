"""Custom exception hierarchy for attrstore."""

from __future__ import annotations

from collections.abc import Iterable


class AttrStoreError(Exception):
    """Base exception for all attrstore errors."""


class AttrStoreConfigError(AttrStoreError):
    """Invalid store configuration."""


class AttrStoreNotImplementedError(AttrStoreError, NotImplementedError):
    """Operation is part of the model API but has no implementation.

    Raised by :meth:`AttributeStore.link`.  It also derives from
    :class:`NotImplementedError` so generic callers can catch it.
    """


class AttrStoreCycleError(AttrStoreError):
    """A change cycle exceeded ``StoreConfig.max_cycle_iterations``.

    This usually means a listener re-sets an attribute to a differing
    value on every ``change`` emission, so the cycle can never settle.
    """

    def __init__(
        self,
        message: str,
        *,
        iterations: int,
        pending: Iterable[str] = (),
    ) -> None:
        self.iterations = iterations
        self.pending = frozenset(pending)
        super().__init__(message)
