"""Attribute-style access to an :class:`AttributeStore`.

A :class:`ModelProxy` holds nothing but a reference to its store.  Every
read, write, delete and membership test is forwarded to the store, so
change detection and notification behave exactly as with direct calls::

    user = proxied_store({"name": "ada"})
    user.on("change:name", handler)   # store methods are reachable
    user.name = "grace"               # -> store.set("name", "grace")
    del user.name                     # -> store.unset("name")
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from attrstore._compare import ABSENT
from attrstore.config import StoreConfig
from attrstore.state.store import AttributeStore

_STORE_SLOT = "_ModelProxy__store"


class ModelProxy:
    """Forward attribute access on the proxy to a store's attributes.

    Names the store itself defines (methods, properties, internal
    fields) resolve to the store and shadow attributes of the same
    name; use item access (``proxy["set"]``) to reach such attributes.
    The mapping views ``keys``, ``values`` and ``items`` are defined on
    the proxy itself so ``dict(proxy)`` works.

    A proxy is always truthy, even when the store holds no attributes.
    """

    __slots__ = ("__store",)

    def __init__(self, store: AttributeStore) -> None:
        if not isinstance(store, AttributeStore):
            raise TypeError(f"ModelProxy wraps an AttributeStore, got {type(store).__name__}")
        object.__setattr__(self, _STORE_SLOT, store)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the proxy itself does not define.
        store: AttributeStore = object.__getattribute__(self, _STORE_SLOT)
        try:
            return getattr(store, name)
        except AttributeError:
            if name.startswith("__") and name.endswith("__"):
                raise
        return store.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        _store(self).set(name, value)

    def __delattr__(self, name: str) -> None:
        _store(self).unset(name)

    def __getitem__(self, name: str) -> Any:
        value = _store(self).get(name)
        if value is ABSENT:
            raise KeyError(name)
        return value

    def __setitem__(self, name: str, value: Any) -> None:
        _store(self).set(name, value)

    def __delitem__(self, name: str) -> None:
        _store(self).unset(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _store(self).has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(_store(self).attributes))

    def __len__(self) -> int:
        return len(_store(self).attributes)

    def __bool__(self) -> bool:
        return True

    def keys(self) -> list[str]:
        return list(_store(self).attributes)

    def values(self) -> list[Any]:
        return list(_store(self).attributes.values())

    def items(self) -> list[tuple[str, Any]]:
        return list(_store(self).attributes.items())

    def __dir__(self) -> list[str]:
        return sorted(set(_store(self).attributes) | set(dir(_store(self))))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ModelProxy):
            return _store(self) is _store(other)
        return NotImplemented

    def __hash__(self) -> int:
        return id(_store(self))

    def __repr__(self) -> str:
        return f"ModelProxy({_store(self).attributes!r})"


def _store(proxy: ModelProxy) -> AttributeStore:
    store: AttributeStore = object.__getattribute__(proxy, _STORE_SLOT)
    return store


def store_of(proxy: ModelProxy) -> AttributeStore:
    """Return the store behind *proxy*."""
    return _store(proxy)


def create_proxy(store: AttributeStore) -> ModelProxy:
    """Wrap an existing store."""
    return ModelProxy(store)


def proxied_store(
    attributes: AttributeStore | Mapping[str, Any] | None = None,
    *,
    config: StoreConfig | None = None,
) -> ModelProxy:
    """Return a proxy for *attributes*.

    An :class:`AttributeStore` is wrapped as is; a mapping (or ``None``)
    seeds a new store.
    """
    if isinstance(attributes, AttributeStore):
        return ModelProxy(attributes)
    return ModelProxy(AttributeStore(attributes, config=config))
