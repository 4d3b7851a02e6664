"""attrstore - Observable attribute store with coalesced change events."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("attrstore")
except PackageNotFoundError:
    __version__ = "0+local"
from attrstore._compare import ABSENT, is_equal
from attrstore._emitter import EventEmitter
from attrstore.config import StoreConfig
from attrstore.exceptions import (
    AttrStoreConfigError,
    AttrStoreCycleError,
    AttrStoreError,
    AttrStoreNotImplementedError,
)
from attrstore.proxy import ModelProxy, create_proxy, proxied_store, store_of
from attrstore.state.events import ChangeState, SetOptions
from attrstore.state.store import AttributeStore, create

__all__ = [
    "__version__",
    "ABSENT",
    "AttrStoreConfigError",
    "AttrStoreCycleError",
    "AttrStoreError",
    "AttrStoreNotImplementedError",
    "AttributeStore",
    "ChangeState",
    "EventEmitter",
    "ModelProxy",
    "SetOptions",
    "StoreConfig",
    "create",
    "create_proxy",
    "is_equal",
    "proxied_store",
    "store_of",
]
