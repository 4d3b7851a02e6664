from __future__ import annotations

from typing import Any

import pytest

from attrstore import ABSENT, AttributeStore, ModelProxy, create, create_proxy, proxied_store, store_of


def test_attribute_read_falls_back_to_store_get() -> None:
    proxy = proxied_store({"name": "ada"})

    assert proxy.name == "ada"
    assert proxy.missing is ABSENT


def test_store_members_take_precedence() -> None:
    proxy = proxied_store({"set": "shadowed", "attributes": "shadowed"})
    store = store_of(proxy)

    assert proxy.set == store.set
    assert proxy.attributes is store.attributes
    assert proxy["set"] == "shadowed"


def test_attribute_write_goes_through_store_set() -> None:
    proxy = proxied_store({"name": "ada"})
    seen: list[tuple[str, Any]] = []
    proxy.on("change:name", lambda s, value, options: seen.append(("change:name", value)))
    proxy.on("change", lambda s, options: seen.append(("change", None)))

    proxy.name = "grace"

    assert seen == [("change:name", "grace"), ("change", None)]
    assert store_of(proxy).get("name") == "grace"
    assert store_of(proxy).previous_attributes == {"name": "grace"}


def test_attribute_delete_goes_through_store_unset() -> None:
    proxy = proxied_store({"name": "ada", "age": 36})
    seen: list[Any] = []
    proxy.on("change:name", lambda s, value, options: seen.append(value))

    del proxy.name

    assert "name" not in proxy
    assert seen == [ABSENT]
    assert list(proxy) == ["age"]


def test_membership_iteration_and_length() -> None:
    proxy = proxied_store({"a": 1, "b": 2})

    assert "a" in proxy
    assert "c" not in proxy
    assert 1 not in proxy
    assert list(proxy) == ["a", "b"]
    assert len(proxy) == 2
    assert {"a", "b", "set", "on"} <= set(dir(proxy))


def test_item_access() -> None:
    proxy = proxied_store({})

    proxy["a"] = 1
    assert proxy["a"] == 1
    assert store_of(proxy).to_json() == {"a": 1}

    del proxy["a"]
    with pytest.raises(KeyError):
        proxy["a"]


def test_iteration_tolerates_mutation() -> None:
    proxy = proxied_store({"a": 1, "b": 2})

    for name in proxy:
        del proxy[name]

    assert len(proxy) == 0


def test_missing_dunder_raises_attribute_error() -> None:
    proxy = proxied_store({})

    with pytest.raises(AttributeError):
        proxy.__missing_dunder__  # noqa: B018


def test_wraps_existing_store() -> None:
    store = create({"a": 1})

    assert store_of(proxied_store(store)) is store
    assert store_of(create_proxy(store)) is store
    assert create_proxy(store) == ModelProxy(store)
    assert hash(create_proxy(store)) == hash(ModelProxy(store))


def test_rejects_non_store() -> None:
    with pytest.raises(TypeError):
        ModelProxy({"a": 1})  # type: ignore[arg-type]


def test_proxy_chaining_returns_store() -> None:
    proxy = proxied_store({})

    result = proxy.set("a", 1).set("b", 2)

    assert isinstance(result, AttributeStore)
    assert proxy.a == 1
    assert proxy.b == 2


def test_repr_shows_attributes() -> None:
    assert repr(proxied_store({"a": 1})) == "ModelProxy({'a': 1})"


def test_mapping_views_and_dict_conversion() -> None:
    proxy = proxied_store({"a": 1, "b": 2})

    assert proxy.keys() == ["a", "b"]
    assert proxy.values() == [1, 2]
    assert proxy.items() == [("a", 1), ("b", 2)]
    assert dict(proxy) == {"a": 1, "b": 2}
    assert {**proxy} == {"a": 1, "b": 2}


def test_empty_proxy_is_truthy() -> None:
    proxy = proxied_store({})

    assert proxy
    assert len(proxy) == 0
