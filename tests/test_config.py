from __future__ import annotations

import pytest

from attrstore import AttrStoreConfigError, StoreConfig


def test_defaults() -> None:
    config = StoreConfig()

    assert config.separator == ":"
    assert config.change_event == "change"
    assert config.deep_snapshots is False
    assert config.max_cycle_iterations is None
    assert config.attribute_event("name") == "change:name"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"separator": ""},
        {"change_event": ""},
        {"max_cycle_iterations": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(AttrStoreConfigError):
        StoreConfig(**kwargs)  # type: ignore[arg-type]


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTRSTORE_SEPARATOR", "/")
    monkeypatch.setenv("ATTRSTORE_CHANGE_EVENT", "updated")
    monkeypatch.setenv("ATTRSTORE_DEEP_SNAPSHOTS", "yes")
    monkeypatch.setenv("ATTRSTORE_MAX_CYCLE_ITERATIONS", "50")

    config = StoreConfig.from_env()

    assert config.attribute_event("a") == "updated/a"
    assert config.deep_snapshots is True
    assert config.max_cycle_iterations == 50


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTRSTORE_SEPARATOR", "/")
    monkeypatch.setenv("ATTRSTORE_DEEP_SNAPSHOTS", "1")
    monkeypatch.setenv("ATTRSTORE_MAX_CYCLE_ITERATIONS", "none")

    config = StoreConfig.from_env(separator=".", deep_snapshots=False)

    assert config.separator == "."
    assert config.deep_snapshots is False
    assert config.max_cycle_iterations is None


def test_from_env_rejects_bad_iteration_bound(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTRSTORE_MAX_CYCLE_ITERATIONS", "lots")

    with pytest.raises(AttrStoreConfigError):
        StoreConfig.from_env()
