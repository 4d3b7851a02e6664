from __future__ import annotations

from typing import Any

import pytest

from attrstore import EventEmitter


def test_listeners_fire_in_registration_order() -> None:
    emitter = EventEmitter()
    calls: list[tuple[str, Any]] = []
    emitter.on("ping", lambda value: calls.append(("first", value)))
    emitter.on("ping", lambda value: calls.append(("second", value)))

    assert emitter.emit("ping", 1) is True
    assert calls == [("first", 1), ("second", 1)]


def test_emit_without_listeners_returns_false() -> None:
    assert EventEmitter().emit("nothing") is False


def test_once_listener_fires_once() -> None:
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.once("ping", calls.append)

    emitter.emit("ping", 1)
    emitter.emit("ping", 2)

    assert calls == [1]
    assert emitter.listener_count("ping") == 0


def test_off_removes_listener_and_ignores_unknown() -> None:
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.on("ping", calls.append)

    emitter.off("ping", calls.append)
    emitter.off("ping", calls.append)
    emitter.off("other", calls.append)
    emitter.emit("ping", 1)

    assert calls == []
    assert emitter.event_names() == []


def test_listener_added_during_emit_waits_for_next_emit() -> None:
    emitter = EventEmitter()
    calls: list[str] = []

    def late(_: Any) -> None:
        calls.append("late")

    def adder(_: Any) -> None:
        calls.append("adder")
        emitter.on("ping", late)

    emitter.once("ping", adder)
    emitter.emit("ping", None)
    emitter.emit("ping", None)

    assert calls == ["adder", "late"]


def test_listener_exception_propagates() -> None:
    emitter = EventEmitter()
    after: list[int] = []

    def boom(_: Any) -> None:
        raise ValueError("bad listener")

    emitter.on("ping", boom)
    emitter.on("ping", after.append)

    with pytest.raises(ValueError, match="bad listener"):
        emitter.emit("ping", 1)
    assert after == []


def test_remove_all_listeners_and_introspection() -> None:
    emitter = EventEmitter()
    emitter.on("a", print).on("a", repr).on("b", print)

    assert emitter.listeners("a") == [print, repr]
    assert emitter.listener_count("a") == 2

    emitter.remove_all_listeners("a")
    assert emitter.event_names() == ["b"]

    emitter.remove_all_listeners()
    assert emitter.event_names() == []


def test_non_callable_listener_rejected() -> None:
    with pytest.raises(TypeError):
        EventEmitter().on("a", "not callable")  # type: ignore[arg-type]
