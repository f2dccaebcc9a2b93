from __future__ import annotations

import threading

import pytest

from regrelay.core.registry import InMemoryRegistry


def test_register_is_idempotent() -> None:
    reg = InMemoryRegistry()

    first = reg.register("tok-a")
    second = reg.register("tok-a")

    assert reg.list() == ["tok-a"]
    assert reg.count() == 1
    assert second.registered_at == first.registered_at


def test_unregister_absent_is_a_noop() -> None:
    reg = InMemoryRegistry()
    reg.register("tok-a")

    assert reg.unregister("missing") is False
    assert reg.list() == ["tok-a"]

    assert reg.unregister("tok-a") is True
    assert reg.unregister("tok-a") is False
    assert reg.count() == 0


def test_list_keeps_insertion_order() -> None:
    reg = InMemoryRegistry()
    reg.register("a")
    reg.register("b")
    reg.register("a")

    assert reg.list() == ["a", "b"]
    assert reg.count() == 2
    assert reg.get("b") is not None
    assert reg.get("c") is None


def test_empty_ids_are_rejected() -> None:
    reg = InMemoryRegistry()
    with pytest.raises(ValueError):
        reg.register("   ")
    with pytest.raises(ValueError):
        reg.unregister("")


def test_concurrent_registration_keeps_one_entry_per_id() -> None:
    reg = InMemoryRegistry()

    def worker(offset: int) -> None:
        for i in range(200):
            reg.register(f"dev-{(i + offset) % 50}")

    threads = [threading.Thread(target=worker, args=(k,)) for k in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert reg.count() == 50
    assert len(set(reg.list())) == 50

    reg.reset()
    assert reg.list() == []
