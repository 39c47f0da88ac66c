from __future__ import annotations

import threading

import pytest

from bitchess.engine.position import STARTPOS_FEN, Position
from bitchess.protocol.http.session import InMemorySessionStore


def test_create_defaults_to_startpos() -> None:
    store = InMemorySessionStore()
    sid = store.create()
    position = store.get(sid)
    assert position is not None
    assert position.to_fen() == STARTPOS_FEN
    assert len(store) == 1


def test_set_and_delete() -> None:
    store = InMemorySessionStore()
    sid = store.create()
    replacement = Position.from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    store.set(sid, replacement)
    assert store.get(sid) is replacement

    assert store.delete(sid) is True
    assert store.delete(sid) is False
    assert store.get(sid) is None
    with pytest.raises(KeyError):
        store.set(sid, replacement)


def test_locked_unknown_yields_none() -> None:
    store = InMemorySessionStore()
    with store.locked("missing") as position:
        assert position is None


def test_locked_serializes_access() -> None:
    store = InMemorySessionStore()
    sid = store.create()
    entered = threading.Event()
    release = threading.Event()
    seen = []

    def hold() -> None:
        with store.locked(sid):
            entered.set()
            release.wait(timeout=5)
            seen.append("first")

    def follow() -> None:
        with store.locked(sid):
            seen.append("second")

    t1 = threading.Thread(target=hold)
    t1.start()
    assert entered.wait(timeout=5)
    t2 = threading.Thread(target=follow)
    t2.start()
    t2.join(timeout=0.1)
    assert seen == []
    release.set()
    t1.join(timeout=5)
    t2.join(timeout=5)
    assert seen == ["first", "second"]
