from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from ...engine.position import Position


@dataclass
class _Session:
    position: Position
    lock: threading.RLock = field(default_factory=threading.RLock)


class InMemorySessionStore:
    """Thread-safe in-memory position store.

    Positions are not thread-safe themselves, so every read or mutation of a
    session's position happens inside :meth:`locked`, which holds that
    session's lock. The store lock only guards the id → session table.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, _Session] = {}

    def create(self, position: Optional[Position] = None) -> str:
        """Create a new session and return its id."""
        sid = str(uuid.uuid4())
        if position is None:
            position = Position.startpos()
        with self._lock:
            self._sessions[sid] = _Session(position)
        return sid

    def get(self, position_id: str) -> Optional[Position]:
        with self._lock:
            session = self._sessions.get(position_id)
        return session.position if session is not None else None

    def set(self, position_id: str, position: Position) -> None:
        with self._lock:
            session = self._sessions.get(position_id)
            if session is None:
                raise KeyError(position_id)
        with session.lock:
            session.position = position

    def delete(self, position_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(position_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    @contextmanager
    def locked(self, position_id: str) -> Iterator[Optional[Position]]:
        """Hold the session lock and yield its position (``None`` if unknown)."""
        with self._lock:
            session = self._sessions.get(position_id)
        if session is None:
            yield None
            return
        with session.lock:
            yield session.position
