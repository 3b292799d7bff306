"""Keyed store of live sessions with one writer per session."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .cards import Shape
from .errors import SessionNotFound
from .game import GameMode, GameSession, SessionSnapshot, create_session

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    session: GameSession
    lock: threading.RLock = field(default_factory=threading.RLock)


class SessionRegistry:
    """In-memory sessions keyed by id.

    Mutations of one session are serialized by that session's lock; the
    registry lock only guards the mapping itself and is never held while a
    move runs, so different sessions never wait on each other.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, _Entry] = {}
        self._guard = threading.Lock()

    # Lifecycle ---------------------------------------------------------

    def create(self, participant_ids: Sequence[str], mode: "GameMode | str", **options: Any) -> str:
        session = create_session(participant_ids, mode, **options)
        with self._guard:
            if session.session_id in self._entries:
                raise ValueError(f"Session {session.session_id} already exists.")
            self._entries[session.session_id] = _Entry(session)
        return session.session_id

    def add(self, session: GameSession) -> str:
        with self._guard:
            self._entries[session.session_id] = _Entry(session)
        return session.session_id

    def remove(self, session_id: str) -> None:
        with self._guard:
            entry = self._entries.pop(session_id, None)
        if entry is None:
            raise SessionNotFound(f"Session {session_id} not found.")
        logger.info("Removed session %s", session_id)

    def cleanup_stale(self, max_age_seconds: float, *, now: Optional[float] = None) -> List[str]:
        """Drop sessions idle for longer than ``max_age_seconds``."""
        current = time.time() if now is None else now
        with self._guard:
            stale = [
                session_id
                for session_id, entry in self._entries.items()
                if current - entry.session.updated_at > max_age_seconds
            ]
            for session_id in stale:
                del self._entries[session_id]
        if stale:
            logger.info("Evicted %d stale session(s)", len(stale))
        return stale

    def list_sessions(self) -> List[str]:
        with self._guard:
            return list(self._entries)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        with self._guard:
            return session_id in self._entries

    # Access ------------------------------------------------------------

    def get(self, session_id: str) -> GameSession:
        return self._entry(session_id).session

    @contextmanager
    def locked(self, session_id: str) -> Iterator[GameSession]:
        """Hold the session's lock for a multi-step operation."""
        entry = self._entry(session_id)
        with entry.lock:
            yield entry.session

    def snapshot(self, session_id: str, perspective: Optional[str] = None) -> SessionSnapshot:
        with self.locked(session_id) as session:
            return session.snapshot(perspective)

    # Moves -------------------------------------------------------------

    def play_card(
        self,
        session_id: str,
        participant_id: str,
        card_uid: str,
        requested_shape: "Shape | str | None" = None,
    ) -> SessionSnapshot:
        with self.locked(session_id) as session:
            session.state.play_card(participant_id, card_uid, requested_shape)
            session.touch()
            return session.snapshot(participant_id)

    def draw_card(self, session_id: str, participant_id: str) -> SessionSnapshot:
        with self.locked(session_id) as session:
            session.state.draw_card(participant_id)
            session.touch()
            return session.snapshot(participant_id)

    def _entry(self, session_id: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFound(f"Session {session_id} not found.")
        return entry
