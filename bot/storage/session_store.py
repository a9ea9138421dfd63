"""
Session store.

Per-user conversation state kept in process memory. Sessions do not
survive a restart; an interrupted purchase is simply started again.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from bot.states.session_states import SessionState


@dataclass(frozen=True)
class Session:
    user_id: str
    state: SessionState
    touched_at: float


class SessionStore:
    """One session per canonical user ID."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize session store.

        Args:
            clock: Monotonic time source (seconds)
        """
        self._clock = clock
        self._sessions: dict[str, Session] = {}

    def get(self, user_id: str) -> SessionState | None:
        session = self._sessions.get(user_id)
        return session.state if session else None

    def set(self, user_id: str, state: SessionState) -> None:
        self._sessions[user_id] = Session(user_id, state, self._clock())

    def clear(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def evict_idle(self, max_age: float) -> int:
        """
        Drop sessions untouched for longer than max_age seconds.

        Returns:
            Number of sessions evicted
        """
        cutoff = self._clock() - max_age
        stale = [
            user_id
            for user_id, session in self._sessions.items()
            if session.touched_at < cutoff
        ]
        for user_id in stale:
            del self._sessions[user_id]
        if stale:
            logger.info(f"Evicted {len(stale)} idle sessions")
        return len(stale)
