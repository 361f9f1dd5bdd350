"""In-memory session store, suitable for single-process deployments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from invoice_actions.core.domain.model.auth import Session
from invoice_actions.core.ports.outbound.auth import SessionStore

DEFAULT_MAX_SESSIONS = 10_000


@dataclass
class InMemorySessionStore(SessionStore):
    """Holds at most max_sessions entries; the oldest sign-in is evicted first."""

    max_sessions: int = DEFAULT_MAX_SESSIONS
    _sessions: Dict[str, Session] = field(default_factory=dict)

    def save(self, session: Session) -> None:
        self._sessions[session.token] = session
        while len(self._sessions) > self.max_sessions:
            del self._sessions[next(iter(self._sessions))]

    def get(self, token: str) -> Session | None:
        return self._sessions.get(token)
