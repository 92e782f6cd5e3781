"""In-memory store of form sessions"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from payment_templates.services.form_engine import TemplateFormEngine

logger = logging.getLogger(__name__)


class FormSession:
    """One in-progress submission and the engine that owns its state"""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.engine = TemplateFormEngine()
        self.created_at = datetime.now()
        self.last_active = self.created_at

    def touch(self):
        self.last_active = datetime.now()

    def idle_for(self, now: datetime) -> timedelta:
        return now - self.last_active

    @property
    def saving(self) -> bool:
        """A save is in flight; such sessions are never dropped for capacity"""
        return self.engine.state.busy


class FormSessionStore:
    """Form sessions keyed by id, expired after ``ttl_minutes`` of inactivity.

    At ``max_sessions`` the least recently used session that is not saving is
    dropped to make room.
    """

    def __init__(self, ttl_minutes: int = 30, max_sessions: int = 1000):
        self._sessions: dict[str, FormSession] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._max = max_sessions
        self._lock = asyncio.Lock()

    def _expired(self, session: FormSession, now: datetime) -> bool:
        return session.idle_for(now) >= self._ttl

    async def create(self) -> FormSession:
        async with self._lock:
            if len(self._sessions) >= self._max:
                self._make_room()
            session = FormSession(str(uuid4()))
            self._sessions[session.session_id] = session
            return session

    async def get(self, session_id: str) -> Optional[FormSession]:
        """Session by id; None when unknown or idle past the TTL"""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None or self._expired(session, datetime.now()):
                return None
            session.touch()
            return session

    async def delete(self, session_id: str) -> bool:
        async with self._lock:
            return self._sessions.pop(session_id, None) is not None

    async def evict_expired(self) -> list[str]:
        """Drop sessions idle past the TTL. Returns the dropped ids."""
        async with self._lock:
            now = datetime.now()
            dropped = [sid for sid, s in self._sessions.items() if self._expired(s, now)]
            for sid in dropped:
                self._sessions.pop(sid)
        if dropped:
            logger.info(f"Evicted {len(dropped)} expired form sessions")
        return dropped

    async def sweep(self, interval: int):
        """Evict expired sessions every ``interval`` seconds until cancelled"""
        while True:
            await asyncio.sleep(interval)
            await self.evict_expired()

    def _make_room(self):
        # caller holds the lock
        candidates = [s for s in self._sessions.values() if not s.saving] or list(self._sessions.values())
        if not candidates:
            return
        victim = min(candidates, key=lambda s: s.last_active)
        del self._sessions[victim.session_id]
        logger.warning(f"Session limit reached, dropped {victim.session_id}")

    @property
    def active_count(self) -> int:
        return len(self._sessions)
