"""In-memory tutoring sessions and their expiry sweeper.

Sessions live only as long as the process. One ``asyncio.Lock`` guards the
whole session map: creation, appends and sweep deletions are mutually
exclusive, so concurrent turns on one session never lose an update.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Any

from makia.core.sentiment import Sentiment
from makia.logging_config import get_logger
from makia.observability.metrics import record_sessions_active, record_sessions_expired

logger: Any = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """One learner/tutor exchange. Immutable once recorded."""

    user_text: str
    bot_text: str
    points_awarded: int
    sentiment: Sentiment = Sentiment.NEUTRAL
    channel: str = "text"
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class TutorSession:
    """Accumulated turns and reward points for one client session."""

    session_id: str
    active_profile_id: str
    turns: list[ConversationTurn] = field(default_factory=list)
    total_points: int = 0
    created_at: datetime = field(default_factory=utc_now)

    @property
    def last_activity(self) -> datetime | None:
        """Timestamp of the most recent turn, if any."""
        return self.turns[-1].created_at if self.turns else None

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        last = self.last_activity
        return last is not None and last < now - ttl

    def _append(self, turn: ConversationTurn) -> None:
        self.turns.append(turn)
        self.total_points += turn.points_awarded


class SessionStore:
    """Owner of every live ``TutorSession``, keyed by client session id."""

    def __init__(self) -> None:
        self._sessions: dict[str, TutorSession] = {}
        self._lock = asyncio.Lock()
        self._sweep_lock = asyncio.Lock()

    async def get_or_create(self, session_id: str, initial_profile_id: str) -> TutorSession:
        """Return the session, creating an empty one on first sight."""
        async with self._lock:
            return self._get_or_create_locked(session_id, initial_profile_id)

    async def append_turn(self, session_id: str | None, turn: ConversationTurn) -> None:
        """Append a turn and add its points.

        Silently ignored for an empty or unknown session id: sessionless
        turns are valid and simply not tracked.
        """
        if not session_id:
            return
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return
            session._append(turn)

    async def record_turn(
        self,
        session_id: str | None,
        profile_id: str,
        turn: ConversationTurn,
    ) -> TutorSession | None:
        """Create-if-absent and append in a single critical section.

        Returns:
            A snapshot of the updated session, or None for a sessionless turn
        """
        if not session_id:
            return None
        async with self._lock:
            session = self._get_or_create_locked(session_id, profile_id)
            session._append(turn)
            return self._copy(session)

    async def snapshot(self, session_id: str) -> TutorSession | None:
        """Copy of a session; mutating it does not touch the store."""
        async with self._lock:
            session = self._sessions.get(session_id)
            return self._copy(session) if session else None

    async def get(self, session_id: str) -> TutorSession | None:
        return await self.snapshot(session_id)

    async def sweep_expired(self, now: datetime, ttl: timedelta) -> list[str]:
        """Drop sessions whose latest turn is older than ``now - ttl``.

        Only one sweep runs at a time; a second caller waits for the first.

        Returns:
            The removed session ids
        """
        async with self._sweep_lock, self._lock:
            expired = [
                session_id
                for session_id, session in self._sessions.items()
                if session.is_expired(now, ttl)
            ]
            for session_id in expired:
                del self._sessions[session_id]
                logger.info(f"Session {session_id} cleared from memory")

            remaining = len(self._sessions)

        record_sessions_expired(len(expired))
        record_sessions_active(remaining)
        return expired

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def _get_or_create_locked(self, session_id: str, profile_id: str) -> TutorSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = TutorSession(session_id=session_id, active_profile_id=profile_id)
            self._sessions[session_id] = session
            record_sessions_active(len(self._sessions))
            logger.debug(f"Created session {session_id} (profile: {profile_id})")
        return session

    @staticmethod
    def _copy(session: TutorSession) -> TutorSession:
        return replace(session, turns=list(session.turns))


class SessionSweeper:
    """Background task that periodically expires idle sessions.

    Started and stopped with the application lifespan. A single loop task
    means sweeps never overlap; a missed or late tick is harmless.
    """

    def __init__(
        self,
        store: SessionStore,
        ttl: timedelta,
        interval: timedelta | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if interval is None:
            interval = ttl
        if ttl <= timedelta(0) or interval <= timedelta(0):
            raise ValueError("Session TTL and sweep interval must be positive")
        self._store = store
        self._ttl = ttl
        self._interval = interval
        self._clock = clock
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the sweep loop on the running event loop. Idempotent."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="session-sweeper")
        logger.info(
            f"Session sweeper started (ttl: {self._ttl.total_seconds():.0f}s, "
            f"interval: {self._interval.total_seconds():.0f}s)"
        )

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Session sweeper stopped")

    async def sweep_once(self) -> list[str]:
        return await self._store.sweep_expired(self._clock(), self._ttl)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval.total_seconds())
            try:
                removed = await self.sweep_once()
                if removed:
                    logger.info(f"Expired {len(removed)} idle sessions")
            except Exception:
                logger.exception("Session sweep failed")
