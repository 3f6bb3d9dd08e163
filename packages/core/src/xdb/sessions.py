from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional

from xdb.common.logger import get_logger
from xdb.streaming.cursor import CursorFactory
from xdb.streaming.results import PollResult
from xdb.streaming.session import QuerySession, SessionPhase

logger = get_logger(__name__)


class SessionRegistry:
    """Query sessions keyed by session id (one per notebook paragraph).

    A poll reuses the live session for the id only while it is streaming the
    same statement; otherwise the stale session is closed and a fresh one
    started. Finished sessions are dropped right after their final poll.
    """

    def __init__(self, cursor_factory: CursorFactory, fetch_size: int = 1):
        self.cursor_factory = cursor_factory
        self.fetch_size = fetch_size
        self._sessions: Dict[str, QuerySession] = {}
        self._lock = Lock()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> Optional[QuerySession]:
        return self._sessions.get(session_id)

    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def poll(self, session_id: str, statement: str) -> PollResult:
        session = self._acquire(session_id, statement)
        result = session.poll(statement)
        if session.phase is SessionPhase.FINISHED:
            with self._lock:
                if self._sessions.get(session_id) is session:
                    del self._sessions[session_id]
        return result

    def cancel(self, session_id: str) -> bool:
        """Flags the session for cancellation. Returns False for unknown ids."""
        session = self._sessions.get(session_id)
        if session is None:
            logger.info("Cancel for unknown session %s ignored", session_id)
            return False
        session.cancel()
        return True

    def close(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()

    def _acquire(self, session_id: str, statement: str) -> QuerySession:
        with self._lock:
            existing = self._sessions.get(session_id)
            if (
                existing is not None
                and existing.phase is not SessionPhase.FINISHED
                and (existing.statement is None or existing.statement == statement)
            ):
                return existing

            if existing is not None:
                logger.info("Statement changed for session %s, closing previous execution", session_id)
                existing.close()

            session = QuerySession(
                self.cursor_factory,
                session_id=session_id,
                fetch_size=self.fetch_size,
            )
            self._sessions[session_id] = session
            return session
