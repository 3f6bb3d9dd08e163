from __future__ import annotations

from typing import Optional

from xdb.common.errors import CursorError, XDBError
from xdb.common.logger import get_logger
from xdb.sessions import SessionRegistry
from xdb.streaming.cursor import CursorFactory
from xdb.streaming.results import PollResult

logger = get_logger(__name__)

DEFAULT_SESSION_ID = "default"


class XDBInterpreter:
    """Host-facing entry point: connection lifecycle plus poll and cancel.

    The host calls :meth:`interpret` repeatedly with the same statement and
    session id until it receives a final or error result.
    """

    def __init__(self, cursor_factory: CursorFactory, fetch_size: int = 1):
        self.cursor_factory = cursor_factory
        self.sessions = SessionRegistry(cursor_factory, fetch_size=fetch_size)
        self._connect_error: Optional[XDBError] = None

    def open(self) -> None:
        logger.info("Open database connection")
        self.close()
        try:
            self.cursor_factory.connect()
            self._connect_error = None
            logger.info("Successfully established database connection")
        except CursorError as e:
            logger.error("Cannot open connection: %s", e)
            self._connect_error = e

    def close(self) -> None:
        logger.info("Close database connection")
        self.sessions.close_all()
        self.cursor_factory.close()

    @property
    def connect_error(self) -> Optional[XDBError]:
        return self._connect_error

    def interpret(self, statement: str, session_id: str = DEFAULT_SESSION_ID) -> PollResult:
        if self._connect_error is not None:
            return PollResult.failure(self._connect_error.to_stream_error(session_id))
        return self.sessions.poll(session_id, statement)

    def cancel(self, session_id: str = DEFAULT_SESSION_ID) -> bool:
        return self.sessions.cancel(session_id)
