from __future__ import annotations

import uuid
from enum import Enum
from threading import Lock
from typing import List, Optional, Tuple

from xdb.common.cancellation import CancellationFlag
from xdb.common.errors import SessionStateError, XDBError
from xdb.common.logger import get_logger, session_context
from .cursor import Cursor, CursorFactory
from .plan import ColumnPlan, build_column_plan
from .projector import RowProjector
from .renderer import OutputRenderer
from .results import PollResult

logger = get_logger(__name__)


class SessionPhase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    STREAMING = "STREAMING"
    FINISHED = "FINISHED"


class QuerySession:
    """Drives one online aggregation statement across repeated polls.

    Each call to :meth:`poll` advances the cursor until one genuine data row
    has been appended (an intermediate result) or until the cursor is
    exhausted or cancellation is observed (a final result). Group padding and
    plan optimization rows are skipped inside the same call.

    The session owns its cursor. The cursor is released exactly once, when
    the session reaches ``FINISHED`` either normally or through an error.
    Concurrent polls are serialized; :meth:`cancel` never waits for a poll.

    An interrupt raised inside a poll (Ctrl-C) releases the cursor and
    counts as a cancellation, so the next poll returns the rows buffered so
    far instead of executing the statement again.
    """

    def __init__(
        self,
        cursor_factory: CursorFactory,
        session_id: Optional[str] = None,
        fetch_size: int = 1,
        renderer: Optional[OutputRenderer] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.fetch_size = fetch_size
        self.phase = SessionPhase.NOT_STARTED
        self.statement: Optional[str] = None
        self.plan: Optional[ColumnPlan] = None
        self.any_interval_defined = False
        self.rows_emitted = 0

        self._cursor_factory = cursor_factory
        self._renderer = renderer or OutputRenderer()
        self._cursor: Optional[Cursor] = None
        self._projector: Optional[RowProjector] = None
        self._buffer: List[str] = []
        self._cancelled = CancellationFlag()
        self._poll_lock = Lock()

    def __repr__(self) -> str:
        return f"QuerySession({self.session_id!r}, phase={self.phase.value})"

    @property
    def buffer(self) -> Tuple[str, ...]:
        return tuple(self._buffer)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Requests cooperative cancellation; observed before the next fetch."""
        if not self._cancelled.is_set():
            logger.info("Cancellation requested for session %s", self.session_id)
        self._cancelled.set()

    def poll(self, statement: str) -> PollResult:
        with self._poll_lock, session_context(self.session_id):
            if self.phase is SessionPhase.FINISHED:
                logger.warning("Poll on finished session %s", self.session_id)
                return PollResult.failure(
                    SessionStateError(
                        "Session already finished; start a new session for a new execution."
                    ).to_stream_error(self.session_id)
                )
            if self.phase is SessionPhase.STREAMING and statement != self.statement:
                logger.warning("Session %s polled with a different statement", self.session_id)
                return PollResult.failure(
                    SessionStateError(
                        "Session is streaming another statement."
                    ).to_stream_error(self.session_id)
                )

            try:
                if self.phase is SessionPhase.NOT_STARTED:
                    self._start(statement)
                return self._advance()
            except XDBError as e:
                logger.error("Poll failed for session %s: %s", self.session_id, e, exc_info=True)
                self.close()
                return PollResult.failure(e.to_stream_error(self.session_id))
            except Exception:
                self.close()
                raise
            except BaseException:
                logger.warning("Poll of session %s interrupted, treating as cancellation", self.session_id)
                self._cancelled.set()
                self._release_cursor()
                if self.phase is SessionPhase.NOT_STARTED:
                    self.statement = statement
                    self.phase = SessionPhase.STREAMING
                raise

    def close(self) -> None:
        """Releases the cursor and discards the buffer. Idempotent."""
        self._release_cursor()
        self._buffer = []
        self._projector = None
        self.phase = SessionPhase.FINISHED

    def _release_cursor(self) -> None:
        cursor, self._cursor = self._cursor, None
        if cursor is None:
            return
        try:
            cursor.close()
        except XDBError as e:
            logger.error("Cannot close cursor of session %s: %s", self.session_id, e)
        try:
            cursor.commit()
        except XDBError as e:
            logger.warning("Cannot commit session %s: %s", self.session_id, e)
        logger.info("Released cursor of session %s", self.session_id)

    def _start(self, statement: str) -> None:
        self.statement = statement
        self.any_interval_defined = False
        self.rows_emitted = 0

        logger.info("Opening cursor for session %s", self.session_id)
        self._cursor = self._cursor_factory.open_query(statement, fetch_size=self.fetch_size)
        self.plan = build_column_plan(self._cursor.column_names())
        self._projector = RowProjector(self.plan)
        self._buffer = [self._renderer.header_line(self.plan)]
        self.phase = SessionPhase.STREAMING

    def _advance(self) -> PollResult:
        while True:
            if self._cancelled.is_set():
                logger.info("Session %s cancelled after %d rows", self.session_id, self.rows_emitted)
                return self._finalize()

            row = self._cursor.fetch_next()
            if row is None:
                return self._finalize()

            outcome = self._projector.project(row)
            if outcome.is_skip:
                continue

            if outcome.interval_defined:
                self.any_interval_defined = True
            self._buffer.append(outcome.line)
            self.rows_emitted += 1
            return PollResult.intermediate(self._renderer.render_table(self._buffer))

    def _finalize(self) -> PollResult:
        text = self._renderer.render_final(self._buffer, self.any_interval_defined)
        if not self.any_interval_defined:
            logger.info("Session %s produced no defined interval, returning fallback notice", self.session_id)
        self.close()
        return PollResult.final(text)
