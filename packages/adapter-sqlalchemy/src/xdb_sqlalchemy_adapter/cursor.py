from typing import List, Optional

from sqlalchemy import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from xdb.common.errors import CursorError
from xdb.streaming.cursor import FetchedRow

import logging
logger = logging.getLogger(__name__)


class SQLAlchemyCursor:
    """Forward-only cursor over one streamed SQLAlchemy result.

    Owns the connection the statement runs on; :meth:`commit` ends the read
    transaction and returns the connection to the pool.
    """

    def __init__(self, connection: Connection, result: CursorResult):
        self._connection = connection
        self._result = result

    @property
    def closed(self) -> bool:
        return self._result is None and self._connection is None

    def column_names(self) -> List[str]:
        if self._result is None or not self._result.returns_rows:
            return []
        return list(self._result.keys())

    def fetch_next(self) -> Optional[FetchedRow]:
        if self._result is None:
            raise CursorError("Cursor is already closed.")
        try:
            row = self._result.fetchone()
        except SQLAlchemyError as e:
            raise CursorError(f"Failed to fetch next row: {e}") from e
        if row is None:
            return None
        return FetchedRow(tuple(row))

    def close(self) -> None:
        result, self._result = self._result, None
        if result is None:
            return
        try:
            result.close()
        except SQLAlchemyError as e:
            raise CursorError(f"Cannot close result: {e}") from e

    def commit(self) -> None:
        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            connection.commit()
        except SQLAlchemyError as e:
            raise CursorError(f"Cannot commit: {e}") from e
        finally:
            connection.close()
