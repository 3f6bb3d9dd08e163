from typing import List, Optional, Sequence

import pytest

from xdb.common.errors import CursorError
from xdb.streaming.cursor import FetchedRow


class FakeCursor:
    """In-memory cursor that records how it was released."""

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence], fail_at: Optional[int] = None):
        self.columns = list(columns)
        self.rows = [tuple(r) for r in rows]
        self.fail_at = fail_at
        self.fetch_count = 0
        self.close_count = 0
        self.commit_count = 0

    def column_names(self) -> List[str]:
        return list(self.columns)

    def fetch_next(self) -> Optional[FetchedRow]:
        if self.fail_at is not None and self.fetch_count == self.fail_at:
            raise CursorError("server closed the connection unexpectedly")
        if self.fetch_count >= len(self.rows):
            return None
        row = self.rows[self.fetch_count]
        self.fetch_count += 1
        return FetchedRow(row)

    def close(self) -> None:
        self.close_count += 1

    def commit(self) -> None:
        self.commit_count += 1


class FakeCursorFactory:
    """Hands out FakeCursors for any statement."""

    def __init__(self, columns=(), rows=(), fail_at=None, open_error=None, connect_error=None):
        self.columns = columns
        self.rows = rows
        self.fail_at = fail_at
        self.open_error = open_error
        self.connect_error = connect_error
        self.cursors: List[FakeCursor] = []
        self.statements: List[str] = []
        self.fetch_sizes: List[int] = []
        self.connected = False

    def connect(self) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    def close(self) -> None:
        self.connected = False

    def open_query(self, statement: str, fetch_size: int = 1) -> FakeCursor:
        if self.open_error is not None:
            raise self.open_error
        self.statements.append(statement)
        self.fetch_sizes.append(fetch_size)
        cursor = FakeCursor(self.columns, self.rows, fail_at=self.fail_at)
        self.cursors.append(cursor)
        return cursor


@pytest.fixture
def group_columns():
    """Grouped online aggregation with one interval column."""
    return ["g", "cnt", "n", "sum", "rel. CI"]


@pytest.fixture
def make_factory():
    def _make(columns=(), rows=(), **kwargs) -> FakeCursorFactory:
        return FakeCursorFactory(columns=columns, rows=rows, **kwargs)
    return _make
