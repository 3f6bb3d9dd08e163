from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from xdb.common.errors import RowFormatError


class FetchedRow:
    """One row as returned by a cursor, addressed by 0-based column index.

    Values are kept as the driver produced them and converted on access,
    either to text or to an exact ``Decimal``.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Sequence[Any]):
        self._values = tuple(values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FetchedRow({self._values!r})"

    def is_null(self, index: int) -> bool:
        return self._values[index] is None

    def get_text(self, index: int) -> Optional[str]:
        value = self._values[index]
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, Decimal):
            return format(value, "f") if value.is_finite() else str(value)
        if isinstance(value, float):
            return "NaN" if math.isnan(value) else str(value)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        return str(value)

    def get_decimal(self, index: int) -> Optional[Decimal]:
        value = self._values[index]
        if value is None:
            return None
        if isinstance(value, Decimal):
            return value
        if isinstance(value, bool):
            raise RowFormatError(f"Column {index + 1} holds a boolean, not a number.")
        if isinstance(value, int):
            return Decimal(value)
        try:
            # str() keeps the shortest repr of a float instead of its binary expansion
            return Decimal(str(value).strip())
        except InvalidOperation as e:
            raise RowFormatError(
                f"Column {index + 1} value {value!r} is not a decimal number.",
                details={"column": index + 1},
            ) from e


@runtime_checkable
class Cursor(Protocol):
    """Live, forward-only result iterator of a single statement."""

    def column_names(self) -> List[str]:
        """Ordered result column names; empty when the statement returns no rows."""
        ...

    def fetch_next(self) -> Optional[FetchedRow]:
        """Return the next row, or None once the result is exhausted."""
        ...

    def close(self) -> None:
        """Release the result set. Safe to call more than once."""
        ...

    def commit(self) -> None:
        """End the read transaction and give the connection back. Safe to call more than once."""
        ...


@runtime_checkable
class CursorFactory(Protocol):
    """Structural definition of a datasource able to open streaming cursors."""

    def connect(self) -> None:
        """Initialize connections based on config."""
        ...

    def close(self) -> None:
        """Dispose every pooled connection."""
        ...

    def open_query(self, statement: str, fetch_size: int = 1) -> Cursor:
        """Execute ``statement`` and return a cursor fetching ``fetch_size`` rows per round trip."""
        ...
