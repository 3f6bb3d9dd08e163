from .cursor import Cursor, CursorFactory, FetchedRow
from .plan import ColumnAction, ColumnPlan, build_column_plan
from .projector import RowOutcome, RowProjector
from .renderer import NO_SAMPLE_NOTICE, TABLE_MAGIC_TAG, OutputRenderer
from .results import PollResult, ResultCode
from .session import QuerySession, SessionPhase

__all__ = [
    "Cursor",
    "CursorFactory",
    "FetchedRow",
    "ColumnAction",
    "ColumnPlan",
    "build_column_plan",
    "RowOutcome",
    "RowProjector",
    "NO_SAMPLE_NOTICE",
    "TABLE_MAGIC_TAG",
    "OutputRenderer",
    "PollResult",
    "ResultCode",
    "QuerySession",
    "SessionPhase",
]
