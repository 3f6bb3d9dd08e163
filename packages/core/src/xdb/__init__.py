# xdb package

from .interpreter import XDBInterpreter
from .sessions import SessionRegistry
from .streaming import (
    ColumnAction,
    ColumnPlan,
    FetchedRow,
    OutputRenderer,
    PollResult,
    QuerySession,
    ResultCode,
    RowProjector,
    SessionPhase,
    build_column_plan,
)
from .common.errors import ErrorSeverity, ErrorCode, StreamError, XDBError

__all__ = [
    "XDBInterpreter",
    "SessionRegistry",
    "ColumnAction",
    "ColumnPlan",
    "FetchedRow",
    "OutputRenderer",
    "PollResult",
    "QuerySession",
    "ResultCode",
    "RowProjector",
    "SessionPhase",
    "build_column_plan",
    "ErrorSeverity",
    "ErrorCode",
    "StreamError",
    "XDBError",
]
