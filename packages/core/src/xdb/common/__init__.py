from .cancellation import CancellationFlag
from .errors import (
    ErrorCode,
    ErrorSeverity,
    StreamError,
    XDBError,
    CursorError,
    MalformedMetadataError,
    RowFormatError,
    SessionStateError,
)

__all__ = [
    "CancellationFlag",
    "ErrorCode",
    "ErrorSeverity",
    "StreamError",
    "XDBError",
    "CursorError",
    "MalformedMetadataError",
    "RowFormatError",
    "SessionStateError",
]
