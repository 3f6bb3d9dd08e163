from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict


class ErrorSeverity(str, Enum):
    """Severity levels for session errors."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCode(str, Enum):
    """Standardized error codes surfaced by a poll."""
    CONNECTION_ERROR = "CONNECTION_ERROR"
    MALFORMED_METADATA = "MALFORMED_METADATA"
    ROW_FORMAT_ERROR = "ROW_FORMAT_ERROR"
    INVALID_STATE = "INVALID_STATE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


SAFE_ERROR_MESSAGES = {
    ErrorCode.CONNECTION_ERROR: "The database connection failed while executing the query.",
    ErrorCode.MALFORMED_METADATA: "The query result does not have the shape of an online aggregation query.",
    ErrorCode.UNKNOWN_ERROR: "The query session encountered an unexpected error.",
}


class StreamError(BaseModel):
    """Represents a structured error returned by a failed poll.

    Attributes:
        message (str): A human-readable error message.
        severity (ErrorSeverity): The severity of the error.
        error_code (ErrorCode): The standardized error code.
        session_id (Optional[str]): The session the error belongs to.
        details (Optional[Any]): Additional context or metadata.
    """
    model_config = ConfigDict(extra="ignore")

    message: str
    severity: ErrorSeverity
    error_code: ErrorCode
    session_id: Optional[str] = None
    details: Optional[Any] = None

    def get_safe_message(self) -> str:
        """Returns a sanitized error message safe for display to notebook users.

        If a safe mapping exists for the error code, it is returned.
        Otherwise, the original message is used.

        Returns:
            str: The sanitized error message.
        """
        return SAFE_ERROR_MESSAGES.get(self.error_code, self.message)


class XDBError(Exception):
    """Base class for failures that abort a poll."""

    error_code = ErrorCode.UNKNOWN_ERROR
    severity = ErrorSeverity.ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_stream_error(self, session_id: Optional[str] = None) -> StreamError:
        return StreamError(
            message=self.message,
            severity=self.severity,
            error_code=self.error_code,
            session_id=session_id,
            details=self.details,
        )


class CursorError(XDBError):
    """Opening or reading the result cursor failed (driver or connectivity fault)."""

    error_code = ErrorCode.CONNECTION_ERROR


class MalformedMetadataError(XDBError):
    """The result set has fewer columns than the column plan requires."""

    error_code = ErrorCode.MALFORMED_METADATA
    severity = ErrorSeverity.CRITICAL


class RowFormatError(XDBError):
    """A fetched value could not be formatted (e.g. a non-numeric estimate)."""

    error_code = ErrorCode.ROW_FORMAT_ERROR


class SessionStateError(XDBError):
    """The session was polled in a phase that does not accept polls."""

    error_code = ErrorCode.INVALID_STATE
    severity = ErrorSeverity.WARNING
