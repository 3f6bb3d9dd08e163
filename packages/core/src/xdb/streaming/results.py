from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from xdb.common.errors import StreamError


class ResultCode(str, Enum):
    """Outcome of a single poll."""
    INTERMEDIATE = "INTERMEDIATE"
    FINAL = "FINAL"
    ERROR = "ERROR"


class PollResult(BaseModel):
    """What one poll hands back to the driver.

    An ``INTERMEDIATE`` result means the session expects to be polled again
    with the same statement; ``FINAL`` and ``ERROR`` mean its resources have
    already been released.
    """

    code: ResultCode
    text: str = Field(default="", description="Table text, fallback notice or error message.")
    error: Optional[StreamError] = None

    @property
    def is_final(self) -> bool:
        return self.code is not ResultCode.INTERMEDIATE

    @classmethod
    def intermediate(cls, text: str) -> "PollResult":
        return cls(code=ResultCode.INTERMEDIATE, text=text)

    @classmethod
    def final(cls, text: str) -> "PollResult":
        return cls(code=ResultCode.FINAL, text=text)

    @classmethod
    def failure(cls, error: StreamError) -> "PollResult":
        return cls(code=ResultCode.ERROR, text=error.message, error=error)
