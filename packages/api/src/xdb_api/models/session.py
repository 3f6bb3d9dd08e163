from pydantic import BaseModel, Field
from typing import Optional

from xdb.common.errors import StreamError
from xdb.streaming.results import ResultCode


class PollRequest(BaseModel):
    statement: str = Field(min_length=1, description="Online aggregation SQL statement.")


class PollResponse(BaseModel):
    session_id: str
    code: ResultCode
    text: str
    error: Optional[StreamError] = None
