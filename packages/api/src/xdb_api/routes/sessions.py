from fastapi import APIRouter, Depends, HTTPException
from typing import Annotated
from xdb_api.models.response import SuccessResponse
from xdb_api.models.session import PollRequest, PollResponse
from xdb_api.dependencies import get_session_service
from xdb_api.services import SessionService

router = APIRouter()

SessionSvc = Annotated[SessionService, Depends(get_session_service)]


# Sync handlers: a poll blocks on the cursor and must not stall the event loop.
# Concurrent polls of one session id are serialized inside the session.
@router.post("/sessions/{session_id}/poll", response_model=PollResponse)
def poll_session(
    session_id: str,
    payload: PollRequest,
    service: SessionSvc,
):
    return service.poll(session_id, payload)


@router.post("/sessions/{session_id}/cancel", response_model=SuccessResponse)
def cancel_session(
    session_id: str,
    service: SessionSvc,
):
    return service.cancel(session_id)


@router.delete("/sessions/{session_id}", response_model=SuccessResponse)
def close_session(
    session_id: str,
    service: SessionSvc,
):
    response = service.close(session_id)
    if not response["success"]:
        raise HTTPException(status_code=404, detail=response["message"])
    return response
