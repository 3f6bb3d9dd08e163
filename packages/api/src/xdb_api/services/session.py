from xdb import XDBInterpreter
from xdb_api.models.session import PollRequest, PollResponse


class SessionService:
    def __init__(self, interpreter: XDBInterpreter):
        self.interpreter = interpreter

    def poll(self, session_id: str, request: PollRequest) -> PollResponse:
        result = self.interpreter.interpret(request.statement, session_id=session_id)
        error = result.error
        if error is not None:
            # Never leak driver internals over HTTP
            error = error.model_copy(update={"message": error.get_safe_message(), "details": None})
        return PollResponse(
            session_id=session_id,
            code=result.code,
            text=error.message if error is not None else result.text,
            error=error,
        )

    def cancel(self, session_id: str) -> dict:
        found = self.interpreter.cancel(session_id)
        return {
            "success": found,
            "message": "Cancellation requested" if found else f"No active session '{session_id}'"
        }

    def close(self, session_id: str) -> dict:
        found = self.interpreter.sessions.close(session_id)
        return {
            "success": found,
            "message": "Session closed" if found else f"No active session '{session_id}'"
        }
