from xdb import XDBInterpreter


class HealthService:
    def __init__(self, interpreter: XDBInterpreter):
        self.interpreter = interpreter

    def health_check(self) -> dict:
        """Perform health check."""
        return {
            "success": True,
            "message": "XDB API is running"
        }

    def readiness_check(self) -> dict:
        """Perform readiness check."""
        error = self.interpreter.connect_error
        if error is not None:
            return {
                "success": False,
                "message": error.to_stream_error().get_safe_message()
            }
        return {
            "success": True,
            "message": "XDB API is ready",
            "data": {"active_sessions": len(self.interpreter.sessions)}
        }
