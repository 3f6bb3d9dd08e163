from .health import HealthService
from .session import SessionService


__all__ = [
    "HealthService",
    "SessionService",
]
