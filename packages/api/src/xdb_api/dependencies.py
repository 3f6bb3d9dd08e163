from fastapi import Request

from xdb_api.container import Container
from xdb_api.services import HealthService, SessionService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_session_service(request: Request) -> SessionService:
    return get_container(request).sessions


def get_health_service(request: Request) -> HealthService:
    return get_container(request).health
