from fastapi import APIRouter, Depends
from typing import Annotated
from xdb_api.models.response import SuccessResponse
from xdb_api.dependencies import get_health_service
from xdb_api.services import HealthService

router = APIRouter()

HealthSvc = Annotated[HealthService, Depends(get_health_service)]

@router.get("/health", response_model=SuccessResponse)
async def health_check(
    service: HealthSvc
):
    return service.health_check()


@router.get("/ready", response_model=SuccessResponse)
async def readiness_check(
    service: HealthSvc,
):
    return service.readiness_check()
