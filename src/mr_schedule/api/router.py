"""mr_schedule REST API — output-factor schedule. Mutations are operator-only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.mr_common.response import ApiResponse, respond
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_gateway.auth.dependencies import get_current_participant
from src.mr_schedule.application.schemas import RealTimeRequest, ScheduleFutureRequest
from src.mr_schedule.application.service import ScheduleApplicationService

router = APIRouter(prefix="/schedule", tags=["schedule"])


def get_schedule_service(
    engine: Annotated[StakingEngine, Depends(get_staking_engine)],
) -> ScheduleApplicationService:
    return ScheduleApplicationService(engine)


Service = Annotated[ScheduleApplicationService, Depends(get_schedule_service)]
Caller = Annotated[str, Depends(get_current_participant)]


@router.get("/latest")
async def get_latest(service: Service, request: Request) -> ApiResponse:
    data = await service.latest()
    return respond(request, data.model_dump())


@router.get("/records")
async def list_records(
    service: Service,
    request: Request,
    start: int = Query(0, ge=0, description="First record index (inclusive)"),
    end: int = Query(..., ge=0, description="Last record index (inclusive)"),
    include_pending: bool = Query(False, description="Allow reading the pending record"),
) -> ApiResponse:
    data = await service.records(start, end, include_pending)
    return respond(request, data.model_dump())


@router.get("/occurred-count")
async def get_occurred_count(service: Service, request: Request) -> ApiResponse:
    data = await service.occurred_count()
    return respond(request, data.model_dump())


@router.post("/future")
async def schedule_future(
    body: ScheduleFutureRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.schedule_future(caller, body.effective_at, body.rate)
    return respond(request, data.model_dump())


@router.delete("/future")
async def drop_future(caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.drop_future(caller)
    return respond(request, data.model_dump())


@router.post("/real-time")
async def apply_real_time(
    body: RealTimeRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.apply_now(caller, body.rate)
    return respond(request, data.model_dump())
