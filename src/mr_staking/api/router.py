"""mr_staking REST API — indexed miner positions. All endpoints require a Bearer token
except the weight table and reward estimate."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.mr_common.response import ApiResponse, respond
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_gateway.auth.dependencies import get_current_participant
from src.mr_staking.application.schemas import ClaimRequest, OpenRequest
from src.mr_staking.application.service import StakingApplicationService

router = APIRouter(prefix="/staking", tags=["staking"])


def get_staking_service(
    engine: Annotated[StakingEngine, Depends(get_staking_engine)],
) -> StakingApplicationService:
    return StakingApplicationService(engine)


Service = Annotated[StakingApplicationService, Depends(get_staking_service)]
Caller = Annotated[str, Depends(get_current_participant)]


@router.post("/open")
async def open_positions(
    body: OpenRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.open(caller, [(item.miner_class, item.count) for item in body.items])
    return respond(request, data.model_dump())


@router.post("/claim")
async def claim(body: ClaimRequest, caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.claim(caller, body.slot_indices, body.target_times)
    return respond(request, data.model_dump())


@router.get("/positions")
async def list_positions(
    caller: Caller,
    service: Service,
    request: Request,
    start: int = Query(0, ge=0, description="First slot (inclusive)"),
    end: int | None = Query(None, ge=0, description="Last slot (inclusive), default: last"),
) -> ApiResponse:
    data = await service.positions(caller, start, end)
    return respond(request, data.model_dump())


@router.get("/positions/{slot}/unclaimed")
async def get_unclaimed(
    slot: int,
    caller: Caller,
    service: Service,
    request: Request,
    target_time: int = Query(..., ge=0, description="Settle up to this timestamp"),
) -> ApiResponse:
    data = await service.unclaimed(caller, slot, target_time)
    return respond(request, data.model_dump())


@router.get("/weights")
async def get_weights(service: Service, request: Request) -> ApiResponse:
    data = await service.weights()
    return respond(request, data.model_dump())


@router.get("/estimate")
async def estimate(
    service: Service,
    request: Request,
    miner_class: int = Query(..., ge=0),
    output_factor: int = Query(..., ge=0),
    duration: int = Query(..., ge=0, description="Seconds"),
) -> ApiResponse:
    data = await service.estimate(miner_class, output_factor, duration)
    return respond(request, data.model_dump())


@router.post("/pause")
async def pause(caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.set_paused(caller, True)
    return respond(request, data.model_dump())


@router.post("/unpause")
async def unpause(caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.set_paused(caller, False)
    return respond(request, data.model_dump())
