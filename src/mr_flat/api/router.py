"""mr_flat REST API — single-slot flat-rate mining."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.mr_common.collaborators import AssetRef
from src.mr_common.response import ApiResponse, respond
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_flat.application.schemas import AssetRequest, FlatClaimRequest
from src.mr_flat.application.service import FlatMiningApplicationService
from src.mr_gateway.auth.dependencies import get_current_participant

router = APIRouter(prefix="/flat", tags=["flat"])


def get_flat_service(
    engine: Annotated[StakingEngine, Depends(get_staking_engine)],
) -> FlatMiningApplicationService:
    return FlatMiningApplicationService(engine)


Service = Annotated[FlatMiningApplicationService, Depends(get_flat_service)]
Caller = Annotated[str, Depends(get_current_participant)]


@router.post("/mine")
async def mine(body: AssetRequest, caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.mine(caller, AssetRef(body.contract, body.token_class))
    return respond(request, data.model_dump())


@router.post("/claim")
async def claim(
    body: FlatClaimRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.claim(caller, body.target_time)
    return respond(request, data.model_dump())


@router.get("/status")
async def get_status(caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.status(caller)
    return respond(request, data.model_dump())


@router.get("/unclaimed")
async def get_unclaimed(
    caller: Caller,
    service: Service,
    request: Request,
    target_time: int = Query(..., ge=0),
) -> ApiResponse:
    data = await service.unclaimed(caller, target_time)
    return respond(request, data.model_dump())


@router.get("/supported")
async def list_supported(service: Service, request: Request) -> ApiResponse:
    data = await service.supported()
    return respond(request, data.model_dump())


@router.post("/supported")
async def add_supported(
    body: AssetRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.set_supported(caller, AssetRef(body.contract, body.token_class), True)
    return respond(request, data.model_dump())


@router.delete("/supported")
async def remove_supported(
    caller: Caller,
    service: Service,
    request: Request,
    contract: str = Query(..., min_length=1),
    token_class: int = Query(..., ge=0),
) -> ApiResponse:
    data = await service.set_supported(caller, AssetRef(contract, token_class), False)
    return respond(request, data.model_dump())


@router.post("/pause")
async def pause(caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.set_paused(caller, True)
    return respond(request, data.model_dump())


@router.post("/unpause")
async def unpause(caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.set_paused(caller, False)
    return respond(request, data.model_dump())
