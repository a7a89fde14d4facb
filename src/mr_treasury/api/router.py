"""mr_treasury REST API — reward pool balance, deposits and emergency claims."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.mr_common.response import ApiResponse, respond
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_gateway.auth.dependencies import get_current_participant
from src.mr_treasury.application.schemas import DepositRequest, EmergencyClaimRequest
from src.mr_treasury.application.service import RewardPoolApplicationService

router = APIRouter(prefix="/treasury", tags=["treasury"])


def get_pool_service(
    engine: Annotated[StakingEngine, Depends(get_staking_engine)],
) -> RewardPoolApplicationService:
    return RewardPoolApplicationService(engine)


Service = Annotated[RewardPoolApplicationService, Depends(get_pool_service)]
Caller = Annotated[str, Depends(get_current_participant)]


@router.get("/balance")
async def get_balance(service: Service, request: Request) -> ApiResponse:
    data = await service.balance()
    return respond(request, data.model_dump())


@router.post("/deposit")
async def deposit(body: DepositRequest, caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.deposit(caller, body.amount)
    return respond(request, data.model_dump())


@router.post("/emergency-claim")
async def emergency_claim(
    body: EmergencyClaimRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.emergency_claim(caller, body.recipient, body.amount)
    return respond(request, data.model_dump())
