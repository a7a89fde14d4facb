"""mr_assets REST API — miner holdings and custody approvals."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.mr_assets.application.schemas import ApprovalRequest, CreditRequest
from src.mr_assets.application.service import AssetRegistryApplicationService
from src.mr_common.collaborators import AssetRef
from src.mr_common.response import ApiResponse, respond
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_gateway.auth.dependencies import get_current_participant

router = APIRouter(prefix="/assets", tags=["assets"])


def get_asset_service(
    engine: Annotated[StakingEngine, Depends(get_staking_engine)],
) -> AssetRegistryApplicationService:
    return AssetRegistryApplicationService(engine)


Service = Annotated[AssetRegistryApplicationService, Depends(get_asset_service)]
Caller = Annotated[str, Depends(get_current_participant)]


@router.get("/balance")
async def get_balance(
    caller: Caller,
    service: Service,
    request: Request,
    contract: str = Query(..., min_length=1),
    token_class: int = Query(..., ge=0),
    holder: str | None = Query(None, description="Defaults to the caller"),
) -> ApiResponse:
    data = await service.balance(holder or caller, AssetRef(contract, token_class))
    return respond(request, data.model_dump())


@router.post("/credit")
async def credit(body: CreditRequest, caller: Caller, service: Service, request: Request) -> ApiResponse:
    data = await service.credit(
        caller, body.holder, AssetRef(body.contract, body.token_class), body.quantity
    )
    return respond(request, data.model_dump())


@router.post("/approval")
async def set_approval(
    body: ApprovalRequest, caller: Caller, service: Service, request: Request
) -> ApiResponse:
    data = await service.set_approval(caller, body.operator, body.approved)
    return respond(request, data.model_dump())
