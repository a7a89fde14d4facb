"""AssetRegistryApplicationService — holdings and operator approvals."""

from src.mr_common.collaborators import AssetRef
from src.mr_common.enums import CommandType
from src.mr_engine.application.service import StakingEngine
from src.mr_assets.application.schemas import AssetBalanceResponse, ApprovalResponse


class AssetRegistryApplicationService:
    def __init__(self, engine: StakingEngine) -> None:
        self._engine = engine

    async def balance(self, holder: str, asset: AssetRef) -> AssetBalanceResponse:
        balance = await self._engine.read(lambda state, now: state.assets.balance_of(holder, asset))
        return AssetBalanceResponse(
            holder=holder, contract=asset.contract, token_class=asset.token_class, balance=balance
        )

    async def credit(
        self, caller: str, holder: str, asset: AssetRef, quantity: int
    ) -> AssetBalanceResponse:
        balance = await self._engine.execute(
            CommandType.ASSET_CREDIT,
            caller,
            holder=holder,
            contract=asset.contract,
            token_class=asset.token_class,
            quantity=quantity,
        )
        return AssetBalanceResponse(
            holder=holder, contract=asset.contract, token_class=asset.token_class, balance=balance
        )

    async def set_approval(self, caller: str, operator: str, approved: bool) -> ApprovalResponse:
        await self._engine.execute(
            CommandType.ASSET_APPROVAL, caller, operator=operator, approved=approved
        )
        return ApprovalResponse(holder=caller, operator=operator, approved=approved)
