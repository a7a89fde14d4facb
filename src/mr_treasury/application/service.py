"""RewardPoolApplicationService — funding and emergency withdrawal."""

from config.settings import settings
from src.mr_common.amounts import amount_to_display
from src.mr_common.enums import CommandType
from src.mr_engine.application.service import StakingEngine
from src.mr_treasury.application.schemas import PoolBalanceResponse


def _balance_response(balance: int) -> PoolBalanceResponse:
    return PoolBalanceResponse(
        balance=balance, balance_display=amount_to_display(balance, settings.REWARD_DECIMALS)
    )


class RewardPoolApplicationService:
    def __init__(self, engine: StakingEngine) -> None:
        self._engine = engine

    async def balance(self) -> PoolBalanceResponse:
        return _balance_response(await self._engine.read(lambda state, now: state.pool.balance))

    async def deposit(self, caller: str, amount: int) -> PoolBalanceResponse:
        balance = await self._engine.execute(CommandType.POOL_DEPOSIT, caller, amount=amount)
        return _balance_response(balance)

    async def emergency_claim(self, caller: str, recipient: str, amount: int) -> PoolBalanceResponse:
        await self._engine.execute(
            CommandType.POOL_EMERGENCY_CLAIM, caller, recipient=recipient, amount=amount
        )
        return await self.balance()
