"""FlatMiningApplicationService — flat-rate mining commands and reads."""

from config.settings import settings
from src.mr_common.amounts import amount_to_display
from src.mr_common.collaborators import AssetRef
from src.mr_common.enums import CommandType
from src.mr_engine.application.service import StakingEngine
from src.mr_flat.application.schemas import (
    AssetItem,
    FlatClaimResponse,
    FlatPauseResponse,
    FlatStatusResponse,
    FlatUnclaimedResponse,
    SupportedResponse,
)


class FlatMiningApplicationService:
    def __init__(self, engine: StakingEngine) -> None:
        self._engine = engine

    async def mine(self, caller: str, asset: AssetRef) -> FlatStatusResponse:
        position = await self._engine.execute(
            CommandType.FLAT_MINE, caller, contract=asset.contract, token_class=asset.token_class
        )
        return FlatStatusResponse.from_position(position)

    async def claim(self, caller: str, target: int) -> FlatClaimResponse:
        event = await self._engine.execute(CommandType.FLAT_CLAIM, caller, target=target)
        return FlatClaimResponse(
            amount=event.amount,
            amount_display=amount_to_display(event.amount, settings.REWARD_DECIMALS),
            claimed_until=event.claimed_until,
            schedule_cursor=event.schedule_cursor,
        )

    async def status(self, participant: str) -> FlatStatusResponse:
        return await self._engine.read(
            lambda state, now: FlatStatusResponse.from_position(state.flat.status(participant))
        )

    async def unclaimed(self, participant: str, target: int) -> FlatUnclaimedResponse:
        result = await self._engine.read(
            lambda state, now: state.flat.unclaimed_rewards(participant, target, now)
        )
        return FlatUnclaimedResponse(
            target_time=target,
            amount=result.amount,
            amount_display=amount_to_display(result.amount, settings.REWARD_DECIMALS),
            schedule_cursor=result.cursor,
        )

    async def supported(self) -> SupportedResponse:
        assets = await self._engine.read(lambda state, now: sorted(state.flat.supported))
        return SupportedResponse(items=[AssetItem.from_ref(asset) for asset in assets])

    async def set_supported(self, caller: str, asset: AssetRef, supported: bool) -> SupportedResponse:
        command = CommandType.FLAT_ADD_SUPPORTED if supported else CommandType.FLAT_REMOVE_SUPPORTED
        await self._engine.execute(
            command, caller, contract=asset.contract, token_class=asset.token_class
        )
        return await self.supported()

    async def set_paused(self, caller: str, paused: bool) -> FlatPauseResponse:
        command = CommandType.FLAT_PAUSE if paused else CommandType.FLAT_UNPAUSE
        await self._engine.execute(command, caller)
        return FlatPauseResponse(paused=paused)
