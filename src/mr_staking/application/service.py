"""StakingApplicationService — thin composition of engine commands and schemas."""

from config.settings import settings
from src.mr_common.amounts import amount_to_display
from src.mr_common.enums import CommandType
from src.mr_engine.application.service import StakingEngine
from src.mr_engine.domain.state import StakingState
from src.mr_staking.application.schemas import (
    ClaimResponse,
    EstimateResponse,
    OpenResponse,
    PauseResponse,
    PositionItem,
    PositionsResponse,
    UnclaimedResponse,
    WeightsResponse,
)


class StakingApplicationService:
    def __init__(self, engine: StakingEngine) -> None:
        self._engine = engine

    async def open(self, caller: str, items: list[tuple[int, int]]) -> OpenResponse:
        slots = await self._engine.execute(
            CommandType.STAKING_OPEN,
            caller,
            items=[{"miner_class": miner_class, "count": count} for miner_class, count in items],
        )
        return OpenResponse(slots=slots)

    async def claim(self, caller: str, slots: list[int], targets: list[int]) -> ClaimResponse:
        receipt = await self._engine.execute(
            CommandType.STAKING_CLAIM, caller, slots=slots, targets=targets
        )
        return ClaimResponse.from_receipt(receipt)

    async def positions(self, participant: str, start: int, end: int | None) -> PositionsResponse:
        def query(state: StakingState, now: int) -> PositionsResponse:
            total = state.staking.position_count(participant)
            if total == 0:
                return PositionsResponse(items=[], total_positions=0)
            last = total - 1 if end is None else end
            positions = state.staking.positions(participant, start, last)
            return PositionsResponse(
                items=[
                    PositionItem.from_position(start + offset, position)
                    for offset, position in enumerate(positions)
                ],
                total_positions=total,
            )

        return await self._engine.read(query)

    async def unclaimed(self, participant: str, slot: int, target: int) -> UnclaimedResponse:
        result = await self._engine.read(
            lambda state, now: state.staking.unclaimed_rewards(participant, slot, target, now)
        )
        return UnclaimedResponse(
            slot=slot,
            target_time=target,
            amount=result.amount,
            amount_display=amount_to_display(result.amount, settings.REWARD_DECIMALS),
            schedule_cursor=result.cursor,
        )

    async def weights(self) -> WeightsResponse:
        table = await self._engine.read(lambda state, now: state.staking.weights.as_dict())
        return WeightsResponse(
            weights={int(miner_class): weight for miner_class, weight in table.items()}
        )

    async def estimate(self, miner_class: int, output_factor: int, duration: int) -> EstimateResponse:
        amount = await self._engine.read(
            lambda state, now: state.staking.estimate(miner_class, output_factor, duration)
        )
        return EstimateResponse(
            amount=amount, amount_display=amount_to_display(amount, settings.REWARD_DECIMALS)
        )

    async def set_paused(self, caller: str, paused: bool) -> PauseResponse:
        command = CommandType.STAKING_PAUSE if paused else CommandType.STAKING_UNPAUSE
        await self._engine.execute(command, caller)
        return PauseResponse(paused=paused)
