"""ScheduleApplicationService — schedule reads and operator commands.

Mutations go through the engine so they are journaled; reads run under
the engine lock against committed state.
"""

from src.mr_common.enums import CommandType
from src.mr_engine.application.service import StakingEngine
from src.mr_engine.domain.state import StakingState
from src.mr_schedule.application.schemas import (
    AdjustmentRecordItem,
    OccurredCountResponse,
    RecordsResponse,
)


class ScheduleApplicationService:
    def __init__(self, engine: StakingEngine) -> None:
        self._engine = engine

    async def latest(self) -> AdjustmentRecordItem:
        def query(state: StakingState, now: int) -> AdjustmentRecordItem:
            record = state.log.latest()
            return AdjustmentRecordItem.from_record(len(state.log) - 1, record, now)

        return await self._engine.read(query)

    async def records(self, start: int, end: int, include_pending: bool) -> RecordsResponse:
        def query(state: StakingState, now: int) -> RecordsResponse:
            records = state.log.records_between(start, end, now, allow_pending=include_pending)
            return RecordsResponse(
                items=[
                    AdjustmentRecordItem.from_record(start + offset, record, now)
                    for offset, record in enumerate(records)
                ],
                occurred_count=state.log.occurred_count(now),
            )

        return await self._engine.read(query)

    async def occurred_count(self) -> OccurredCountResponse:
        count = await self._engine.read(lambda state, now: state.log.occurred_count(now))
        return OccurredCountResponse(occurred_count=count)

    async def schedule_future(self, caller: str, effective_at: int, rate: int) -> AdjustmentRecordItem:
        await self._engine.execute(
            CommandType.SCHEDULE_FUTURE, caller, effective_at=effective_at, rate=rate
        )
        return await self.latest()

    async def drop_future(self, caller: str) -> AdjustmentRecordItem:
        await self._engine.execute(CommandType.DROP_FUTURE, caller)
        return await self.latest()

    async def apply_now(self, caller: str, rate: int) -> OccurredCountResponse:
        await self._engine.execute(CommandType.APPLY_NOW, caller, rate=rate)
        return await self.occurred_count()
