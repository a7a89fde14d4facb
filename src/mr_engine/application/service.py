"""StakingEngine — transactional executor for the staking deployment.

All commands and reads are serialized behind one asyncio.Lock, so no
caller ever observes a half-applied command. A command is applied in place
and then appended to the journal; if either step raises, the state is
rolled back to a checkpoint taken before the command and nothing is
journaled.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from src.mr_common.enums import CommandType
from src.mr_common.errors import AppError, EngineNotReadyError
from src.mr_engine.domain.commands import Command, DeploymentConfig
from src.mr_engine.domain.repository import JournalProtocol
from src.mr_engine.domain.state import StakingState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClockProtocol(Protocol):
    def now(self) -> int: ...

    def observe(self, timestamp: int) -> None: ...


class StakingEngine:
    def __init__(
        self, config: DeploymentConfig, journal: JournalProtocol, clock: ClockProtocol
    ) -> None:
        self._config = config
        self._journal = journal
        self._clock = clock
        self._state: StakingState | None = None
        self._lock = asyncio.Lock()

    @property
    def clock(self) -> ClockProtocol:
        return self._clock

    @property
    def state(self) -> StakingState:
        if self._state is None:
            raise EngineNotReadyError()
        return self._state

    @property
    def started(self) -> bool:
        return self._state is not None

    async def start(self) -> None:
        """Rebuild state from the journal, deploying first if it is empty."""
        async with self._lock:
            commands = await self._journal.load()
            if not commands:
                deploy = Command(
                    CommandType.DEPLOY,
                    self._config.owner,
                    self._clock.now(),
                    self._config.to_payload(),
                )
                await self._journal.append(deploy)
                commands = [deploy]
            self._state = StakingState.replay(commands)
            self._clock.observe(commands[-1].now)
            logger.info("Staking engine ready: %d journal entries replayed", len(commands))

    async def execute(self, command_type: CommandType, caller: str, **payload: Any) -> Any:
        async with self._lock:
            state = self.state
            command = Command(command_type, caller, self._clock.now(), payload)
            checkpoint = state.checkpoint(command)
            try:
                applied = state.apply(command)
            except AppError as exc:
                state.rollback(checkpoint)
                logger.info(
                    "Command rejected: %s by %s code=%d %s",
                    command_type.value, caller, exc.code, exc.message,
                )
                raise
            except Exception:
                state.rollback(checkpoint)
                logger.exception("Command failed: %s by %s", command_type.value, caller)
                raise
            try:
                await self._journal.append(command)
            except Exception:
                state.rollback(checkpoint)
                logger.error("Journal append failed, %s by %s discarded", command_type.value, caller)
                raise
            for event in applied.events:
                logger.debug("Event: %r", event)
            return applied.result

    async def read(self, query: Callable[[StakingState, int], T]) -> T:
        """Run a read-only query against committed state at the current time."""
        async with self._lock:
            return query(self.state, self._clock.now())
