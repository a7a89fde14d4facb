"""StakingState — one deployment: schedule, both ledgers and collaborators.

`apply` dispatches a journal command to the domain. It is the only path by
which state changes, so applying the same commands in the same order always
produces the same state. `checkpoint` captures only what one command can
touch (its caller, the custody accounts, the pool and the schedule tail) so
a rejected or unjournaled command can be rolled back in place.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, NamedTuple

from src.mr_assets.domain.registry import AssetRegistry, HoldingsSnapshot
from src.mr_common.collaborators import AssetRef
from src.mr_common.enums import CommandType
from src.mr_common.errors import AppError, InternalError
from src.mr_common.window import WindowPolicy
from src.mr_engine.domain.commands import (
    FLAT_ACCOUNT_ID,
    STAKING_ACCOUNT_ID,
    Command,
    DeploymentConfig,
)
from src.mr_flat.domain.ledger import FlatRatePositionLedger, FlatSnapshot
from src.mr_schedule.domain.adjustment_log import AdjustmentLog
from src.mr_schedule.domain.models import AdjustmentRecord
from src.mr_staking.domain.ledger import PositionLedger, PositionsSnapshot
from src.mr_staking.domain.models import OpenItem, WeightTable
from src.mr_treasury.domain.pool import PoolSnapshot, RewardPool

logger = logging.getLogger(__name__)


class Applied(NamedTuple):
    result: Any
    events: tuple[Any, ...]


@dataclass(frozen=True)
class Checkpoint:
    applied: int
    log: tuple[int, AdjustmentRecord | None]
    pool: PoolSnapshot
    assets: HoldingsSnapshot
    staking: PositionsSnapshot
    flat: FlatSnapshot


class StakingState:
    def __init__(
        self,
        config: DeploymentConfig,
        deployed_at: int,
        pool: RewardPool,
        assets: AssetRegistry,
        log: AdjustmentLog,
        staking: PositionLedger,
        flat: FlatRatePositionLedger,
    ) -> None:
        self.config = config
        self.deployed_at = deployed_at
        self.pool = pool
        self.assets = assets
        self.log = log
        self.staking = staking
        self.flat = flat
        self.applied = 1  # DEPLOY

    @classmethod
    def deploy(cls, config: DeploymentConfig, now: int) -> "StakingState":
        owner = config.owner
        pool = RewardPool(owner)
        assets = AssetRegistry(owner)
        log = AdjustmentLog(owner, AdjustmentRecord(now, config.initial_output_factor))
        window = WindowPolicy(config.staking_start, config.staking_end)
        staking = PositionLedger(
            account_id=STAKING_ACCOUNT_ID,
            owner=owner,
            log=log,
            window=window,
            lock_duration=config.lock_duration,
            treasury=pool,
            assets=assets,
            asset_contract=config.miner_asset_contract,
        )
        staking.set_weight_table(owner, WeightTable.from_mapping(dict(config.weight_table)))
        flat = FlatRatePositionLedger(
            account_id=FLAT_ACCOUNT_ID,
            owner=owner,
            log=staking.log,
            window=staking.window,
            weight=config.flat_weight,
            lock_duration=config.flat_lock_duration,
            treasury=pool,
            assets=assets,
        )
        pool.add_claimer(owner, STAKING_ACCOUNT_ID)
        pool.add_claimer(owner, FLAT_ACCOUNT_ID)
        logger.info("Deployed at %d: owner=%s output_factor=%d", now, owner, config.initial_output_factor)
        return cls(config, now, pool, assets, log, staking, flat)

    @classmethod
    def replay(cls, commands: Iterable[Command]) -> "StakingState":
        iterator = iter(commands)
        first = next(iterator, None)
        if first is None or first.type != CommandType.DEPLOY:
            raise InternalError("Journal does not start with a DEPLOY command")
        state = cls.deploy(DeploymentConfig.from_payload(first.payload), first.now)
        for command in iterator:
            try:
                state.apply(command)
            except AppError as exc:
                raise InternalError(
                    f"Journal replay failed at {command.type.value} ({command.now}): {exc.message}"
                ) from exc
        return state

    def apply(self, command: Command) -> Applied:
        """Run `command` in place and hand back its result with the events it raised.

        Event buffers are emptied whether or not the command succeeds.
        """
        handler = self._handlers().get(command.type)
        if handler is None:
            raise InternalError(f"Unsupported command: {command.type}")
        try:
            result = handler(command.caller, command.now, command.payload)
        finally:
            events = self._drain_events()
        self.applied += 1
        return Applied(result, events)

    def checkpoint(self, command: Command) -> Checkpoint:
        caller = command.caller
        holders = {caller, STAKING_ACCOUNT_ID, FLAT_ACCOUNT_ID}
        if "holder" in command.payload:
            holders.add(str(command.payload["holder"]))
        return Checkpoint(
            applied=self.applied,
            log=self.log.snapshot(),
            pool=self.pool.snapshot(str(command.payload.get("recipient", caller))),
            assets=self.assets.snapshot(holders),
            staking=self.staking.snapshot(caller),
            flat=self.flat.snapshot(caller),
        )

    def rollback(self, checkpoint: Checkpoint) -> None:
        self.applied = checkpoint.applied
        self.log.restore(checkpoint.log)
        self.pool.restore(checkpoint.pool)
        self.assets.restore(checkpoint.assets)
        self.staking.restore(checkpoint.staking)
        self.flat.restore(checkpoint.flat)

    def _drain_events(self) -> tuple[Any, ...]:
        events: list[Any] = []
        for source in (self.log, self.staking, self.flat, self.pool):
            events.extend(source.events)
            source.events.clear()
        return tuple(events)

    def _handlers(self) -> dict[CommandType, Callable[[str, int, dict[str, Any]], Any]]:
        return {
            CommandType.SCHEDULE_FUTURE: lambda c, now, p: self.log.schedule_future(
                c, int(p["effective_at"]), int(p["rate"]), now
            ),
            CommandType.DROP_FUTURE: lambda c, now, p: self.log.drop_future(c, now),
            CommandType.APPLY_NOW: lambda c, now, p: self.log.apply_now(c, int(p["rate"]), now),
            CommandType.STAKING_OPEN: lambda c, now, p: self.staking.open_batch(
                c, [OpenItem(int(i["miner_class"]), int(i["count"])) for i in p["items"]], now
            ),
            CommandType.STAKING_CLAIM: lambda c, now, p: self.staking.claim(
                c, [int(s) for s in p["slots"]], [int(t) for t in p["targets"]], now
            ),
            CommandType.STAKING_PAUSE: lambda c, now, p: self.staking.pause(c),
            CommandType.STAKING_UNPAUSE: lambda c, now, p: self.staking.unpause(c),
            CommandType.FLAT_ADD_SUPPORTED: lambda c, now, p: self.flat.add_supported(
                c, _asset(p)
            ),
            CommandType.FLAT_REMOVE_SUPPORTED: lambda c, now, p: self.flat.remove_supported(
                c, _asset(p)
            ),
            CommandType.FLAT_MINE: lambda c, now, p: self.flat.mine(c, _asset(p), now),
            CommandType.FLAT_CLAIM: lambda c, now, p: self.flat.claim(c, int(p["target"]), now),
            CommandType.FLAT_PAUSE: lambda c, now, p: self.flat.pause(c),
            CommandType.FLAT_UNPAUSE: lambda c, now, p: self.flat.unpause(c),
            CommandType.POOL_DEPOSIT: lambda c, now, p: self.pool.deposit(c, int(p["amount"])),
            CommandType.POOL_EMERGENCY_CLAIM: lambda c, now, p: self.pool.emergency_claim(
                c, p["recipient"], int(p["amount"])
            ),
            CommandType.ASSET_CREDIT: lambda c, now, p: self.assets.credit(
                c, p["holder"], _asset(p), int(p["quantity"])
            ),
            CommandType.ASSET_APPROVAL: lambda c, now, p: self.assets.set_approval(
                c, p["operator"], bool(p["approved"])
            ),
        }


def _asset(payload: dict[str, Any]) -> AssetRef:
    return AssetRef(str(payload["contract"]), int(payload["token_class"]))
