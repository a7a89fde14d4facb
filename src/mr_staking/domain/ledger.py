"""PositionLedger — indexed miner positions earning schedule-driven rewards.

Each participant owns an ordered list of positions; the list index is the
slot. Opening stakes miner assets into ledger custody and creates one
position per unit. Claims settle [last_claimed_at, min(target, end_time)]
through the accrual engine and pay out of the treasury.

Every mutating operation validates before it mutates. Operations touching
collaborators (asset transfers, treasury withdrawal) run inside the
engine's transaction, which restores the previous state if anything fails.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import NamedTuple

from src.mr_accrual.engine.accrual import AccrualResult, calculate_rewards, claim_until
from src.mr_common.amounts import reward_by_weight
from src.mr_common.collaborators import AssetRef, AssetRegistryProtocol, TreasuryProtocol
from src.mr_common.enums import MinerClass
from src.mr_common.errors import (
    BatchLengthMismatchError,
    InvalidQuantityError,
    NoRecordsError,
    NotOwnerError,
    PausedError,
    UnauthorizedError,
    WeightTableLockedError,
    WeightTableNotSetError,
)
from src.mr_common.window import WindowPolicy
from src.mr_schedule.domain.adjustment_log import AdjustmentLog
from src.mr_staking.domain.models import (
    ClaimReceipt,
    OpenItem,
    Position,
    PositionsOpened,
    RewardsClaimed,
    WeightTable,
)

logger = logging.getLogger(__name__)


class PositionsSnapshot(NamedTuple):
    paused: bool
    weights: WeightTable | None
    participant: str
    positions: list[Position] | None


class PositionLedger:
    def __init__(
        self,
        *,
        account_id: str,
        owner: str,
        log: AdjustmentLog,
        window: WindowPolicy,
        lock_duration: int,
        treasury: TreasuryProtocol,
        assets: AssetRegistryProtocol,
        asset_contract: str,
        weights: WeightTable | None = None,
    ) -> None:
        if lock_duration <= 0:
            raise ValueError(f"Lock duration must be positive, got {lock_duration}")
        self._account_id = account_id
        self._owner = owner
        self._log = log
        self._window = window
        self._lock_duration = lock_duration
        self._treasury = treasury
        self._assets = assets
        self._asset_contract = asset_contract
        self._weights = weights
        self._paused = False
        self._positions: dict[str, list[Position]] = {}
        self.events: list[PositionsOpened | RewardsClaimed] = []

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def log(self) -> AdjustmentLog:
        return self._log

    @property
    def window(self) -> WindowPolicy:
        return self._window

    @property
    def lock_duration(self) -> int:
        return self._lock_duration

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def weights(self) -> WeightTable:
        if self._weights is None:
            raise WeightTableNotSetError()
        return self._weights

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def set_weight_table(self, caller: str, table: WeightTable) -> None:
        self._require_owner(caller, "set the weight table")
        if self._weights is not None:
            raise WeightTableLockedError()
        self._weights = table

    def pause(self, caller: str) -> None:
        self._require_owner(caller, "pause staking")
        self._paused = True
        logger.info("Staking paused by %s", caller)

    def unpause(self, caller: str) -> None:
        self._require_owner(caller, "unpause staking")
        self._paused = False
        logger.info("Staking unpaused by %s", caller)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def position_count(self, participant: str) -> int:
        return len(self._positions.get(participant, []))

    def position(self, participant: str, slot: int) -> Position:
        positions = self._positions.get(participant, [])
        if not 0 <= slot < len(positions):
            raise NotOwnerError(participant, slot)
        return positions[slot]

    def positions(self, participant: str, start: int, end: int) -> list[Position]:
        """Positions with slot in [start, end], both inclusive."""
        if start > end:
            raise NotOwnerError(participant, start)
        self.position(participant, start)
        self.position(participant, end)
        return list(self._positions[participant][start : end + 1])

    def unclaimed_rewards(
        self, participant: str, slot: int, target: int, now: int
    ) -> AccrualResult:
        position = self.position(participant, slot)
        until = claim_until(position.last_claimed_at, position.end_time, target, now)
        return calculate_rewards(
            self.weights.weight_of(position.miner_class),
            self._log,
            position.schedule_cursor,
            position.last_claimed_at,
            until,
        )

    def estimate(self, miner_class: int, output_factor: int, duration: int) -> int:
        return reward_by_weight(self.weights.weight_of(miner_class), output_factor, duration)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def open(self, caller: str, miner_class: int, count: int, now: int) -> list[int]:
        return self.open_batch(caller, [OpenItem(miner_class, count)], now)

    def open_batch(self, caller: str, items: Sequence[OpenItem], now: int) -> list[int]:
        """Stake miners and open one position per unit. Returns the new slots."""
        self._require_active()
        self._window.require_open(now)
        if not items:
            raise InvalidQuantityError(0)
        weights = self.weights
        for item in items:
            if item.count <= 0:
                raise InvalidQuantityError(item.count)
            weights.weight_of(item.miner_class)
        occurred = self._log.occurred_count(now)
        if occurred == 0:
            raise NoRecordsError()
        cursor = occurred - 1

        self._assets.transfer_in_batch(
            caller,
            [
                (AssetRef(self._asset_contract, int(item.miner_class)), item.count)
                for item in items
            ],
            self._account_id,
        )

        positions = self._positions.setdefault(caller, [])
        slots: list[int] = []
        for item in items:
            miner_class = MinerClass(item.miner_class)
            first_slot = len(positions)
            for _ in range(item.count):
                positions.append(
                    Position(
                        miner_class=miner_class,
                        start_time=now,
                        end_time=now + self._lock_duration,
                        schedule_cursor=cursor,
                        last_claimed_at=now,
                    )
                )
            slots.extend(range(first_slot, len(positions)))
            self.events.append(
                PositionsOpened(caller, miner_class, item.count, first_slot, now)
            )
            logger.info(
                "Positions opened: participant=%s class=%s count=%d first_slot=%d",
                caller, miner_class.name, item.count, first_slot,
            )
        return slots

    def claim(
        self, caller: str, slots: Sequence[int], targets: Sequence[int], now: int
    ) -> ClaimReceipt:
        """Settle each (slot, target) pair and pay the total in one withdrawal.

        The batch is all-or-nothing: every pair is validated and computed on
        staged copies before anything is paid or committed. A slot listed
        twice is settled sequentially.
        """
        self._require_active()
        self._window.require_started(now)
        if len(slots) != len(targets):
            raise BatchLengthMismatchError(len(slots), len(targets))
        if not slots:
            raise InvalidQuantityError(0)

        staged: dict[int, Position] = {}
        items: list[RewardsClaimed] = []
        for slot, target in zip(slots, targets):
            position = staged.get(slot) or replace(self.position(caller, slot))
            until = claim_until(position.last_claimed_at, position.end_time, target, now)
            result = calculate_rewards(
                self.weights.weight_of(position.miner_class),
                self._log,
                position.schedule_cursor,
                position.last_claimed_at,
                until,
            )
            position.last_claimed_at = until
            position.schedule_cursor = result.cursor
            position.claimed_total += result.amount
            staged[slot] = position
            items.append(RewardsClaimed(caller, slot, result.amount, until, result.cursor))

        total = sum(item.amount for item in items)
        if total > 0:
            self._treasury.withdraw(self._account_id, caller, total)

        positions = self._positions[caller]
        for slot, position in staged.items():
            positions[slot] = position
        self.events.extend(items)
        logger.info(
            "Rewards claimed: participant=%s slots=%d total=%d", caller, len(items), total
        )
        return ClaimReceipt(caller, total, tuple(items))

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    def snapshot(self, participant: str) -> PositionsSnapshot:
        """Capture what one command by `participant` can change.

        Positions are replaced, never mutated in place, so a shallow copy of
        the participant's slot list is enough.
        """
        positions = self._positions.get(participant)
        return PositionsSnapshot(
            self._paused,
            self._weights,
            participant,
            list(positions) if positions is not None else None,
        )

    def restore(self, snapshot: PositionsSnapshot) -> None:
        self._paused = snapshot.paused
        self._weights = snapshot.weights
        if snapshot.positions is None:
            self._positions.pop(snapshot.participant, None)
        else:
            self._positions[snapshot.participant] = list(snapshot.positions)

    def _require_active(self) -> None:
        if self._paused:
            raise PausedError()

    def _require_owner(self, caller: str, action: str) -> None:
        if caller != self._owner:
            raise UnauthorizedError(caller, action)
