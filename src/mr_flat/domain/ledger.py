"""FlatRatePositionLedger — free mining at one fixed weight.

Reads the output-factor schedule and the active window of the staking
deployment; it owns neither. A participant stakes one allowlisted asset
unit to open their single flat slot, which is never released.
"""

import logging
from dataclasses import replace
from typing import NamedTuple

from src.mr_accrual.engine.accrual import AccrualResult, calculate_rewards, claim_until
from src.mr_common.collaborators import AssetRef, AssetRegistryProtocol, TreasuryProtocol
from src.mr_common.errors import (
    AlreadyMiningError,
    AlreadySupportedError,
    NoRecordsError,
    NotMiningError,
    PausedError,
    UnauthorizedError,
    UnsupportedAssetError,
)
from src.mr_common.window import WindowPolicy
from src.mr_flat.domain.models import FlatMiningStarted, FlatPosition, FlatRewardsClaimed
from src.mr_schedule.domain.adjustment_log import AdjustmentLog

logger = logging.getLogger(__name__)


class FlatSnapshot(NamedTuple):
    paused: bool
    supported: frozenset[AssetRef]
    participant: str
    position: FlatPosition | None


class FlatRatePositionLedger:
    def __init__(
        self,
        *,
        account_id: str,
        owner: str,
        log: AdjustmentLog,
        window: WindowPolicy,
        weight: int,
        lock_duration: int,
        treasury: TreasuryProtocol,
        assets: AssetRegistryProtocol,
    ) -> None:
        if weight <= 0 or lock_duration <= 0:
            raise ValueError(
                f"Weight and lock duration must be positive, got {weight}, {lock_duration}"
            )
        self._account_id = account_id
        self._owner = owner
        self._log = log
        self._window = window
        self._weight = weight
        self._lock_duration = lock_duration
        self._treasury = treasury
        self._assets = assets
        self._paused = False
        self._supported: set[AssetRef] = set()
        self._positions: dict[str, FlatPosition] = {}
        self.events: list[FlatMiningStarted | FlatRewardsClaimed] = []

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def weight(self) -> int:
        return self._weight

    @property
    def lock_duration(self) -> int:
        return self._lock_duration

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def supported(self) -> frozenset[AssetRef]:
        return frozenset(self._supported)

    def is_supported(self, asset: AssetRef) -> bool:
        return asset in self._supported

    def status(self, participant: str) -> FlatPosition:
        position = self._positions.get(participant)
        if position is None:
            raise NotMiningError(participant)
        return position

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def add_supported(self, caller: str, asset: AssetRef) -> None:
        self._require_owner(caller, "change supported assets")
        if asset in self._supported:
            raise AlreadySupportedError(asset)
        self._supported.add(asset)
        logger.info("Flat mining asset supported: %s", asset)

    def remove_supported(self, caller: str, asset: AssetRef) -> None:
        self._require_owner(caller, "change supported assets")
        if asset not in self._supported:
            raise UnsupportedAssetError(asset)
        self._supported.remove(asset)
        logger.info("Flat mining asset removed: %s", asset)

    def pause(self, caller: str) -> None:
        self._require_owner(caller, "pause flat mining")
        self._paused = True

    def unpause(self, caller: str) -> None:
        self._require_owner(caller, "unpause flat mining")
        self._paused = False

    # ------------------------------------------------------------------
    # Mining and claims
    # ------------------------------------------------------------------

    def mine(self, caller: str, asset: AssetRef, now: int) -> FlatPosition:
        if self._paused:
            raise PausedError()
        if asset not in self._supported:
            raise UnsupportedAssetError(asset)
        if caller in self._positions:
            raise AlreadyMiningError(caller)
        self._window.require_open(now)
        occurred = self._log.occurred_count(now)
        if occurred == 0:
            raise NoRecordsError()

        self._assets.transfer_in(caller, asset, 1, self._account_id)
        position = FlatPosition(
            asset=asset,
            start_time=now,
            end_time=now + self._lock_duration,
            schedule_cursor=occurred - 1,
            last_claimed_at=now,
        )
        self._positions[caller] = position
        self.events.append(FlatMiningStarted(caller, asset, now))
        logger.info("Flat mining started: participant=%s asset=%s", caller, asset)
        return position

    def unclaimed_rewards(self, participant: str, target: int, now: int) -> AccrualResult:
        position = self.status(participant)
        until = claim_until(position.last_claimed_at, position.end_time, target, now)
        return calculate_rewards(
            self._weight, self._log, position.schedule_cursor, position.last_claimed_at, until
        )

    def claim(self, caller: str, target: int, now: int) -> FlatRewardsClaimed:
        if self._paused:
            raise PausedError()
        self._window.require_started(now)
        position = replace(self.status(caller))
        until = claim_until(position.last_claimed_at, position.end_time, target, now)
        result = calculate_rewards(
            self._weight, self._log, position.schedule_cursor, position.last_claimed_at, until
        )
        if result.amount > 0:
            self._treasury.withdraw(self._account_id, caller, result.amount)

        position.last_claimed_at = until
        position.schedule_cursor = result.cursor
        position.claimed_total += result.amount
        self._positions[caller] = position
        event = FlatRewardsClaimed(caller, result.amount, until, result.cursor)
        self.events.append(event)
        logger.info("Flat rewards claimed: participant=%s amount=%d", caller, result.amount)
        return event

    def snapshot(self, participant: str) -> FlatSnapshot:
        return FlatSnapshot(
            self._paused,
            frozenset(self._supported),
            participant,
            self._positions.get(participant),
        )

    def restore(self, snapshot: FlatSnapshot) -> None:
        self._paused = snapshot.paused
        self._supported = set(snapshot.supported)
        if snapshot.position is None:
            self._positions.pop(snapshot.participant, None)
        else:
            self._positions[snapshot.participant] = snapshot.position

    def _require_owner(self, caller: str, action: str) -> None:
        if caller != self._owner:
            raise UnauthorizedError(caller, action)
