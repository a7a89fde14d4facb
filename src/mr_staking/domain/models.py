"""Domain models for mr_staking — pure dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass

from src.mr_common.enums import MinerClass, PositionState
from src.mr_common.errors import UnknownMinerClassError


@dataclass
class Position:
    miner_class: MinerClass
    start_time: int
    end_time: int          # start_time + lock duration
    schedule_cursor: int   # index of an AdjustmentRecord with effective_at <= last_claimed_at
    last_claimed_at: int
    claimed_total: int = 0

    @property
    def state(self) -> PositionState:
        if self.last_claimed_at >= self.end_time:
            return PositionState.FULLY_CLAIMED
        if self.last_claimed_at > self.start_time:
            return PositionState.PARTIALLY_CLAIMED
        return PositionState.OPEN


@dataclass(frozen=True)
class WeightTable:
    """Immutable miner class -> weight (hash rate) lookup."""

    entries: tuple[tuple[MinerClass, int], ...]

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, int]) -> "WeightTable":
        entries = []
        for raw_class, weight in sorted(mapping.items()):
            try:
                miner_class = MinerClass(int(raw_class))
            except ValueError:
                raise UnknownMinerClassError(raw_class) from None
            if weight <= 0:
                raise ValueError(f"Weight for {miner_class.name} must be positive, got {weight}")
            entries.append((miner_class, int(weight)))
        return cls(entries=tuple(entries))

    def weight_of(self, miner_class: int) -> int:
        for known, weight in self.entries:
            if known == miner_class:
                return weight
        raise UnknownMinerClassError(miner_class)

    def as_dict(self) -> dict[MinerClass, int]:
        return dict(self.entries)


@dataclass(frozen=True)
class OpenItem:
    miner_class: int
    count: int


@dataclass(frozen=True)
class PositionsOpened:
    participant: str
    miner_class: MinerClass
    count: int
    first_slot: int
    at: int


@dataclass(frozen=True)
class RewardsClaimed:
    participant: str
    slot: int
    amount: int
    claimed_until: int
    schedule_cursor: int


@dataclass(frozen=True)
class ClaimReceipt:
    participant: str
    total: int
    items: tuple[RewardsClaimed, ...]
