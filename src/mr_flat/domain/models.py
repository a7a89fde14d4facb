"""Domain models for mr_flat — pure dataclasses."""

from dataclasses import dataclass

from src.mr_common.collaborators import AssetRef


@dataclass
class FlatPosition:
    asset: AssetRef
    start_time: int
    end_time: int
    schedule_cursor: int
    last_claimed_at: int
    claimed_total: int = 0
    active: bool = True  # stays set after settlement; one flat slot per participant


@dataclass(frozen=True)
class FlatMiningStarted:
    participant: str
    asset: AssetRef
    at: int


@dataclass(frozen=True)
class FlatRewardsClaimed:
    participant: str
    amount: int
    claimed_until: int
    schedule_cursor: int
