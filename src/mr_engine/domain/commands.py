"""Journal commands and the frozen deployment configuration.

Every payload is JSON-native so a command round-trips through the journal
unchanged; replaying the journal in order rebuilds the exact state.
"""

from dataclasses import dataclass, field
from typing import Any

from src.mr_common.enums import CommandType

STAKING_ACCOUNT_ID = "ledger:staking"
FLAT_ACCOUNT_ID = "ledger:flat"


@dataclass(frozen=True)
class Command:
    type: CommandType
    caller: str
    now: int  # epoch seconds supplied by the engine clock
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeploymentConfig:
    owner: str
    initial_output_factor: int
    staking_start: int
    staking_end: int | None
    lock_duration: int
    flat_lock_duration: int
    flat_weight: int
    weight_table: tuple[tuple[int, int], ...]
    miner_asset_contract: str

    @classmethod
    def from_settings(cls, settings: Any) -> "DeploymentConfig":
        return cls(
            owner=settings.OWNER_ID,
            initial_output_factor=settings.INITIAL_OUTPUT_FACTOR,
            staking_start=settings.STAKING_START_TIME,
            staking_end=settings.STAKING_END_TIME or None,
            lock_duration=settings.LOCK_DURATION_SECONDS,
            flat_lock_duration=settings.FLAT_LOCK_DURATION_SECONDS,
            flat_weight=settings.FLAT_WEIGHT,
            weight_table=tuple(sorted(settings.WEIGHT_TABLE.items())),
            miner_asset_contract=settings.MINER_ASSET_CONTRACT,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "initial_output_factor": self.initial_output_factor,
            "staking_start": self.staking_start,
            "staking_end": self.staking_end,
            "lock_duration": self.lock_duration,
            "flat_lock_duration": self.flat_lock_duration,
            "flat_weight": self.flat_weight,
            "weight_table": [[k, v] for k, v in self.weight_table],
            "miner_asset_contract": self.miner_asset_contract,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DeploymentConfig":
        return cls(
            owner=payload["owner"],
            initial_output_factor=int(payload["initial_output_factor"]),
            staking_start=int(payload["staking_start"]),
            staking_end=(
                int(payload["staking_end"]) if payload.get("staking_end") is not None else None
            ),
            lock_duration=int(payload["lock_duration"]),
            flat_lock_duration=int(payload["flat_lock_duration"]),
            flat_weight=int(payload["flat_weight"]),
            weight_table=tuple((int(k), int(v)) for k, v in payload["weight_table"]),
            miner_asset_contract=payload["miner_asset_contract"],
        )
