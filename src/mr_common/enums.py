"""Global enums — values are persisted in the command journal, keep them stable."""

from enum import Enum, IntEnum


class MinerClass(IntEnum):
    """Miner token classes. The value is the token id inside the miner contract."""

    BASIC = 0
    ADVANCED = 1
    PROFESSIONAL = 2
    ENTERPRISE = 3


class CommandType(str, Enum):
    DEPLOY = "DEPLOY"
    # Schedule
    SCHEDULE_FUTURE = "SCHEDULE_FUTURE"
    DROP_FUTURE = "DROP_FUTURE"
    APPLY_NOW = "APPLY_NOW"
    # Staking
    STAKING_OPEN = "STAKING_OPEN"
    STAKING_CLAIM = "STAKING_CLAIM"
    STAKING_PAUSE = "STAKING_PAUSE"
    STAKING_UNPAUSE = "STAKING_UNPAUSE"
    # Flat mining
    FLAT_ADD_SUPPORTED = "FLAT_ADD_SUPPORTED"
    FLAT_REMOVE_SUPPORTED = "FLAT_REMOVE_SUPPORTED"
    FLAT_MINE = "FLAT_MINE"
    FLAT_CLAIM = "FLAT_CLAIM"
    FLAT_PAUSE = "FLAT_PAUSE"
    FLAT_UNPAUSE = "FLAT_UNPAUSE"
    # Treasury
    POOL_DEPOSIT = "POOL_DEPOSIT"
    POOL_EMERGENCY_CLAIM = "POOL_EMERGENCY_CLAIM"
    # Assets
    ASSET_CREDIT = "ASSET_CREDIT"
    ASSET_APPROVAL = "ASSET_APPROVAL"


class PositionState(str, Enum):
    OPEN = "OPEN"                            # last_claimed_at == start_time
    PARTIALLY_CLAIMED = "PARTIALLY_CLAIMED"  # start_time < last_claimed_at < end_time
    FULLY_CLAIMED = "FULLY_CLAIMED"          # last_claimed_at == end_time
