"""Shared test fixtures.

The environment is prepared before anything under src/ is imported:
settings are read at import time and JWT_SECRET has no default.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("JOURNAL_BACKEND", "memory")

import pytest  # noqa: E402

from src.mr_common.clock import ManualClock  # noqa: E402
from src.mr_engine.application.service import StakingEngine  # noqa: E402
from src.mr_engine.domain.commands import DeploymentConfig  # noqa: E402
from src.mr_engine.infrastructure.journal import InMemoryJournal  # noqa: E402

T0 = 1_700_000_000
DAY = 86_400
WEEK = 7 * DAY
OWNER = "owner"


def make_config(**overrides: object) -> DeploymentConfig:
    defaults: dict[str, object] = {
        "owner": OWNER,
        "initial_output_factor": 1,
        "staking_start": T0,
        "staking_end": None,
        "lock_duration": 180 * DAY,
        "flat_lock_duration": WEEK,
        "flat_weight": 10000,
        "weight_table": ((0, 10000), (1, 30000), (2, 100000), (3, 300000)),
        "miner_asset_contract": "miner",
    }
    defaults.update(overrides)
    return DeploymentConfig(**defaults)  # type: ignore[arg-type]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(T0)


@pytest.fixture
def journal() -> InMemoryJournal:
    return InMemoryJournal()


@pytest.fixture
async def staking_engine(clock: ManualClock, journal: InMemoryJournal) -> StakingEngine:
    engine = StakingEngine(make_config(), journal, clock)
    await engine.start()
    return engine
