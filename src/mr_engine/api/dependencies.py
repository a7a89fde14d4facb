"""FastAPI dependency: the process-wide StakingEngine.

Tests override `get_staking_engine` through app.dependency_overrides.
"""

from config.settings import settings
from src.mr_common.clock import SystemClock
from src.mr_common.database import async_session_factory
from src.mr_engine.application.service import StakingEngine
from src.mr_engine.domain.commands import DeploymentConfig
from src.mr_engine.domain.repository import JournalProtocol
from src.mr_engine.infrastructure.journal import InMemoryJournal, SqlJournal

_engine: StakingEngine | None = None


def build_journal(backend: str) -> JournalProtocol:
    if backend == "memory":
        return InMemoryJournal()
    if backend == "postgres":
        return SqlJournal(async_session_factory)
    raise ValueError(f"Unknown JOURNAL_BACKEND: {backend}")


def get_staking_engine() -> StakingEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = StakingEngine(
            DeploymentConfig.from_settings(settings),
            build_journal(settings.JOURNAL_BACKEND),
            SystemClock(),
        )
    return _engine
