"""Command journal storage.

SqlJournal writes one row per committed command into staking_journal
(append-only). Each append runs in its own short transaction; the engine
only treats a command as committed once the append returns.
"""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.mr_common.enums import CommandType
from src.mr_engine.domain.commands import Command

_INSERT_JOURNAL_SQL = text("""
    INSERT INTO staking_journal (command_type, caller, occurred_at, payload)
    VALUES (:command_type, :caller, :occurred_at, :payload)
""")

_LOAD_JOURNAL_SQL = text("""
    SELECT id, command_type, caller, occurred_at, payload
    FROM staking_journal
    ORDER BY id ASC
""")


def _row_to_command(row: Any) -> Command:
    payload = row.payload
    if isinstance(payload, str):
        payload = json.loads(payload)
    return Command(
        type=CommandType(row.command_type),
        caller=row.caller,
        now=int(row.occurred_at),
        payload=payload or {},
    )


class SqlJournal:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, command: Command) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(
                    _INSERT_JOURNAL_SQL,
                    {
                        "command_type": command.type.value,
                        "caller": command.caller,
                        "occurred_at": command.now,
                        "payload": json.dumps(command.payload),
                    },
                )

    async def load(self) -> list[Command]:
        async with self._session_factory() as session:
            rows = (await session.execute(_LOAD_JOURNAL_SQL)).fetchall()
        return [_row_to_command(row) for row in rows]


class InMemoryJournal:
    """Process-local journal for tests and local development."""

    def __init__(self, commands: list[Command] | None = None) -> None:
        self.commands: list[Command] = list(commands or [])

    async def append(self, command: Command) -> None:
        # Round-trip through JSON so payloads behave exactly as after a reload.
        payload = json.loads(json.dumps(command.payload))
        self.commands.append(Command(command.type, command.caller, command.now, payload))

    async def load(self) -> list[Command]:
        return list(self.commands)
