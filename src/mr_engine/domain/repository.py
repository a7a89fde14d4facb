"""Journal Protocol — dependency inversion for testability.

Unit tests inject InMemoryJournal; production uses SqlJournal.
"""

from typing import Protocol

from src.mr_engine.domain.commands import Command


class JournalProtocol(Protocol):
    async def append(self, command: Command) -> None: ...

    async def load(self) -> list[Command]: ...
