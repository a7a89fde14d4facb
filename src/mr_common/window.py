"""WindowPolicy — the global active window shared by both ledgers."""

from dataclasses import dataclass

from src.mr_common.errors import InvalidWindowError


@dataclass(frozen=True)
class WindowPolicy:
    start: int
    end: int | None = None  # None = open-ended

    def __post_init__(self) -> None:
        if self.end is not None and self.end <= self.start:
            raise ValueError(f"Window end {self.end} must be after start {self.start}")

    def contains(self, now: int) -> bool:
        if now < self.start:
            return False
        return self.end is None or now < self.end

    def has_started(self, now: int) -> bool:
        return now >= self.start

    def require_open(self, now: int) -> None:
        if not self.contains(now):
            raise InvalidWindowError(now)

    def require_started(self, now: int) -> None:
        if not self.has_started(now):
            raise InvalidWindowError(now)
