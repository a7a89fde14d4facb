"""Domain models for mr_schedule — pure dataclasses, no business logic."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdjustmentRecord:
    effective_at: int  # epoch seconds
    rate: int          # output factor, reward units per weight per second

    def is_pending(self, now: int) -> bool:
        return self.effective_at > now


@dataclass(frozen=True)
class ScheduleChanged:
    """Event emitted whenever the schedule is mutated."""

    action: str  # "SCHEDULED" | "DROPPED" | "APPLIED"
    effective_at: int
    rate: int
    at: int
