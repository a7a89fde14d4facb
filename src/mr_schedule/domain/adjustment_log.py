"""AdjustmentLog — append-only, time-ordered output-factor schedule.

Records are kept in strictly increasing `effective_at` order. Records whose
`effective_at <= now` have *occurred* and are immutable. At most one
*pending* record (`effective_at > now`) may exist and it is always the last
element; the operator may replace or drop it until it occurs.
"""

import bisect
import logging

from src.mr_common.errors import (
    DuplicateRateError,
    InvalidScheduleError,
    NoRecordsError,
    NothingPendingError,
    RecordOutOfRangeError,
    UnauthorizedError,
)
from src.mr_schedule.domain.models import AdjustmentRecord, ScheduleChanged

logger = logging.getLogger(__name__)


class AdjustmentLog:
    def __init__(self, operator: str, initial: AdjustmentRecord | None = None) -> None:
        self._operator = operator
        self._records: list[AdjustmentRecord] = [initial] if initial is not None else []
        self.events: list[ScheduleChanged] = []

    @property
    def operator(self) -> str:
        return self._operator

    @property
    def records(self) -> tuple[AdjustmentRecord, ...]:
        """All records, pending one included. Accrual only reads the occurred prefix."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def pending(self, now: int) -> AdjustmentRecord | None:
        if self._records and self._records[-1].is_pending(now):
            return self._records[-1]
        return None

    def occurred_count(self, now: int) -> int:
        return len(self._records) - (1 if self.pending(now) is not None else 0)

    def current_rate(self, now: int) -> int:
        """Rate in effect at `now`."""
        count = self.occurred_count(now)
        if count == 0:
            raise NoRecordsError()
        return self._records[count - 1].rate

    def rate_at(self, timestamp: int) -> int:
        """Rate in effect at an arbitrary timestamp (pending record included)."""
        idx = bisect.bisect_right([r.effective_at for r in self._records], timestamp) - 1
        if idx < 0:
            raise ValueError(f"No output factor in effect at {timestamp}")
        return self._records[idx].rate

    def latest(self) -> AdjustmentRecord:
        """Pending record if one exists, else the most recent occurred record."""
        if not self._records:
            raise NoRecordsError()
        return self._records[-1]

    def segment(self, index: int, now: int, allow_pending: bool = False) -> AdjustmentRecord:
        limit = len(self._records) if allow_pending else self.occurred_count(now)
        if not 0 <= index < limit:
            raise RecordOutOfRangeError(index, self.occurred_count(now))
        return self._records[index]

    def records_between(
        self, start: int, end: int, now: int, allow_pending: bool = False
    ) -> list[AdjustmentRecord]:
        """Records with index in [start, end], both inclusive."""
        if start > end:
            raise RecordOutOfRangeError(start, self.occurred_count(now))
        self.segment(end, now, allow_pending)
        self.segment(start, now, allow_pending)
        return self._records[start : end + 1]

    # ------------------------------------------------------------------
    # Mutations (operator only)
    # ------------------------------------------------------------------

    def schedule_future(self, caller: str, effective_at: int, rate: int, now: int) -> None:
        self._require_operator(caller)
        _check_rate(rate)
        if effective_at <= now:
            raise InvalidScheduleError(f"effective time {effective_at} is not after {now}")
        if self.pending(now) is not None:
            self._records[-1] = AdjustmentRecord(effective_at, rate)
        else:
            self._records.append(AdjustmentRecord(effective_at, rate))
        self.events.append(ScheduleChanged("SCHEDULED", effective_at, rate, now))
        logger.info("Future output factor scheduled: rate=%d at=%d", rate, effective_at)

    def drop_future(self, caller: str, now: int) -> AdjustmentRecord:
        self._require_operator(caller)
        pending = self.pending(now)
        if pending is None:
            raise NothingPendingError()
        self._records.pop()
        self.events.append(ScheduleChanged("DROPPED", pending.effective_at, pending.rate, now))
        logger.info("Future output factor dropped: rate=%d at=%d", pending.rate, pending.effective_at)
        return pending

    def apply_now(self, caller: str, rate: int, now: int) -> AdjustmentRecord:
        self._require_operator(caller)
        _check_rate(rate)
        count = self.occurred_count(now)
        if count > 0:
            last = self._records[count - 1]
            if last.rate == rate:
                raise DuplicateRateError(rate)
            if last.effective_at == now:
                raise InvalidScheduleError(f"an output factor already took effect at {now}")
        record = AdjustmentRecord(now, rate)
        # The pending record, if any, stays last.
        self._records.insert(count, record)
        self.events.append(ScheduleChanged("APPLIED", now, rate, now))
        logger.info("Real-time output factor applied: rate=%d at=%d", rate, now)
        return record

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[int, AdjustmentRecord | None]:
        """Mutations only touch the last record, so length and tail suffice."""
        return len(self._records), (self._records[-1] if self._records else None)

    def restore(self, snapshot: tuple[int, AdjustmentRecord | None]) -> None:
        length, last = snapshot
        del self._records[max(length - 1, 0) :]
        if last is not None:
            self._records.append(last)

    def _require_operator(self, caller: str) -> None:
        if caller != self._operator:
            raise UnauthorizedError(caller, "change the output factor schedule")


def _check_rate(rate: int) -> None:
    if rate < 0:
        raise InvalidScheduleError(f"output factor must be non-negative, got {rate}")
