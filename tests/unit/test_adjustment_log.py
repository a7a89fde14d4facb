"""Tests for mr_schedule.domain.adjustment_log."""

import pytest

from src.mr_common.errors import (
    DuplicateRateError,
    InvalidScheduleError,
    NoRecordsError,
    NothingPendingError,
    RecordOutOfRangeError,
    UnauthorizedError,
)
from src.mr_schedule.domain.adjustment_log import AdjustmentLog
from src.mr_schedule.domain.models import AdjustmentRecord

T0 = 1_700_000_000
OP = "owner"


@pytest.fixture
def log() -> AdjustmentLog:
    return AdjustmentLog(OP, AdjustmentRecord(T0, 1))


class TestReads:
    def test_initial_state(self, log: AdjustmentLog) -> None:
        assert log.occurred_count(T0) == 1
        assert log.current_rate(T0) == 1
        assert log.pending(T0) is None
        assert log.latest() == AdjustmentRecord(T0, 1)

    def test_empty_log(self) -> None:
        empty = AdjustmentLog(OP)
        assert empty.occurred_count(T0) == 0
        with pytest.raises(NoRecordsError):
            empty.current_rate(T0)
        with pytest.raises(NoRecordsError):
            empty.latest()

    def test_rate_at(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 3, T0)
        assert log.rate_at(T0 + 99) == 1
        assert log.rate_at(T0 + 100) == 3
        with pytest.raises(ValueError):
            log.rate_at(T0 - 1)

    def test_segment_hides_pending(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 3, T0)
        with pytest.raises(RecordOutOfRangeError):
            log.segment(1, T0)
        assert log.segment(1, T0, allow_pending=True).rate == 3

    def test_records_between_is_inclusive(self, log: AdjustmentLog) -> None:
        log.apply_now(OP, 2, T0 + 10)
        log.apply_now(OP, 3, T0 + 20)
        records = log.records_between(0, 2, T0 + 20)
        assert [r.rate for r in records] == [1, 2, 3]
        assert [r.rate for r in log.records_between(1, 1, T0 + 20)] == [2]

    def test_records_between_rejects_inverted_range(self, log: AdjustmentLog) -> None:
        with pytest.raises(RecordOutOfRangeError):
            log.records_between(1, 0, T0)


class TestScheduleFuture:
    def test_pending_becomes_occurred(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0)
        assert log.pending(T0 + 99) == AdjustmentRecord(T0 + 100, 5)
        assert log.occurred_count(T0 + 99) == 1
        assert log.occurred_count(T0 + 100) == 2
        assert log.current_rate(T0 + 100) == 5

    def test_overwrites_pending(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0)
        log.schedule_future(OP, T0 + 200, 6, T0 + 50)
        assert len(log) == 2
        assert log.latest() == AdjustmentRecord(T0 + 200, 6)

    def test_must_be_in_future(self, log: AdjustmentLog) -> None:
        with pytest.raises(InvalidScheduleError):
            log.schedule_future(OP, T0, 5, T0)

    def test_negative_rate_rejected(self, log: AdjustmentLog) -> None:
        with pytest.raises(InvalidScheduleError):
            log.schedule_future(OP, T0 + 1, -1, T0)

    def test_operator_only(self, log: AdjustmentLog) -> None:
        with pytest.raises(UnauthorizedError):
            log.schedule_future("mallory", T0 + 100, 5, T0)

    def test_emits_event(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0)
        assert log.events[-1].action == "SCHEDULED"


class TestDropFuture:
    def test_drop_restores_previous_schedule(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0)
        dropped = log.drop_future(OP, T0 + 50)
        assert dropped == AdjustmentRecord(T0 + 100, 5)
        assert log.records == (AdjustmentRecord(T0, 1),)

    def test_nothing_pending(self, log: AdjustmentLog) -> None:
        with pytest.raises(NothingPendingError):
            log.drop_future(OP, T0)

    def test_cannot_drop_after_it_occurred(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0)
        with pytest.raises(NothingPendingError):
            log.drop_future(OP, T0 + 100)


class TestApplyNow:
    def test_duplicate_rate_rejected(self, log: AdjustmentLog) -> None:
        with pytest.raises(DuplicateRateError):
            log.apply_now(OP, 1, T0 + 10)

    def test_increments_occurred_count_by_one(self, log: AdjustmentLog) -> None:
        before = log.occurred_count(T0 + 10)
        log.apply_now(OP, 2, T0 + 10)
        assert log.occurred_count(T0 + 10) == before + 1
        assert log.current_rate(T0 + 10) == 2

    def test_inserts_before_pending(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0)
        log.apply_now(OP, 2, T0 + 10)
        assert [r.rate for r in log.records] == [1, 2, 5]
        assert log.pending(T0 + 10) == AdjustmentRecord(T0 + 100, 5)

    def test_same_second_rejected(self, log: AdjustmentLog) -> None:
        with pytest.raises(InvalidScheduleError):
            log.apply_now(OP, 2, T0)

    def test_records_stay_ordered(self, log: AdjustmentLog) -> None:
        log.apply_now(OP, 2, T0 + 10)
        log.apply_now(OP, 3, T0 + 20)
        times = [r.effective_at for r in log.records]
        assert times == sorted(times)
        assert len(set(times)) == len(times)


class TestSnapshot:
    def test_restore_undoes_apply_now_before_pending(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0 + 10)
        snapshot = log.snapshot()
        before = log.records
        log.apply_now(OP, 2, T0 + 20)
        log.restore(snapshot)
        assert log.records == before

    def test_restore_undoes_drop_and_overwrite(self, log: AdjustmentLog) -> None:
        log.schedule_future(OP, T0 + 100, 5, T0 + 10)
        before = log.records
        snapshot = log.snapshot()
        log.drop_future(OP, T0 + 20)
        log.restore(snapshot)
        assert log.records == before

        log.schedule_future(OP, T0 + 200, 7, T0 + 20)
        log.restore(snapshot)
        assert log.records == before

    def test_restore_on_empty_log(self) -> None:
        log = AdjustmentLog(OP)
        snapshot = log.snapshot()
        log.schedule_future(OP, T0 + 100, 5, T0)
        log.restore(snapshot)
        assert len(log) == 0
