"""Tests for mr_accrual.engine.accrual — reward integration over the schedule."""

import pytest

from src.mr_accrual.engine.accrual import AccrualResult, calculate_rewards, claim_until
from src.mr_common.errors import InvalidTargetError
from src.mr_schedule.domain.adjustment_log import AdjustmentLog
from src.mr_schedule.domain.models import AdjustmentRecord

T0 = 1_700_000_000
WEEK = 604_800
OP = "owner"


def _log(rate: int = 1) -> AdjustmentLog:
    return AdjustmentLog(OP, AdjustmentRecord(T0, rate))


class TestCalculateRewards:
    def test_one_week_constant_rate(self) -> None:
        result = calculate_rewards(10000, _log(), 0, T0, T0 + WEEK)
        assert result == AccrualResult(cursor=0, amount=10000 * 604800)

    def test_rate_change_mid_interval(self) -> None:
        log = _log()
        log.schedule_future(OP, T0 + WEEK, 2, T0)
        result = calculate_rewards(10000, log, 0, T0, T0 + 907200)
        assert result.amount == 10000 * 604800 * 1 + 10000 * 302400 * 2
        assert result.cursor == 1

    def test_basic_miner_week(self) -> None:
        result = calculate_rewards(10000, _log(803571429), 0, T0, T0 + WEEK)
        assert result.amount == 4_860_000_002_592_000_000

    def test_empty_interval(self) -> None:
        assert calculate_rewards(10000, _log(), 0, T0 + 5, T0 + 5) == AccrualResult(0, 0)

    def test_stale_cursor_fast_forwards(self) -> None:
        log = _log()
        log.apply_now(OP, 3, T0 + 100)
        log.apply_now(OP, 4, T0 + 200)
        result = calculate_rewards(1, log, 0, T0 + 250, T0 + 260)
        assert result == AccrualResult(cursor=2, amount=40)

    def test_boundary_at_to_time_moves_cursor(self) -> None:
        log = _log()
        log.apply_now(OP, 3, T0 + 100)
        result = calculate_rewards(1, log, 0, T0, T0 + 100)
        assert result == AccrualResult(cursor=1, amount=100)

    def test_pure(self) -> None:
        log = _log()
        log.apply_now(OP, 3, T0 + 100)
        first = calculate_rewards(7, log, 0, T0 + 10, T0 + 300)
        second = calculate_rewards(7, log, 0, T0 + 10, T0 + 300)
        assert first == second

    @pytest.mark.parametrize("mid", [T0, T0 + 1, T0 + 100, T0 + 150, T0 + 299, T0 + 300])
    def test_additive_split(self, mid: int) -> None:
        log = _log()
        log.apply_now(OP, 3, T0 + 100)
        log.apply_now(OP, 5, T0 + 200)
        whole = calculate_rewards(9, log, 0, T0, T0 + 300)
        left = calculate_rewards(9, log, 0, T0, mid)
        right = calculate_rewards(9, log, left.cursor, mid, T0 + 300)
        assert left.amount + right.amount == whole.amount
        assert right.cursor == whole.cursor

    def test_dropped_future_has_no_effect(self) -> None:
        baseline = calculate_rewards(10000, _log(), 0, T0, T0 + 1000)
        log = _log()
        log.schedule_future(OP, T0 + 500, 9, T0)
        log.drop_future(OP, T0 + 10)
        assert calculate_rewards(10000, log, 0, T0, T0 + 1000) == baseline

    def test_zero_rate_segment(self) -> None:
        log = _log()
        log.apply_now(OP, 0, T0 + 100)
        assert calculate_rewards(1, log, 0, T0, T0 + 500).amount == 100

    @pytest.mark.parametrize(
        "weight, cursor, start, end",
        [(-1, 0, T0, T0 + 1), (1, 0, T0 + 2, T0 + 1), (1, 5, T0, T0 + 1), (1, 0, T0 - 1, T0)],
    )
    def test_invalid_inputs(self, weight: int, cursor: int, start: int, end: int) -> None:
        with pytest.raises(ValueError):
            calculate_rewards(weight, _log(), cursor, start, end)


class TestClaimUntil:
    def test_caps_at_end(self) -> None:
        assert claim_until(100, 200, 250, 300) == 200

    def test_target_in_future(self) -> None:
        with pytest.raises(InvalidTargetError):
            claim_until(100, 200, 150, 120)

    def test_target_equal_to_last_claimed(self) -> None:
        with pytest.raises(InvalidTargetError):
            claim_until(100, 200, 100, 300)

    def test_no_progress_after_full_settlement(self) -> None:
        with pytest.raises(InvalidTargetError):
            claim_until(200, 200, 250, 300)
