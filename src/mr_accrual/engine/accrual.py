"""Accrual — integrate weight x output factor over a time interval.

Pure function of its inputs: the same (weight, records, cursor, interval)
always yields the same (cursor, amount). Nothing here reads a clock or
mutates the schedule.
"""

import logging
from typing import NamedTuple

from src.mr_common.amounts import reward_by_weight
from src.mr_common.errors import InvalidTargetError
from src.mr_schedule.domain.adjustment_log import AdjustmentLog

logger = logging.getLogger(__name__)


class AccrualResult(NamedTuple):
    cursor: int  # index of the last record consulted
    amount: int


def calculate_rewards(
    weight: int,
    log: AdjustmentLog,
    from_cursor: int,
    from_time: int,
    to_time: int,
) -> AccrualResult:
    """Reward earned by `weight` over [from_time, to_time].

    Walks forward from `from_cursor`, splitting the interval at every
    record whose effective time falls inside it. Each segment [a, b) earns
    weight * rate(a) * (b - a). Callers must only pass `to_time <= now`, so
    a pending record can never fall inside the interval.
    """
    records = log.records
    if weight < 0:
        raise ValueError(f"Weight must be non-negative, got {weight}")
    if from_time > to_time:
        raise ValueError(f"Interval is inverted: {from_time} > {to_time}")
    if not 0 <= from_cursor < len(records):
        raise ValueError(f"Cursor {from_cursor} outside schedule of {len(records)} records")
    if records[from_cursor].effective_at > from_time:
        raise ValueError(
            f"Cursor {from_cursor} starts at {records[from_cursor].effective_at}, after {from_time}"
        )

    if from_time == to_time:
        return AccrualResult(from_cursor, 0)

    cursor = from_cursor
    # A cursor cached before later records occurred may lag behind from_time.
    while cursor + 1 < len(records) and records[cursor + 1].effective_at <= from_time:
        cursor += 1

    amount = 0
    segment_start = from_time
    while cursor + 1 < len(records) and records[cursor + 1].effective_at <= to_time:
        boundary = records[cursor + 1].effective_at
        amount += reward_by_weight(weight, records[cursor].rate, boundary - segment_start)
        segment_start = boundary
        cursor += 1
    amount += reward_by_weight(weight, records[cursor].rate, to_time - segment_start)

    logger.debug(
        "Accrued weight=%d [%d, %d] cursor %d->%d amount=%d",
        weight, from_time, to_time, from_cursor, cursor, amount,
    )
    return AccrualResult(cursor, amount)


def claim_until(last_claimed_at: int, end_time: int, target: int, now: int) -> int:
    """Resolve the timestamp a claim settles up to.

    The target must lie strictly after the last claim and not in the future;
    it is capped at the position's end. A capped target that makes no
    progress is rejected, so a fully settled position can never pay twice.
    """
    if target > now or target <= last_claimed_at:
        raise InvalidTargetError(target)
    until = min(target, end_time)
    if until <= last_claimed_at:
        raise InvalidTargetError(target)
    return until
