"""Pydantic schemas for the output-factor schedule API."""

from pydantic import BaseModel, Field

from src.mr_schedule.domain.models import AdjustmentRecord

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ScheduleFutureRequest(BaseModel):
    effective_at: int = Field(..., gt=0, description="Epoch seconds, must be in the future")
    rate: int = Field(..., ge=0, description="Output factor taking effect at effective_at")


class RealTimeRequest(BaseModel):
    rate: int = Field(..., ge=0, description="Output factor taking effect immediately")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AdjustmentRecordItem(BaseModel):
    index: int
    effective_at: int
    rate: int
    pending: bool

    @classmethod
    def from_record(cls, index: int, record: AdjustmentRecord, now: int) -> "AdjustmentRecordItem":
        return cls(
            index=index,
            effective_at=record.effective_at,
            rate=record.rate,
            pending=record.is_pending(now),
        )


class RecordsResponse(BaseModel):
    items: list[AdjustmentRecordItem]
    occurred_count: int


class OccurredCountResponse(BaseModel):
    occurred_count: int
