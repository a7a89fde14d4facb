"""Pydantic schemas for the staking API."""

from pydantic import BaseModel, Field

from config.settings import settings
from src.mr_common.amounts import amount_to_display
from src.mr_staking.domain.models import ClaimReceipt, Position

_DECIMALS = settings.REWARD_DECIMALS

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class OpenItemRequest(BaseModel):
    miner_class: int = Field(..., ge=0, description="Miner token class")
    count: int = Field(..., gt=0, description="Units to stake; one position per unit")


class OpenRequest(BaseModel):
    items: list[OpenItemRequest] = Field(..., min_length=1)


class ClaimRequest(BaseModel):
    slot_indices: list[int] = Field(..., min_length=1)
    target_times: list[int] = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class OpenResponse(BaseModel):
    slots: list[int]


class PositionItem(BaseModel):
    slot: int
    miner_class: int
    start_time: int
    end_time: int
    schedule_cursor: int
    last_claimed_at: int
    claimed_total: int
    claimed_total_display: str
    state: str

    @classmethod
    def from_position(cls, slot: int, position: Position) -> "PositionItem":
        return cls(
            slot=slot,
            miner_class=int(position.miner_class),
            start_time=position.start_time,
            end_time=position.end_time,
            schedule_cursor=position.schedule_cursor,
            last_claimed_at=position.last_claimed_at,
            claimed_total=position.claimed_total,
            claimed_total_display=amount_to_display(position.claimed_total, _DECIMALS),
            state=position.state.value,
        )


class PositionsResponse(BaseModel):
    items: list[PositionItem]
    total_positions: int


class UnclaimedResponse(BaseModel):
    slot: int
    target_time: int
    amount: int
    amount_display: str
    schedule_cursor: int


class ClaimItem(BaseModel):
    slot: int
    amount: int
    claimed_until: int
    schedule_cursor: int


class ClaimResponse(BaseModel):
    total: int
    total_display: str
    items: list[ClaimItem]

    @classmethod
    def from_receipt(cls, receipt: ClaimReceipt) -> "ClaimResponse":
        return cls(
            total=receipt.total,
            total_display=amount_to_display(receipt.total, _DECIMALS),
            items=[
                ClaimItem(
                    slot=item.slot,
                    amount=item.amount,
                    claimed_until=item.claimed_until,
                    schedule_cursor=item.schedule_cursor,
                )
                for item in receipt.items
            ],
        )


class WeightsResponse(BaseModel):
    weights: dict[int, int]


class EstimateResponse(BaseModel):
    amount: int
    amount_display: str


class PauseResponse(BaseModel):
    paused: bool
