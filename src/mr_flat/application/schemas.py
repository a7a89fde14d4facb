"""Pydantic schemas for the flat-rate mining API."""

from pydantic import BaseModel, Field

from config.settings import settings
from src.mr_common.amounts import amount_to_display
from src.mr_common.collaborators import AssetRef
from src.mr_flat.domain.models import FlatPosition

_DECIMALS = settings.REWARD_DECIMALS


class AssetRequest(BaseModel):
    contract: str = Field(..., min_length=1, max_length=128)
    token_class: int = Field(..., ge=0)


class FlatClaimRequest(BaseModel):
    target_time: int = Field(..., ge=0)


class AssetItem(BaseModel):
    contract: str
    token_class: int

    @classmethod
    def from_ref(cls, asset: AssetRef) -> "AssetItem":
        return cls(contract=asset.contract, token_class=asset.token_class)


class FlatStatusResponse(BaseModel):
    asset: AssetItem
    start_time: int
    end_time: int
    schedule_cursor: int
    last_claimed_at: int
    claimed_total: int
    claimed_total_display: str
    active: bool

    @classmethod
    def from_position(cls, position: FlatPosition) -> "FlatStatusResponse":
        return cls(
            asset=AssetItem.from_ref(position.asset),
            start_time=position.start_time,
            end_time=position.end_time,
            schedule_cursor=position.schedule_cursor,
            last_claimed_at=position.last_claimed_at,
            claimed_total=position.claimed_total,
            claimed_total_display=amount_to_display(position.claimed_total, _DECIMALS),
            active=position.active,
        )


class FlatUnclaimedResponse(BaseModel):
    target_time: int
    amount: int
    amount_display: str
    schedule_cursor: int


class FlatClaimResponse(BaseModel):
    amount: int
    amount_display: str
    claimed_until: int
    schedule_cursor: int


class SupportedResponse(BaseModel):
    items: list[AssetItem]


class FlatPauseResponse(BaseModel):
    paused: bool
