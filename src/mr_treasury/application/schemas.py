"""Pydantic schemas for the reward pool API."""

from pydantic import BaseModel, Field


class DepositRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Reward token base units")


class EmergencyClaimRequest(BaseModel):
    recipient: str = Field(..., min_length=1, max_length=128)
    amount: int = Field(..., ge=0)


class PoolBalanceResponse(BaseModel):
    balance: int
    balance_display: str
