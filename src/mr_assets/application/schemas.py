"""Pydantic schemas for the asset registry API."""

from pydantic import BaseModel, Field


class CreditRequest(BaseModel):
    holder: str = Field(..., min_length=1, max_length=128)
    contract: str = Field(..., min_length=1, max_length=128)
    token_class: int = Field(..., ge=0)
    quantity: int = Field(..., gt=0)


class ApprovalRequest(BaseModel):
    operator: str = Field(..., min_length=1, max_length=128)
    approved: bool = True


class AssetBalanceResponse(BaseModel):
    holder: str
    contract: str
    token_class: int
    balance: int


class ApprovalResponse(BaseModel):
    holder: str
    operator: str
    approved: bool
