# src/pm_quote/application/schemas.py
from pydantic import BaseModel, Field, field_validator

from src.pm_common.enums import SwapDirection, VenueType


class QuoteRequest(BaseModel):
    amount: int | float = Field(gt=0, description="Input amount; integral units for AMM venues")
    direction: SwapDirection

    @field_validator("amount")
    @classmethod
    def finite(cls, v: int | float) -> int | float:
        if v != v or v in (float("inf"), float("-inf")):
            raise ValueError("amount must be a finite number")
        return v


class AmmQuoteData(BaseModel):
    venue_type: VenueType = VenueType.AMM
    in_amount: int
    out_amount: int
    price_impact_bps: int
    fee_amount: int
    direction: SwapDirection
    reserve_in_after: int
    reserve_out_after: int


class LadderLevelData(BaseModel):
    price: float
    size: float


class LadderQuoteData(BaseModel):
    venue_type: VenueType = VenueType.LADDER
    in_amount: float
    out_amount: float
    effective_price: float
    levels_touched: int
    direction: SwapDirection
    ladder_exhausted: bool
    asks: list[LadderLevelData]
    bids: list[LadderLevelData]
