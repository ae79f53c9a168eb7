from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class ShareholderCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    mobile: str = Field(..., min_length=1, max_length=30)
    share_percentage: Decimal = Field(..., gt=0, le=100, description="25.5 means 25.5% of net profit")
    notes: Optional[str] = None


class ShareholderUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    mobile: Optional[str] = Field(None, min_length=1, max_length=30)
    share_percentage: Optional[Decimal] = Field(None, gt=0, le=100)
    notes: Optional[str] = None


class ShareholderResponse(BaseModel):
    id: int
    full_name: str
    mobile: str
    share_percentage: Decimal
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ShareholderShare(BaseModel):
    shareholder_id: int
    full_name: str
    share_percentage: Decimal
    amount: Decimal  # negative when the period is at a loss


class ProfitDistributionResponse(BaseModel):
    """Split of the current period's net profit (or loss) between shareholders."""

    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    total_share_percentage: Decimal
    shares: List[ShareholderShare]
