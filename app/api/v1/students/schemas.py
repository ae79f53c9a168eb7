from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    """remaining_amount defaults to tuition_fee - paid_amount."""

    full_name: str = Field(..., min_length=1)
    mobile: str = Field(..., min_length=1, max_length=30)
    grade: str = ""
    tuition_fee: Decimal = Field(..., ge=0)
    paid_amount: Decimal = Field(Decimal("0"), ge=0)
    remaining_amount: Optional[Decimal] = None
    previous_year_debt: Decimal = Field(Decimal("0"), ge=0)


class StudentUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    mobile: Optional[str] = Field(None, min_length=1, max_length=30)
    grade: Optional[str] = None
    tuition_fee: Optional[Decimal] = Field(None, ge=0)
    paid_amount: Optional[Decimal] = Field(None, ge=0)
    remaining_amount: Optional[Decimal] = None
    previous_year_debt: Optional[Decimal] = Field(None, ge=0)


class StudentResponse(BaseModel):
    id: int
    full_name: str
    mobile: str
    grade: str
    tuition_fee: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    previous_year_debt: Decimal
    fiscal_year: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PromoteGradesResponse(BaseModel):
    promoted_count: int = Field(..., alias="promotedCount")

    class Config:
        populate_by_name = True
