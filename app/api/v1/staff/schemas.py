from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class StaffCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    mobile: str = Field(..., min_length=1, max_length=30)
    role: str = Field(..., min_length=1, max_length=100)
    salary: Decimal = Field(..., ge=0)


class StaffResponse(BaseModel):
    id: int
    full_name: str
    mobile: str
    role: str
    salary: Decimal
    created_at: datetime

    class Config:
        from_attributes = True
