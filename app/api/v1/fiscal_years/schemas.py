from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class FiscalYearCreate(BaseModel):
    """Create fiscal year. year must be unique."""

    year: str = Field(..., pattern=r"^\d{4}-\d{4}$", description="e.g. 2025-2026")
    start_date: date = Field(..., description="First day of the year, usually 1 September")
    end_date: date = Field(..., description="Last day of the year (must be after start_date)")
    is_current: bool = Field(
        False,
        description="Make this the current year? The previous current year stops being current.",
    )


class FiscalYearResponse(BaseModel):
    id: int
    year: str
    start_date: date
    end_date: date
    is_current: bool
    is_closed: bool
    created_at: datetime
    closed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CloseFiscalYearResponse(BaseModel):
    """Result of a year close. Keys follow the office client's camelCase contract."""

    success: bool = True
    message: str
    promoted_students: int = Field(..., alias="promotedStudents")
    new_year: str = Field(..., alias="newYear")

    class Config:
        populate_by_name = True


class DeleteFiscalYearResponse(BaseModel):
    success: bool = True
