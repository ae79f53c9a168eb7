"""Schemas for the transactional ledgers: income, expenses, payments, salary and food payments."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class IncomeCreate(BaseModel):
    source: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: dt.date = Field(default_factory=dt.date.today)
    description: Optional[str] = None


class IncomeResponse(BaseModel):
    id: int
    source: str
    amount: Decimal
    date: dt.date
    description: Optional[str] = None
    fiscal_year: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class ExpenseCreate(BaseModel):
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: dt.date = Field(default_factory=dt.date.today)
    description: Optional[str] = None


class ExpenseResponse(BaseModel):
    id: int
    category: str
    amount: Decimal
    date: dt.date
    description: Optional[str] = None
    fiscal_year: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class PaymentCreate(BaseModel):
    """Tuition installment. Updates the student's balance and books an income entry."""

    student_id: int
    amount: Decimal = Field(..., gt=0)
    date: dt.date = Field(default_factory=dt.date.today)


class PaymentResponse(BaseModel):
    id: int
    student_id: int
    amount: Decimal
    date: dt.date
    fiscal_year: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class SalaryPaymentCreate(BaseModel):
    """Salary for one staff member and month. Books an expense entry."""

    staff_id: int
    amount: Decimal = Field(..., gt=0)
    month: str = Field(..., pattern=MONTH_PATTERN, description="e.g. 2026-01")
    date: dt.date = Field(default_factory=dt.date.today)
    notes: Optional[str] = None


class SalaryPaymentResponse(BaseModel):
    id: int
    staff_id: int
    amount: Decimal
    month: str
    date: dt.date
    notes: Optional[str] = None
    fiscal_year: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class FoodPaymentCreate(BaseModel):
    """Lunch payment for one student and month. Books an income entry."""

    student_id: int
    amount: Decimal = Field(..., gt=0)
    month: str = Field(..., pattern=MONTH_PATTERN)
    date: dt.date = Field(default_factory=dt.date.today)
    notes: Optional[str] = None


class FoodPaymentResponse(BaseModel):
    id: int
    student_id: int
    amount: Decimal
    month: str
    date: dt.date
    notes: Optional[str] = None
    fiscal_year: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True
