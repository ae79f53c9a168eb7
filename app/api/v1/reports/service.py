"""Financial totals over income and expenses."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.ledger import current_period_filter
from app.core.models import Expense, Income

from .schemas import MonthlyReportResponse


def _month_bounds(day: date) -> Tuple[date, date]:
    start = day.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


async def _sum_amount(db: AsyncSession, model, *criteria) -> Decimal:
    result = await db.execute(select(func.coalesce(func.sum(model.amount), 0)).where(*criteria))
    return Decimal(str(result.scalar_one()))


async def current_period_totals(db: AsyncSession) -> Tuple[Decimal, Decimal]:
    """(income, expenses) of the open fiscal period."""
    income = await _sum_amount(db, Income, current_period_filter(Income))
    expenses = await _sum_amount(db, Expense, current_period_filter(Expense))
    return income, expenses


async def monthly_report(db: AsyncSession, day: Optional[date] = None) -> MonthlyReportResponse:
    """Income, expenses and net profit of the calendar month containing day (today by default)."""
    day = day or date.today()
    start, end = _month_bounds(day)
    income = await _sum_amount(db, Income, Income.date >= start, Income.date <= end)
    expenses = await _sum_amount(db, Expense, Expense.date >= start, Expense.date <= end)
    return MonthlyReportResponse(
        month=start.strftime("%Y-%m"),
        total_income=income,
        total_expenses=expenses,
        net_profit=income - expenses,
    )
