from decimal import Decimal

from pydantic import BaseModel


class MonthlyReportResponse(BaseModel):
    month: str  # "2026-01"
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
