from decimal import Decimal
from typing import Dict

from pydantic import BaseModel


class LedgerTotal(BaseModel):
    count: int
    total: Decimal


class ArchiveSummaryResponse(BaseModel):
    """Totals of one closed year, keyed by entity type (income, expenses, payments, ...)."""

    year: str
    ledgers: Dict[str, LedgerTotal]
    net_result: Decimal
    student_count: int
