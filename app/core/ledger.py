"""Fiscal-year tagging of ledger rows: which tables are tagged and how periods are filtered.

A row whose fiscal_year is NULL or "" belongs to the live (current) accounting period.
Closing a year stamps those rows with the year label in place; they are never copied.
"""

from typing import Dict, Tuple, Type

from sqlalchemy import or_

from app.core.enums import ArchiveEntity
from app.core.models import Expense, FoodPayment, Income, Payment, SalaryPayment, Student
from app.db.session import Base

# Order is the order rows are stamped at close; students last so ledgers are tagged first.
ARCHIVABLE_MODELS: Tuple[Type[Base], ...] = (
    Income,
    Expense,
    Payment,
    SalaryPayment,
    FoodPayment,
    Student,
)

ARCHIVE_ENTITY_MODELS: Dict[ArchiveEntity, Type[Base]] = {
    ArchiveEntity.INCOME: Income,
    ArchiveEntity.EXPENSES: Expense,
    ArchiveEntity.PAYMENTS: Payment,
    ArchiveEntity.SALARY_PAYMENTS: SalaryPayment,
    ArchiveEntity.FOOD_PAYMENTS: FoodPayment,
    ArchiveEntity.STUDENTS: Student,
}


def current_period_filter(model):
    """WHERE clause selecting untagged (current period) rows of a ledger table."""
    return or_(model.fiscal_year.is_(None), model.fiscal_year == "")


def archived_filter(model, year: str):
    """WHERE clause selecting rows archived to the given year label."""
    return model.fiscal_year == year


def is_archived(row) -> bool:
    return bool(getattr(row, "fiscal_year", None))
