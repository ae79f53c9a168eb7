"""Archived (closed year) read views. Read-only: nothing here writes."""

from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.ledger.schemas import (
    ExpenseResponse,
    FoodPaymentResponse,
    IncomeResponse,
    PaymentResponse,
    SalaryPaymentResponse,
)
from app.api.v1.students.schemas import StudentResponse
from app.core.enums import ArchiveEntity
from app.core.exceptions import NotFoundError
from app.core.ledger import ARCHIVE_ENTITY_MODELS, archived_filter
from app.core.models import FiscalYear, Student

from .schemas import ArchiveSummaryResponse, LedgerTotal

_RESPONSE_SCHEMAS = {
    ArchiveEntity.INCOME: IncomeResponse,
    ArchiveEntity.EXPENSES: ExpenseResponse,
    ArchiveEntity.PAYMENTS: PaymentResponse,
    ArchiveEntity.SALARY_PAYMENTS: SalaryPaymentResponse,
    ArchiveEntity.FOOD_PAYMENTS: FoodPaymentResponse,
    ArchiveEntity.STUDENTS: StudentResponse,
}


async def _ensure_year_exists(db: AsyncSession, year: str) -> None:
    result = await db.execute(select(FiscalYear.id).where(FiscalYear.year == year))
    if result.first() is None:
        raise NotFoundError(f"Fiscal year '{year}' not found")


def _parse_entity(entity_type: str) -> ArchiveEntity:
    try:
        return ArchiveEntity(entity_type)
    except ValueError:
        raise NotFoundError(f"Unknown archive entity '{entity_type}'")


async def list_archived(db: AsyncSession, year: str, entity_type: str) -> List[BaseModel]:
    """Rows of one entity type tagged with the given year label."""
    entity = _parse_entity(entity_type)
    await _ensure_year_exists(db, year)
    model = ARCHIVE_ENTITY_MODELS[entity]
    schema = _RESPONSE_SCHEMAS[entity]
    stmt = select(model).where(archived_filter(model, year))
    if entity == ArchiveEntity.STUDENTS:
        stmt = stmt.order_by(model.id)
    else:
        stmt = stmt.order_by(model.date, model.id)
    result = await db.execute(stmt)
    return [schema.model_validate(row) for row in result.scalars().all()]


async def archive_summary(db: AsyncSession, year: str) -> ArchiveSummaryResponse:
    await _ensure_year_exists(db, year)
    ledgers: Dict[str, LedgerTotal] = {}
    for entity, model in ARCHIVE_ENTITY_MODELS.items():
        if entity == ArchiveEntity.STUDENTS:
            continue
        result = await db.execute(
            select(func.count(model.id), func.coalesce(func.sum(model.amount), 0)).where(
                archived_filter(model, year)
            )
        )
        count, total = result.one()
        ledgers[entity.value] = LedgerTotal(count=count, total=Decimal(str(total)))

    students = await db.execute(
        select(func.count(Student.id)).where(archived_filter(Student, year))
    )
    net = ledgers[ArchiveEntity.INCOME.value].total - ledgers[ArchiveEntity.EXPENSES.value].total
    return ArchiveSummaryResponse(
        year=year,
        ledgers=ledgers,
        net_result=net,
        student_count=students.scalar_one(),
    )
