"""Ledger service: current-period income, expenses, tuition, salary and food payments.

Tuition and food payments are mirrored into income and salary payments into expenses when they
are written, in the same transaction. Mirrors start untagged like every other new row, so a year
close archives them together with the payments they came from.
"""

import logging
from decimal import Decimal
from typing import List, Type

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.staff.service import get_staff_or_404
from app.api.v1.students.service import get_student_or_404
from app.core.exceptions import NotFoundError, ValidationError
from app.core.ledger import current_period_filter, is_archived
from app.core.models import Expense, FoodPayment, Income, Payment, SalaryPayment
from app.db.session import Base

from .schemas import (
    ExpenseCreate,
    ExpenseResponse,
    FoodPaymentCreate,
    FoodPaymentResponse,
    IncomeCreate,
    IncomeResponse,
    PaymentCreate,
    PaymentResponse,
    SalaryPaymentCreate,
    SalaryPaymentResponse,
)

logger = logging.getLogger(__name__)

SALARY_EXPENSE_CATEGORY = "مووچە"
FOOD_INCOME_SOURCE = "پارەی خواردن"


def _to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


async def _list_current(db: AsyncSession, model: Type[Base]):
    result = await db.execute(
        select(model).where(current_period_filter(model)).order_by(model.date, model.id)
    )
    return result.scalars().all()


async def _delete_current_row(db: AsyncSession, model: Type[Base], row_id: int, label: str) -> None:
    """Delete a row of the current period. Archived rows are historical and read-only."""
    row = await db.get(model, row_id)
    if not row:
        raise NotFoundError(f"{label} not found")
    if is_archived(row):
        raise ValidationError(f"{label} belongs to closed fiscal year {row.fiscal_year} and cannot be deleted")
    await db.delete(row)
    await db.commit()


# --- Income ---
async def list_income(db: AsyncSession) -> List[IncomeResponse]:
    return [IncomeResponse.model_validate(r) for r in await _list_current(db, Income)]


async def create_income(db: AsyncSession, payload: IncomeCreate) -> IncomeResponse:
    row = Income(
        source=payload.source.strip(),
        amount=payload.amount,
        date=payload.date,
        description=payload.description,
    )
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return IncomeResponse.model_validate(row)


async def delete_income(db: AsyncSession, income_id: int) -> None:
    await _delete_current_row(db, Income, income_id, "Income entry")


# --- Expenses ---
async def list_expenses(db: AsyncSession) -> List[ExpenseResponse]:
    return [ExpenseResponse.model_validate(r) for r in await _list_current(db, Expense)]


async def create_expense(db: AsyncSession, payload: ExpenseCreate) -> ExpenseResponse:
    row = Expense(
        category=payload.category.strip(),
        amount=payload.amount,
        date=payload.date,
        description=payload.description,
    )
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return ExpenseResponse.model_validate(row)


async def delete_expense(db: AsyncSession, expense_id: int) -> None:
    await _delete_current_row(db, Expense, expense_id, "Expense entry")


# --- Tuition payments ---
async def list_payments(db: AsyncSession) -> List[PaymentResponse]:
    return [PaymentResponse.model_validate(r) for r in await _list_current(db, Payment)]


async def create_payment(db: AsyncSession, payload: PaymentCreate) -> PaymentResponse:
    """Record an installment, apply it to the student's balance and book it as income."""
    student = await get_student_or_404(db, payload.student_id)
    payment = Payment(student_id=student.id, amount=payload.amount, date=payload.date)
    db.add(payment)

    paid = _to_decimal(student.paid_amount) + payload.amount
    student.paid_amount = paid
    student.remaining_amount = _to_decimal(student.tuition_fee) - paid

    db.add(
        Income(
            source=f"Tuition Payment - Student ID {student.id}",
            amount=payload.amount,
            date=payload.date,
            description=f"Payment from student ID {student.id}",
        )
    )
    await db.commit()
    await db.refresh(payment)
    logger.info("Tuition payment %s from student %s: %s", payment.id, student.id, payload.amount)
    return PaymentResponse.model_validate(payment)


# --- Salary payments ---
async def list_salary_payments(db: AsyncSession) -> List[SalaryPaymentResponse]:
    return [SalaryPaymentResponse.model_validate(r) for r in await _list_current(db, SalaryPayment)]


async def create_salary_payment(db: AsyncSession, payload: SalaryPaymentCreate) -> SalaryPaymentResponse:
    """Pay one month's salary. A staff member is paid at most once per month in a period."""
    member = await get_staff_or_404(db, payload.staff_id)
    existing = await db.execute(
        select(SalaryPayment.id).where(
            and_(
                SalaryPayment.staff_id == member.id,
                SalaryPayment.month == payload.month,
                current_period_filter(SalaryPayment),
            )
        )
    )
    if existing.first() is not None:
        logger.warning("Duplicate salary payment for staff %s month %s", member.id, payload.month)
        raise ValidationError("This staff member has already been paid for this month")

    payment = SalaryPayment(
        staff_id=member.id,
        amount=payload.amount,
        month=payload.month,
        date=payload.date,
        notes=payload.notes,
    )
    db.add(payment)
    db.add(
        Expense(
            category=SALARY_EXPENSE_CATEGORY,
            amount=payload.amount,
            date=payload.date,
            description=f"مووچەی مانگی {payload.month} - کارمەند {member.id}",
        )
    )
    await db.commit()
    await db.refresh(payment)
    return SalaryPaymentResponse.model_validate(payment)


async def delete_salary_payment(db: AsyncSession, salary_payment_id: int) -> None:
    await _delete_current_row(db, SalaryPayment, salary_payment_id, "Salary payment")


# --- Food payments ---
async def list_food_payments(db: AsyncSession) -> List[FoodPaymentResponse]:
    return [FoodPaymentResponse.model_validate(r) for r in await _list_current(db, FoodPayment)]


async def create_food_payment(db: AsyncSession, payload: FoodPaymentCreate) -> FoodPaymentResponse:
    student = await get_student_or_404(db, payload.student_id)
    existing = await db.execute(
        select(FoodPayment.id).where(
            and_(
                FoodPayment.student_id == student.id,
                FoodPayment.month == payload.month,
                current_period_filter(FoodPayment),
            )
        )
    )
    if existing.first() is not None:
        raise ValidationError("Food for this student and month has already been paid")

    payment = FoodPayment(
        student_id=student.id,
        amount=payload.amount,
        month=payload.month,
        date=payload.date,
        notes=payload.notes,
    )
    db.add(payment)
    db.add(
        Income(
            source=FOOD_INCOME_SOURCE,
            amount=payload.amount,
            date=payload.date,
            description=f"پارەی خواردنی مانگی {payload.month} - قوتابی {student.id}",
        )
    )
    await db.commit()
    await db.refresh(payment)
    return FoodPaymentResponse.model_validate(payment)


async def delete_food_payment(db: AsyncSession, food_payment_id: int) -> None:
    await _delete_current_row(db, FoodPayment, food_payment_id, "Food payment")
