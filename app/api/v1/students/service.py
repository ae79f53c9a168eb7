"""Students service: roster CRUD and grade promotion."""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.core.grade_promotion import promote
from app.core.ledger import current_period_filter
from app.core.models import Student

from .schemas import StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)


def _to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


def _to_response(st: Student) -> StudentResponse:
    return StudentResponse(
        id=st.id,
        full_name=st.full_name,
        mobile=st.mobile,
        grade=st.grade or "",
        tuition_fee=_to_decimal(st.tuition_fee),
        paid_amount=_to_decimal(st.paid_amount),
        remaining_amount=_to_decimal(st.remaining_amount),
        previous_year_debt=_to_decimal(st.previous_year_debt),
        fiscal_year=st.fiscal_year,
        created_at=st.created_at,
    )


async def get_student_or_404(db: AsyncSession, student_id: int) -> Student:
    st = await db.get(Student, student_id)
    if not st:
        raise NotFoundError("Student not found")
    return st


async def list_students(db: AsyncSession, include_archived: bool = False) -> List[StudentResponse]:
    """Students of the current period; include_archived also returns rows already stamped by a close."""
    stmt = select(Student)
    if not include_archived:
        stmt = stmt.where(current_period_filter(Student))
    result = await db.execute(stmt.order_by(Student.id))
    return [_to_response(st) for st in result.scalars().all()]


async def get_student(db: AsyncSession, student_id: int) -> StudentResponse:
    return _to_response(await get_student_or_404(db, student_id))


async def create_student(db: AsyncSession, payload: StudentCreate) -> StudentResponse:
    remaining = payload.remaining_amount
    if remaining is None:
        remaining = payload.tuition_fee - payload.paid_amount
    st = Student(
        full_name=payload.full_name.strip(),
        mobile=payload.mobile.strip(),
        grade=payload.grade.strip(),
        tuition_fee=payload.tuition_fee,
        paid_amount=payload.paid_amount,
        remaining_amount=remaining,
        previous_year_debt=payload.previous_year_debt,
    )
    db.add(st)
    await db.commit()
    await db.refresh(st)
    return _to_response(st)


async def update_student(db: AsyncSession, student_id: int, payload: StudentUpdate) -> StudentResponse:
    st = await get_student_or_404(db, student_id)
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    for field, value in changes.items():
        setattr(st, field, value.strip() if isinstance(value, str) else value)
    if "remaining_amount" not in changes and ("tuition_fee" in changes or "paid_amount" in changes):
        st.remaining_amount = _to_decimal(st.tuition_fee) - _to_decimal(st.paid_amount)
    await db.commit()
    await db.refresh(st)
    return _to_response(st)


async def delete_student(db: AsyncSession, student_id: int) -> None:
    st = await get_student_or_404(db, student_id)
    await db.delete(st)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Student has recorded payments and cannot be deleted")


async def promote_all_students(db: AsyncSession) -> int:
    """
    Move every student to the next grade and roll balances over. Does not commit; the caller owns
    the transaction. Students whose grade cannot be parsed keep their grade and balances.
    """
    result = await db.execute(select(Student).order_by(Student.id))
    promoted = 0
    for st in result.scalars().all():
        outcome = promote(st.grade, st.tuition_fee, st.remaining_amount, st.previous_year_debt)
        if outcome is None:
            logger.debug("Student %s grade %r left unchanged", st.id, st.grade)
            continue
        st.grade = outcome.grade
        st.previous_year_debt = outcome.previous_year_debt
        st.paid_amount = outcome.paid_amount
        st.remaining_amount = outcome.remaining_amount
        promoted += 1
    await db.flush()
    return promoted


async def promote_grades(db: AsyncSession) -> int:
    """Manual promotion outside a year close."""
    try:
        promoted = await promote_all_students(db)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info("Promoted %d students", promoted)
    return promoted
