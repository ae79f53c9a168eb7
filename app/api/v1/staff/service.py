"""Staff service."""

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.core.models import Staff

from .schemas import StaffCreate, StaffResponse


async def get_staff_or_404(db: AsyncSession, staff_id: int) -> Staff:
    member = await db.get(Staff, staff_id)
    if not member:
        raise NotFoundError("Staff member not found")
    return member


async def list_staff(db: AsyncSession) -> List[StaffResponse]:
    result = await db.execute(select(Staff).order_by(Staff.id))
    return [StaffResponse.model_validate(s) for s in result.scalars().all()]


async def create_staff(db: AsyncSession, payload: StaffCreate) -> StaffResponse:
    member = Staff(
        full_name=payload.full_name.strip(),
        mobile=payload.mobile.strip(),
        role=payload.role.strip(),
        salary=payload.salary,
    )
    db.add(member)
    await db.commit()
    await db.refresh(member)
    return StaffResponse.model_validate(member)


async def delete_staff(db: AsyncSession, staff_id: int) -> None:
    member = await get_staff_or_404(db, staff_id)
    await db.delete(member)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Staff member has salary payments and cannot be deleted")
