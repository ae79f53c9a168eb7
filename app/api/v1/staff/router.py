from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin, require_viewer
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import StaffCreate, StaffResponse
from . import service

router = APIRouter(prefix="/api/v1/staff", tags=["staff"])


@router.get("", response_model=List[StaffResponse], dependencies=[Depends(require_viewer)])
async def list_staff(db: AsyncSession = Depends(get_db)) -> List[StaffResponse]:
    return await service.list_staff(db)


@router.post(
    "",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_staff(payload: StaffCreate, db: AsyncSession = Depends(get_db)) -> StaffResponse:
    return await service.create_staff(db, payload)


@router.delete(
    "/{staff_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_staff(staff_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_staff(db, staff_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
