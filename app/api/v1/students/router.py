from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin, require_viewer
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import PromoteGradesResponse, StudentCreate, StudentResponse, StudentUpdate
from . import service

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.get(
    "",
    response_model=List[StudentResponse],
    dependencies=[Depends(require_viewer)],
)
async def list_students(
    include_archived: bool = Query(False, description="Also return students stamped by a closed year"),
    db: AsyncSession = Depends(get_db),
) -> List[StudentResponse]:
    return await service.list_students(db, include_archived=include_archived)


@router.post(
    "/promote-grades",
    response_model=PromoteGradesResponse,
    dependencies=[Depends(require_admin)],
)
async def promote_grades(db: AsyncSession = Depends(get_db)) -> PromoteGradesResponse:
    """Promote every student one grade without closing the year."""
    promoted = await service.promote_grades(db)
    return PromoteGradesResponse(promoted_count=promoted)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    dependencies=[Depends(require_viewer)],
)
async def get_student(student_id: int, db: AsyncSession = Depends(get_db)) -> StudentResponse:
    try:
        return await service.get_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_student(payload: StudentCreate, db: AsyncSession = Depends(get_db)) -> StudentResponse:
    return await service.create_student(db, payload)


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    dependencies=[Depends(require_admin)],
)
async def update_student(
    student_id: int,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db),
) -> StudentResponse:
    try:
        return await service.update_student(db, student_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_student(student_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
