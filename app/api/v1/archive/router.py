from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_viewer
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import ArchiveSummaryResponse
from . import service

router = APIRouter(prefix="/api/v1/archive", tags=["archive"])


@router.get(
    "/{year}/summary",
    response_model=ArchiveSummaryResponse,
    dependencies=[Depends(require_viewer)],
)
async def archive_summary(year: str, db: AsyncSession = Depends(get_db)) -> ArchiveSummaryResponse:
    """Counts and totals of every ledger archived to the year."""
    try:
        return await service.archive_summary(db, year)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{year}/{entity_type}", dependencies=[Depends(require_viewer)])
async def list_archived(
    year: str,
    entity_type: str,
    db: AsyncSession = Depends(get_db),
) -> List[Any]:
    """Rows archived to the year: income, expenses, payments, salary-payments, food-payments or students."""
    try:
        return await service.list_archived(db, year, entity_type)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
