from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin, require_viewer
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import (
    CloseFiscalYearResponse,
    DeleteFiscalYearResponse,
    FiscalYearCreate,
    FiscalYearResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/fiscal-years", tags=["fiscal-years"])


@router.post(
    "",
    response_model=FiscalYearResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_fiscal_year(
    payload: FiscalYearCreate,
    db: AsyncSession = Depends(get_db),
) -> FiscalYearResponse:
    """Create fiscal year. Use is_current=true to make it the current year."""
    try:
        return await service.create_fiscal_year(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "",
    response_model=List[FiscalYearResponse],
    dependencies=[Depends(require_viewer)],
)
async def list_fiscal_years(db: AsyncSession = Depends(get_db)) -> List[FiscalYearResponse]:
    """List fiscal years, newest first."""
    return await service.list_fiscal_years(db)


@router.get(
    "/current",
    response_model=Optional[FiscalYearResponse],
    dependencies=[Depends(require_viewer)],
)
async def get_current_fiscal_year(db: AsyncSession = Depends(get_db)) -> Optional[FiscalYearResponse]:
    """The current fiscal year, or null when none is set."""
    return await service.get_current_fiscal_year(db)


@router.put(
    "/{fiscal_year_id}/set-current",
    response_model=FiscalYearResponse,
    dependencies=[Depends(require_admin)],
)
async def set_fiscal_year_current(
    fiscal_year_id: int,
    db: AsyncSession = Depends(get_db),
) -> FiscalYearResponse:
    try:
        return await service.set_fiscal_year_current(db, fiscal_year_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/{fiscal_year_id}/close",
    response_model=CloseFiscalYearResponse,
    dependencies=[Depends(require_admin)],
)
async def close_fiscal_year(
    fiscal_year_id: int,
    db: AsyncSession = Depends(get_db),
) -> CloseFiscalYearResponse:
    """Close the year: archive ledgers, promote students, open the next year."""
    try:
        return await service.close_fiscal_year(db, fiscal_year_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/{fiscal_year_id}/reopen",
    response_model=FiscalYearResponse,
    dependencies=[Depends(require_admin)],
)
async def reopen_fiscal_year(
    fiscal_year_id: int,
    db: AsyncSession = Depends(get_db),
) -> FiscalYearResponse:
    """Reopen a closed year. Archived rows and promotions are kept."""
    try:
        return await service.reopen_fiscal_year(db, fiscal_year_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/{fiscal_year_id}",
    response_model=DeleteFiscalYearResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_fiscal_year(
    fiscal_year_id: int,
    db: AsyncSession = Depends(get_db),
) -> DeleteFiscalYearResponse:
    try:
        await service.delete_fiscal_year(db, fiscal_year_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DeleteFiscalYearResponse(success=True)
