from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_viewer
from app.db.session import get_db

from .schemas import MonthlyReportResponse
from . import service

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/monthly", response_model=MonthlyReportResponse, dependencies=[Depends(require_viewer)])
async def monthly_report(
    day: Optional[date] = Query(None, description="Any day of the month to report; defaults to today"),
    db: AsyncSession = Depends(get_db),
) -> MonthlyReportResponse:
    return await service.monthly_report(db, day)
