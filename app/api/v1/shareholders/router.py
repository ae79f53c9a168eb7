from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin, require_viewer
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import ProfitDistributionResponse, ShareholderCreate, ShareholderResponse, ShareholderUpdate
from . import service

router = APIRouter(prefix="/api/v1/shareholders", tags=["shareholders"])


@router.get("", response_model=List[ShareholderResponse], dependencies=[Depends(require_viewer)])
async def list_shareholders(db: AsyncSession = Depends(get_db)) -> List[ShareholderResponse]:
    return await service.list_shareholders(db)


@router.get(
    "/distribution",
    response_model=ProfitDistributionResponse,
    dependencies=[Depends(require_viewer)],
)
async def profit_distribution(db: AsyncSession = Depends(get_db)) -> ProfitDistributionResponse:
    """Net profit of the current period split by share percentage."""
    return await service.profit_distribution(db)


@router.post(
    "",
    response_model=ShareholderResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_shareholder(
    payload: ShareholderCreate,
    db: AsyncSession = Depends(get_db),
) -> ShareholderResponse:
    return await service.create_shareholder(db, payload)


@router.put(
    "/{shareholder_id}",
    response_model=ShareholderResponse,
    dependencies=[Depends(require_admin)],
)
async def update_shareholder(
    shareholder_id: int,
    payload: ShareholderUpdate,
    db: AsyncSession = Depends(get_db),
) -> ShareholderResponse:
    try:
        return await service.update_shareholder(db, shareholder_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/{shareholder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_shareholder(shareholder_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await service.delete_shareholder(db, shareholder_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
