"""Shareholders and profit distribution."""

from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.reports.service import current_period_totals
from app.core.exceptions import NotFoundError
from app.core.models import Shareholder

from .schemas import (
    ProfitDistributionResponse,
    ShareholderCreate,
    ShareholderResponse,
    ShareholderShare,
    ShareholderUpdate,
)

HUNDRED = Decimal("100")


async def _get_or_404(db: AsyncSession, shareholder_id: int) -> Shareholder:
    sh = await db.get(Shareholder, shareholder_id)
    if not sh:
        raise NotFoundError("Shareholder not found")
    return sh


async def list_shareholders(db: AsyncSession) -> List[ShareholderResponse]:
    result = await db.execute(select(Shareholder).order_by(Shareholder.id))
    return [ShareholderResponse.model_validate(sh) for sh in result.scalars().all()]


async def create_shareholder(db: AsyncSession, payload: ShareholderCreate) -> ShareholderResponse:
    sh = Shareholder(
        full_name=payload.full_name.strip(),
        mobile=payload.mobile.strip(),
        share_percentage=payload.share_percentage,
        notes=payload.notes,
    )
    db.add(sh)
    await db.commit()
    await db.refresh(sh)
    return ShareholderResponse.model_validate(sh)


async def update_shareholder(
    db: AsyncSession,
    shareholder_id: int,
    payload: ShareholderUpdate,
) -> ShareholderResponse:
    sh = await _get_or_404(db, shareholder_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(sh, field, value)
    await db.commit()
    await db.refresh(sh)
    return ShareholderResponse.model_validate(sh)


async def delete_shareholder(db: AsyncSession, shareholder_id: int) -> None:
    sh = await _get_or_404(db, shareholder_id)
    await db.delete(sh)
    await db.commit()


async def profit_distribution(db: AsyncSession) -> ProfitDistributionResponse:
    """Each holder gets net_profit * share_percentage / 100 of the open period."""
    income, expenses = await current_period_totals(db)
    net = income - expenses
    result = await db.execute(select(Shareholder).order_by(Shareholder.id))
    holders = result.scalars().all()
    shares = [
        ShareholderShare(
            shareholder_id=sh.id,
            full_name=sh.full_name,
            share_percentage=Decimal(str(sh.share_percentage)),
            amount=net * Decimal(str(sh.share_percentage)) / HUNDRED,
        )
        for sh in holders
    ]
    return ProfitDistributionResponse(
        total_income=income,
        total_expenses=expenses,
        net_profit=net,
        total_share_percentage=sum((s.share_percentage for s in shares), Decimal("0")),
        shares=shares,
    )
