"""Fiscal year registry and the year-close orchestrator."""

import logging
import re
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.students.service import promote_all_students
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.ledger import ARCHIVABLE_MODELS, current_period_filter
from app.core.models import FiscalYear

from .schemas import CloseFiscalYearResponse, FiscalYearCreate, FiscalYearResponse

logger = logging.getLogger(__name__)

_YEAR_LABEL = re.compile(r"^\s*(\d{4})\s*-\s*(\d{4})\s*$")

# School year runs 1 September to 31 August.
SCHOOL_YEAR_START = (9, 1)
SCHOOL_YEAR_END = (8, 31)


def _to_response(fy: FiscalYear) -> FiscalYearResponse:
    return FiscalYearResponse(
        id=fy.id,
        year=fy.year,
        start_date=fy.start_date,
        end_date=fy.end_date,
        is_current=fy.is_current,
        is_closed=fy.is_closed,
        created_at=fy.created_at,
        closed_at=fy.closed_at,
    )


def _validate_dates(start_date: date, end_date: date) -> None:
    if end_date <= start_date:
        raise ValidationError("end_date must be after start_date")


def successor_year(label: str) -> Tuple[str, date, date]:
    """"2024-2025" -> ("2025-2026", 2025-09-01, 2026-08-31)."""
    match = _YEAR_LABEL.match(label or "")
    if not match:
        raise ValidationError(f"Fiscal year label '{label}' is not in YYYY-YYYY form")
    end_year = int(match.group(2))
    return (
        f"{end_year}-{end_year + 1}",
        date(end_year, *SCHOOL_YEAR_START),
        date(end_year + 1, *SCHOOL_YEAR_END),
    )


async def _get_or_404(db: AsyncSession, fiscal_year_id: int, for_update: bool = False) -> FiscalYear:
    stmt = select(FiscalYear).where(FiscalYear.id == fiscal_year_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    fy = result.scalar_one_or_none()
    if not fy:
        raise NotFoundError("Fiscal year not found")
    return fy


async def _clear_current(db: AsyncSession) -> None:
    """Unset is_current on whichever year holds it. Must run in the same transaction as the new assignment."""
    await db.execute(
        update(FiscalYear).where(FiscalYear.is_current.is_(True)).values(is_current=False)
    )


async def list_fiscal_years(db: AsyncSession) -> List[FiscalYearResponse]:
    """All fiscal years, most recently created first."""
    result = await db.execute(
        select(FiscalYear).order_by(FiscalYear.created_at.desc(), FiscalYear.id.desc())
    )
    return [_to_response(fy) for fy in result.scalars().all()]


async def get_current_fiscal_year(db: AsyncSession) -> Optional[FiscalYearResponse]:
    result = await db.execute(select(FiscalYear).where(FiscalYear.is_current.is_(True)))
    fy = result.scalar_one_or_none()
    return _to_response(fy) if fy else None


async def create_fiscal_year(db: AsyncSession, payload: FiscalYearCreate) -> FiscalYearResponse:
    """Create fiscal year. If is_current=true, unset current on the previous holder (transaction)."""
    _validate_dates(payload.start_date, payload.end_date)
    label = payload.year.strip()
    existing = await db.execute(select(FiscalYear).where(FiscalYear.year == label))
    if existing.scalar_one_or_none():
        raise ConflictError(f"Fiscal year '{label}' already exists")
    if payload.is_current:
        await _clear_current(db)
    fy = FiscalYear(
        year=label,
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_current=payload.is_current,
        is_closed=False,
    )
    db.add(fy)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Another fiscal year is already current or the label is taken")
    await db.refresh(fy)
    logger.info("Created fiscal year %s (current=%s)", fy.year, fy.is_current)
    return _to_response(fy)


async def set_fiscal_year_current(db: AsyncSession, fiscal_year_id: int) -> FiscalYearResponse:
    fy = await _get_or_404(db, fiscal_year_id)
    if fy.is_closed:
        raise ValidationError("Cannot set a closed fiscal year as current")
    await _clear_current(db)
    fy.is_current = True
    await db.commit()
    await db.refresh(fy)
    logger.info("Fiscal year %s is now current", fy.year)
    return _to_response(fy)


async def delete_fiscal_year(db: AsyncSession, fiscal_year_id: int) -> None:
    """Delete an open year. Ledger rows are not touched."""
    fy = await _get_or_404(db, fiscal_year_id)
    if fy.is_closed:
        raise ValidationError("Cannot delete a closed fiscal year; its archive depends on it")
    label = fy.year
    await db.delete(fy)
    await db.commit()
    logger.info("Deleted fiscal year %s", label)


async def reopen_fiscal_year(db: AsyncSession, fiscal_year_id: int) -> FiscalYearResponse:
    """
    Clear the closed flag. Archived rows keep their tag and promoted students stay promoted;
    reopening corrects the year record, it does not undo the close.
    """
    fy = await _get_or_404(db, fiscal_year_id)
    if not fy.is_closed:
        raise ValidationError("Fiscal year is not closed; only closed years can be reopened")
    fy.is_closed = False
    fy.closed_at = None
    await db.commit()
    await db.refresh(fy)
    logger.info("Reopened fiscal year %s", fy.year)
    return _to_response(fy)


async def archive_current_period(db: AsyncSession, label: str) -> int:
    """Stamp every untagged ledger and student row with the year label. Returns rows tagged."""
    tagged = 0
    for model in ARCHIVABLE_MODELS:
        result = await db.execute(
            update(model).where(current_period_filter(model)).values(fiscal_year=label)
        )
        logger.debug("Archived %s %s rows to %s", result.rowcount, model.__tablename__, label)
        tagged += result.rowcount or 0
    return tagged


async def close_fiscal_year(db: AsyncSession, fiscal_year_id: int) -> CloseFiscalYearResponse:
    """
    Close a year: archive the current period to it, promote every student, mark it closed and
    make the successor year current (created if missing). All of it commits or none of it does.
    """
    fy = await _get_or_404(db, fiscal_year_id, for_update=True)
    label = fy.year
    if fy.is_closed:
        logger.warning("Rejected close of fiscal year %s: already closed", label)
        raise ValidationError("Fiscal year is already closed")
    new_label, new_start, new_end = successor_year(label)
    result = await db.execute(select(FiscalYear).where(FiscalYear.year == new_label))
    successor = result.scalar_one_or_none()
    if successor is not None and successor.is_closed:
        raise ValidationError(
            f"Next fiscal year {new_label} is closed; reopen it before closing {label}"
        )

    try:
        # Tag before promoting: the archive must hold end-of-year balances.
        tagged = await archive_current_period(db, label)
        promoted = await promote_all_students(db)

        fy.is_closed = True
        fy.is_current = False
        fy.closed_at = datetime.now(timezone.utc)
        await db.flush()

        await _clear_current(db)
        if successor is None:
            successor = FiscalYear(
                year=new_label,
                start_date=new_start,
                end_date=new_end,
                is_current=True,
                is_closed=False,
            )
            db.add(successor)
        else:
            successor.is_current = True
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Closing fiscal year %s failed; rolled back", label)
        raise

    logger.info(
        "Closed fiscal year %s: %d rows archived, %d students promoted, %s is current",
        label,
        tagged,
        promoted,
        new_label,
    )
    return CloseFiscalYearResponse(
        success=True,
        message=f"Fiscal year {label} closed",
        promoted_students=promoted,
        new_year=new_label,
    )
