from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Index, Integer, String, text

from app.db.session import Base


class FiscalYear(Base):
    """
    Fiscal (academic + accounting) year of the school, labelled "YYYY-YYYY".
    Only one row can be is_current = true; the partial unique index enforces it in the database.
    Closed years are historical: their label tags the archived ledger rows.
    """

    __tablename__ = "fiscal_years"
    __table_args__ = (
        Index(
            "uq_fiscal_years_single_current",
            "is_current",
            unique=True,
            postgresql_where=text("is_current"),
            sqlite_where=text("is_current = 1"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(String(20), nullable=False, unique=True)  # e.g. "2024-2025"
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_current = Column(Boolean, nullable=False, default=False)
    is_closed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    closed_at = Column(DateTime(timezone=True), nullable=True)
