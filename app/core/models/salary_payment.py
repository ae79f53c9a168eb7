from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text

from app.db.session import Base


class SalaryPayment(Base):
    """Monthly salary disbursement to a staff member. One per staff and month in a period."""

    __tablename__ = "salary_payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="RESTRICT"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    month = Column(String(7), nullable=False)  # "2026-01"
    date = Column(Date, nullable=False, default=date.today)
    notes = Column(Text, nullable=True)
    fiscal_year = Column(String(20), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
