from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class Student(Base):
    """
    Enrolled student with tuition balance for the current period.
    remaining_amount = tuition_fee - paid_amount; previous_year_debt accumulates unpaid
    balances carried over at each year close.
    fiscal_year is stamped when a year closes; the row itself stays live and keeps being promoted.
    """

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(Text, nullable=False)
    mobile = Column(String(30), nullable=False)
    grade = Column(Text, nullable=False, default="")
    tuition_fee = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    remaining_amount = Column(Numeric(12, 2), nullable=False, default=0)
    previous_year_debt = Column(Numeric(12, 2), nullable=False, default=0)
    fiscal_year = Column(String(20), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
