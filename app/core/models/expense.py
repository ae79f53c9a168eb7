from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class Expense(Base):
    """Expense entry. Salary payments are mirrored here at write time."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(Text, nullable=False)  # e.g. Water, Electricity
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, default=date.today)
    description = Column(Text, nullable=True)
    fiscal_year = Column(String(20), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
