from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class Income(Base):
    """Income entry. Tuition and food payments are mirrored here at write time."""

    __tablename__ = "income"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(Text, nullable=False)  # e.g. Uniforms
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, default=date.today)
    description = Column(Text, nullable=True)
    fiscal_year = Column(String(20), nullable=True, index=True)  # NULL/"" = current period
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
