from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class Shareholder(Base):
    """Owner of a share of the school's net profit. share_percentage 25.50 means 25.5%."""

    __tablename__ = "shareholders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(Text, nullable=False)
    mobile = Column(String(30), nullable=False)
    share_percentage = Column(Numeric(5, 2), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
