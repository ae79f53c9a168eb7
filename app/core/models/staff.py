from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text

from app.db.session import Base


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(Text, nullable=False)
    mobile = Column(String(30), nullable=False)
    role = Column(String(100), nullable=False)  # Teacher, Supervisor, Cleaner, ...
    salary = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
