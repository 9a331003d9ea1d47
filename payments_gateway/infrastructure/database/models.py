"""SQLAlchemy ORM models"""

import uuid
from sqlalchemy import Column, DateTime, Index, Numeric, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Payment(Base):
    """Stored payment; pages are read in (date_occurred, id) order"""

    __tablename__ = "payment"
    __table_args__ = (Index("ix_payment_date_occurred_id", "date_occurred", "id"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    value = Column(Numeric(14, 2), nullable=False)
    category = Column(Text, nullable=False, index=True)
    type = Column(Text, nullable=False)
    date_occurred = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
