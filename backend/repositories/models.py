"""
SQLAlchemy ORM models for persistence.
"""
from datetime import datetime
from sqlalchemy import Column, DateTime, LargeBinary, String

from db import Base


class KeyValueORM(Base):
    __tablename__ = "key_values"

    key = Column(String, primary_key=True, index=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
