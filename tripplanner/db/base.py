"""
Declarative base and shared columns for all models.
"""
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base
from tripplanner.core.utils import generate_id, utcnow

Base = declarative_base()


class BaseModel(Base):
    """Abstract model with a string id and audit timestamps."""
    __abstract__ = True

    id = Column(String(32), primary_key=True, default=generate_id)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
