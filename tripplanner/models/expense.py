"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(300), nullable=False)
    amount = Column(Float, nullable=False)

    trip = relationship("Trip", back_populates="expenses")
