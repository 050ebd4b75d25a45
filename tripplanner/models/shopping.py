"""
Shopping list model.
"""
from sqlalchemy import Column, String, Boolean, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class ShoppingItem(BaseModel):
    """One line of a trip's shopping / packing list."""
    __tablename__ = "shopping_items"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(String(300), nullable=False)
    done = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)
    category = Column(String(50), nullable=True)

    trip = relationship("Trip", back_populates="shopping_items")
