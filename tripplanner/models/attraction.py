"""
Attraction model.
"""
from sqlalchemy import Column, String, Float, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class Attraction(BaseModel):
    """A place worth visiting, linked to any number of trip days."""
    __tablename__ = "attractions"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False, default="")
    opening_hours = Column(String(200), nullable=True)
    price = Column(String(100), nullable=True)
    url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    day_indexes = Column(JSON, nullable=False, default=list)

    trip = relationship("Trip", back_populates="attractions")
