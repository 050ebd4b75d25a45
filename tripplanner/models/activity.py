"""
Activity model for the day-by-day itinerary.
"""
from sqlalchemy import Column, String, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class Activity(BaseModel):
    """A planned activity on one day of a trip."""
    __tablename__ = "activities"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    day_index = Column(Integer, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    time = Column(String(20), nullable=True)  # Free-form, e.g. "09:30"
    description = Column(Text, nullable=True)
    address = Column(String(300), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    order = Column(Integer, nullable=False, default=0)  # Position within the same day (smaller = top)

    trip = relationship("Trip", back_populates="activities")
