"""
Pinned map location model.
"""
from sqlalchemy import Column, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class PinnedPlace(BaseModel):
    """A location pinned on the trip map."""
    __tablename__ = "pinned_places"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    trip = relationship("Trip", back_populates="pinned_places")
