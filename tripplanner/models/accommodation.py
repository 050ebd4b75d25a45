"""
Accommodation model.
"""
from sqlalchemy import Column, String, Date, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class Accommodation(BaseModel):
    """A stay covering check_in_date through check_out_date inclusive."""
    __tablename__ = "accommodations"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False, default="")
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    booking_url = Column(String(500), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    trip = relationship("Trip", back_populates="accommodations")
