"""
Flight model. Every descriptive field is optional.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from tripplanner.db.base import BaseModel


class Flight(BaseModel):
    """A flight booked for a trip."""
    __tablename__ = "flights"

    trip_id = Column(String(32), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    flight_number = Column(String(20), nullable=True)
    airline = Column(String(100), nullable=True)
    airport_departure = Column(String(100), nullable=True)
    airport_arrival = Column(String(100), nullable=True)
    departure_date_time = Column(String(40), nullable=True)  # ISO text as entered
    arrival_date_time = Column(String(40), nullable=True)
    gate = Column(String(20), nullable=True)
    ticket_url = Column(String(500), nullable=True)
    ticket_notes = Column(Text, nullable=True)
    seat = Column(String(20), nullable=True)
    cabin_class = Column(String(30), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    trip = relationship("Trip", back_populates="flights")
