"""
Pydantic schemas for Flight entity.
"""
from pydantic import Field
from typing import Optional
from tripplanner.schemas.base import CamelModel


class FlightBase(CamelModel):
    """All flight details are optional."""
    flight_number: Optional[str] = None
    airline: Optional[str] = None
    airport_departure: Optional[str] = None
    airport_arrival: Optional[str] = None
    departure_date_time: Optional[str] = None
    arrival_date_time: Optional[str] = None
    gate: Optional[str] = None
    ticket_url: Optional[str] = None
    ticket_notes: Optional[str] = None
    seat: Optional[str] = None
    cabin_class: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class FlightCreate(FlightBase):
    pass


class FlightUpdate(FlightBase):
    pass


class FlightResponse(FlightBase):
    """Schema for flight response."""
    id: str
    trip_id: str
