"""
Pydantic schemas for Accommodation entity.
"""
from pydantic import Field, model_validator
from typing import Optional
from datetime import date
from tripplanner.schemas.base import CamelModel


class AccommodationBase(CamelModel):
    """Base accommodation schema."""
    name: str = Field(min_length=1)
    address: str = ""
    check_in_date: date
    check_out_date: date
    notes: Optional[str] = None
    booking_url: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @model_validator(mode="after")
    def check_stay_range(self):
        if self.check_out_date < self.check_in_date:
            raise ValueError("checkOutDate must not be before checkInDate")
        return self

    def covers(self, day: date) -> bool:
        """True when the stay includes the given date."""
        return self.check_in_date <= day <= self.check_out_date


class AccommodationCreate(AccommodationBase):
    """Schema for accommodation creation."""
    pass


class AccommodationUpdate(CamelModel):
    """Schema for accommodation update."""
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    notes: Optional[str] = None
    booking_url: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class AccommodationResponse(AccommodationBase):
    """Schema for accommodation response."""
    id: str
    trip_id: str
