"""
Pydantic schemas for Activity entity.
"""
from pydantic import Field
from typing import Optional
from tripplanner.schemas.base import CamelModel


class ActivityBase(CamelModel):
    """Base activity schema."""
    day_index: int = Field(ge=0)
    title: str = Field(min_length=1)
    time: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    order: int = 0  # Sort key within the same day


class ActivityCreate(ActivityBase):
    """Schema for activity creation."""
    pass


class ActivityUpdate(CamelModel):
    """Schema for activity update (moving days and reordering included)."""
    day_index: Optional[int] = Field(default=None, ge=0)
    title: Optional[str] = Field(default=None, min_length=1)
    time: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    order: Optional[int] = None


class ActivityResponse(ActivityBase):
    """Schema for activity response."""
    id: str
    trip_id: str
