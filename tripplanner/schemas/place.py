"""
Pydantic schemas for PinnedPlace entity.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from tripplanner.schemas.base import CamelModel


class PinnedPlaceCreate(CamelModel):
    """Schema for pinning a place."""
    name: str = Field(min_length=1)
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class PinnedPlaceUpdate(CamelModel):
    """Schema for pinned place update."""
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class PinnedPlaceResponse(PinnedPlaceCreate):
    """Schema for pinned place response."""
    id: str
    trip_id: str
    created_at: datetime
