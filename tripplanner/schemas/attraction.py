"""
Pydantic schemas for Attraction entity.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from tripplanner.schemas.base import CamelModel


def _normalize_day_indexes(value):
    if value is None:
        return value
    return sorted(set(value))


class AttractionBase(CamelModel):
    """Base attraction schema."""
    name: str = Field(min_length=1)
    address: str = ""
    opening_hours: Optional[str] = None
    price: Optional[str] = None
    url: Optional[str] = None
    notes: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    day_indexes: List[int] = []  # Days the attraction is relevant to

    @field_validator("day_indexes")
    @classmethod
    def dedupe_day_indexes(cls, v):
        return _normalize_day_indexes(v)


class AttractionCreate(AttractionBase):
    """Schema for attraction creation."""
    pass


class AttractionUpdate(CamelModel):
    """Schema for attraction update."""
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    opening_hours: Optional[str] = None
    price: Optional[str] = None
    url: Optional[str] = None
    notes: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    day_indexes: Optional[List[int]] = None

    @field_validator("day_indexes")
    @classmethod
    def dedupe_day_indexes(cls, v):
        return _normalize_day_indexes(v)


class AttractionResponse(AttractionBase):
    """Schema for attraction response."""
    id: str
    trip_id: str
