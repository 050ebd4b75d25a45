"""
Pydantic schemas for Trip entity, its derived days, and trip access.
"""
from pydantic import EmailStr, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime
from tripplanner.core.utils import day_range
from tripplanner.models.trip import TripRole
from tripplanner.schemas.base import CamelModel


class TripBase(CamelModel):
    """Base trip schema."""
    name: str = Field(min_length=1)
    start_date: date
    end_date: date
    destination: Optional[str] = None
    tags: Optional[List[str]] = None
    budget: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_date_order(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class TripCreate(TripBase):
    """Schema for trip creation."""
    pass


class TripUpdate(CamelModel):
    """Schema for trip update. Only the fields sent are changed."""
    name: Optional[str] = Field(default=None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    destination: Optional[str] = None
    tags: Optional[List[str]] = None
    budget: Optional[float] = Field(default=None, ge=0)


class TripResponse(TripBase):
    """Schema for trip response."""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    role: Optional[TripRole] = None  # Caller's permission, set by the backend


class Day(CamelModel):
    """One calendar day of a trip. Derived from the trip dates, never stored."""
    trip_id: str
    date: date
    day_index: int


def compute_days(trip: TripBase, trip_id: Optional[str] = None) -> List[Day]:
    """Ordered days of a trip from start_date to end_date inclusive."""
    trip_id = trip_id if trip_id is not None else getattr(trip, "id", "")
    return [
        Day(trip_id=trip_id, date=day, day_index=index)
        for index, day in day_range(trip.start_date, trip.end_date)
    ]


class TripMemberResponse(CamelModel):
    """A user with access to a trip."""
    user_id: str
    email: str
    name: Optional[str] = None
    role: TripRole


class MemberListResponse(CamelModel):
    members: List[TripMemberResponse]


class MemberEnvelope(CamelModel):
    member: TripMemberResponse


class MemberRoleBase(CamelModel):
    """Role granted to a non-owner member."""
    role: TripRole = TripRole.PARTICIPANT

    @field_validator("role")
    @classmethod
    def reject_owner(cls, v):
        if v == TripRole.OWNER:
            raise ValueError("role must be participant or viewer")
        return v


class MemberInvite(MemberRoleBase):
    """Schema for inviting an existing user by email."""
    email: EmailStr


class MemberRoleUpdate(MemberRoleBase):
    """Schema for changing a member's role."""
    role: TripRole


class InviteCreate(MemberRoleBase):
    """Schema for creating an invite link."""
    pass


class InviteTokenResponse(CamelModel):
    invite_token: str
    role: TripRole


class InviteAcceptResponse(CamelModel):
    trip: TripResponse
    role: TripRole


class ShareTokenResponse(CamelModel):
    share_token: str
