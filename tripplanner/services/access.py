"""
Trip access control: resolves the caller's role and guards routes.
"""
from typing import List, Optional, Tuple, Type
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from tripplanner.models.trip import Trip, TripMember, TripRole

EDIT_ROLES = (TripRole.OWNER, TripRole.PARTICIPANT)


def get_trip_role(trip: Trip, user_id: str, db: Session) -> Optional[TripRole]:
    """Role of a user on a trip, or None without access."""
    if trip.user_id == user_id:
        return TripRole.OWNER
    member = db.query(TripMember).filter(
        TripMember.trip_id == trip.id,
        TripMember.user_id == user_id
    ).first()
    return member.role if member else None


def get_accessible_trips(user_id: str, db: Session) -> List[Tuple[Trip, TripRole]]:
    """Trips the user owns or is a member of, newest first, with the user's role."""
    owned = db.query(Trip).filter(Trip.user_id == user_id).all()
    memberships = db.query(TripMember).filter(TripMember.user_id == user_id).all()

    trips = [(trip, TripRole.OWNER) for trip in owned]
    owned_ids = {trip.id for trip in owned}
    trips.extend(
        (m.trip, m.role) for m in memberships if m.trip_id not in owned_ids
    )
    trips.sort(key=lambda pair: pair[0].created_at, reverse=True)
    return trips


def check_trip_access(
    trip_id: str,
    user_id: str,
    db: Session,
    require_edit: bool = False,
    require_owner: bool = False
) -> Tuple[Trip, TripRole]:
    """
    Check if user has access to trip.
    Unknown trips and trips without any role both answer 404; a role that
    is too weak for the operation answers 403.
    """
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    role = get_trip_role(trip, user_id, db) if trip else None
    if role is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )

    if require_owner and role != TripRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the trip owner can do this"
        )
    if require_edit and role not in EDIT_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You have view-only access to this trip"
        )

    return trip, role


def get_trip_child(model: Type, entity_id: str, user_id: str, db: Session, require_edit: bool = True):
    """Load a trip-owned record and check the caller's role on its trip."""
    entity = db.query(model).filter(model.id == entity_id).first()
    if not entity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not found"
        )
    check_trip_access(entity.trip_id, user_id, db, require_edit=require_edit)
    return entity


def apply_update(entity, changes: dict) -> None:
    """
    Copy the explicitly sent fields of a partial update onto a model.
    A null sent for a NOT NULL column leaves the stored value unchanged.
    """
    columns = entity.__table__.columns
    for field, value in changes.items():
        if value is None and field in columns and not columns[field].nullable:
            continue
        setattr(entity, field, value)
