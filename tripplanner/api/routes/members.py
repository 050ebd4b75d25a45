"""
Trip collaboration routes: members and invite links.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from tripplanner.core.utils import generate_token
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.trip import TripMember, TripInvite, TripRole
from tripplanner.schemas.trip import (
    TripMemberResponse, MemberListResponse, MemberEnvelope, MemberInvite,
    MemberRoleUpdate, InviteCreate, InviteTokenResponse, InviteAcceptResponse
)
from tripplanner.services.access import check_trip_access, get_trip_role
from tripplanner.services.state_service import trip_response
from tripplanner.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["members"])


def _member_response(user: User, role: TripRole) -> TripMemberResponse:
    return TripMemberResponse(user_id=user.id, email=user.email, name=user.name, role=role)


def _get_member(trip_id: str, user_id: str, db: Session) -> TripMember:
    member = db.query(TripMember).filter(
        TripMember.trip_id == trip_id,
        TripMember.user_id == user_id
    ).first()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    return member


@router.get("/trips/{trip_id}/members", response_model=MemberListResponse)
async def list_members(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the owner followed by every member."""
    trip, _ = check_trip_access(trip_id, current_user.id, db)

    members = [_member_response(trip.owner, TripRole.OWNER)]
    members.extend(_member_response(m.user, m.role) for m in trip.members)
    return MemberListResponse(members=members)


@router.post("/trips/{trip_id}/members", response_model=MemberEnvelope, status_code=status.HTTP_201_CREATED)
async def invite_member(
    trip_id: str,
    invite: MemberInvite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an existing user to the trip by email."""
    trip, _ = check_trip_access(trip_id, current_user.id, db, require_owner=True)

    user = db.query(User).filter(User.email == invite.email.lower()).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    if get_trip_role(trip, user.id, db) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is already a member of this trip"
        )

    db.add(TripMember(trip_id=trip_id, user_id=user.id, role=invite.role))
    db.commit()
    logger.info(f"User {user.id} added to trip {trip_id} as {invite.role.value}")

    return MemberEnvelope(member=_member_response(user, invite.role))


@router.patch("/trips/{trip_id}/members/{user_id}", response_model=MemberEnvelope)
async def update_member_role(
    trip_id: str,
    user_id: str,
    update: MemberRoleUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change a member's role."""
    check_trip_access(trip_id, current_user.id, db, require_owner=True)

    member = _get_member(trip_id, user_id, db)
    member.role = update.role
    db.commit()

    return MemberEnvelope(member=_member_response(member.user, member.role))


@router.delete("/trips/{trip_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    trip_id: str,
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a member from the trip."""
    check_trip_access(trip_id, current_user.id, db, require_owner=True)

    member = _get_member(trip_id, user_id, db)
    db.delete(member)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/trips/{trip_id}/invites", response_model=InviteTokenResponse, status_code=status.HTTP_201_CREATED)
async def create_invite(
    trip_id: str,
    invite: InviteCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an invite link that grants the given role."""
    check_trip_access(trip_id, current_user.id, db, require_owner=True)

    token = generate_token()
    db.add(TripInvite(token=token, trip_id=trip_id, role=invite.role))
    db.commit()

    return InviteTokenResponse(invite_token=token, role=invite.role)


@router.post("/invites/{token}/accept", response_model=InviteAcceptResponse)
async def accept_invite(
    token: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Join a trip through an invite link. Existing access is never downgraded."""
    invite = db.query(TripInvite).filter(TripInvite.token == token).first()
    if not invite:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invite not found"
        )

    trip = invite.trip
    role = get_trip_role(trip, current_user.id, db)
    if role is None:
        db.add(TripMember(trip_id=trip.id, user_id=current_user.id, role=invite.role))
        db.commit()
        role = invite.role
    elif role == TripRole.VIEWER and invite.role == TripRole.PARTICIPANT:
        member = _get_member(trip.id, current_user.id, db)
        member.role = invite.role
        db.commit()
        role = invite.role

    return InviteAcceptResponse(trip=trip_response(trip, role), role=role)
