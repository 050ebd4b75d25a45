"""
Public share links for read-only trip views.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripplanner.core.utils import generate_token
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.models.trip import ShareToken
from tripplanner.schemas.trip import ShareTokenResponse
from tripplanner.schemas.state import SharedTripResponse
from tripplanner.services.access import check_trip_access
from tripplanner.services.state_service import build_shared_trip
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["sharing"])


@router.post("/trips/{trip_id}/share", response_model=ShareTokenResponse)
async def create_share_token(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Return the trip's share token, creating it on first use."""
    check_trip_access(trip_id, current_user.id, db, require_edit=True)

    share = db.query(ShareToken).filter(ShareToken.trip_id == trip_id).first()
    if not share:
        share = ShareToken(token=generate_token(), trip_id=trip_id)
        db.add(share)
        db.commit()

    return ShareTokenResponse(share_token=share.token)


@router.get("/share/{token}", response_model=SharedTripResponse)
async def get_shared_trip(token: str, db: Session = Depends(get_db)):
    """Read-only trip view. No authentication."""
    share = db.query(ShareToken).filter(ShareToken.token == token).first()
    if not share:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shared trip not found"
        )
    return build_shared_trip(share.trip, db)
