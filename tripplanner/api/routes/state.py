"""
Snapshot route used by clients to hydrate their local store.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tripplanner.db.session import get_db
from tripplanner.models.user import User
from tripplanner.schemas.state import StateSnapshot
from tripplanner.services.state_service import build_state_snapshot
from tripplanner.api.dependencies import get_current_user

router = APIRouter(tags=["state"])


@router.get("/state", response_model=StateSnapshot)
async def get_state(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Every trip the caller can see plus all of their dependent records."""
    return build_state_snapshot(current_user.id, db)
