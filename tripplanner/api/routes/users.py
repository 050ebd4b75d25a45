"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tripplanner.db.session import get_db
from tripplanner.schemas.user import UserResponse, UserUpdate
from tripplanner.models.user import User
from tripplanner.api.dependencies import get_current_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    profile: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the current user's display name."""
    if "name" in profile.model_fields_set:
        current_user.name = profile.name or None
        db.commit()
        db.refresh(current_user)
    return current_user
