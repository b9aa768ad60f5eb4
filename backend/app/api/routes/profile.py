"""
Profile routes for wedding metadata.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db, store_call
from app.db.base import utcnow
from app.models.user import User
from app.models.profile import Profile
from app.schemas.profile import ProfileUpdate, ProfileResponse
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/profile", tags=["profile"])


def get_or_create_profile(owner_id: str, db: Session) -> Profile:
    """Load the owner's profile, creating an empty one for accounts that lack it."""
    profile = db.query(Profile).filter(Profile.owner_id == owner_id).first()
    if not profile:
        profile = Profile(owner_id=owner_id)
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile


@router.get("", response_model=ProfileResponse)
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's profile."""
    with store_call(db, "load profile"):
        return get_or_create_profile(current_user.id, db)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update profile fields that are present in the request."""
    with store_call(db, "update profile"):
        profile = get_or_create_profile(current_user.id, db)
        for field, value in profile_data.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)
        profile.updated_at = utcnow()
        db.commit()
        db.refresh(profile)
        return profile
