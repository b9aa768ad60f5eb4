"""
Onboarding routes that seed the owner's paid-by and event lists.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas.reference import SetupRequest, SetupResponse, SetupStatus
from app.services import reference_service
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/setup", tags=["setup"])


@router.get("/status", response_model=SetupStatus)
async def get_setup_status(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Whether the owner still has to go through onboarding."""
    return SetupStatus(needs_setup=reference_service.needs_setup(current_user.id, db))


@router.post("", response_model=SetupResponse, status_code=status.HTTP_201_CREATED)
async def complete_setup(
    setup_data: SetupRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Seed paid-by people and events; empty lists use the defaults."""
    paid_by, events = reference_service.complete_setup(
        current_user.id, setup_data.paid_by, setup_data.events, db
    )
    return SetupResponse(paid_by=paid_by, events=events)
