"""
Reference list routes: categories, payment modes, paid-by people and events.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.reference import ReferenceCreate, ReferenceResponse
from app.services import reference_service
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/categories", response_model=List[ReferenceResponse])
async def get_categories(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Global expense categories."""
    return reference_service.list_categories(db)


@router.get("/payment-modes", response_model=List[ReferenceResponse])
async def get_payment_modes(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Global payment modes."""
    return reference_service.list_payment_modes(db)


@router.get("/paid-by", response_model=List[ReferenceResponse])
async def get_paid_by(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Paid-by people of the current user."""
    return reference_service.list_paid_by(current_user.id, db)


@router.post("/paid-by", response_model=ReferenceResponse, status_code=status.HTTP_201_CREATED)
async def create_paid_by(
    data: ReferenceCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a paid-by person."""
    return reference_service.add_paid_by(current_user.id, data.name, db)


@router.delete("/paid-by/{entity_id}")
async def remove_paid_by(
    entity_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a paid-by person no expense uses."""
    reference_service.delete_paid_by(current_user.id, entity_id, db)
    return {"message": "Paid-by person deleted successfully"}


@router.get("/events", response_model=List[ReferenceResponse])
async def get_events(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Events of the current user."""
    return reference_service.list_events(current_user.id, db)


@router.post("/events", response_model=ReferenceResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: ReferenceCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an event."""
    return reference_service.add_event(current_user.id, data.name, db)


@router.delete("/events/{entity_id}")
async def remove_event(
    entity_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an event no expense uses."""
    reference_service.delete_event(current_user.id, entity_id, db)
    return {"message": "Event deleted successfully"}
