"""
Pydantic schemas for Profile entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class ProfileUpdate(BaseModel):
    """Schema for profile update."""
    display_name: Optional[str] = None
    wedding_date: Optional[date] = None
    contact_phone: Optional[str] = None
    estimated_guests: Optional[int] = Field(default=None, ge=0)
    venue_preference: Optional[str] = None
    budget_range: Optional[str] = None
    package_preference: Optional[str] = None


class ProfileResponse(ProfileUpdate):
    """Schema for profile response."""
    id: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
