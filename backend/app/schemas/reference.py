"""
Pydantic schemas for reference entities.
"""
from pydantic import BaseModel
from typing import List


class ReferenceResponse(BaseModel):
    """Schema for a category, payment mode, paid-by person or event."""
    id: str
    name: str

    class Config:
        from_attributes = True


class ReferenceCreate(BaseModel):
    """Schema for adding an owner-scoped reference entity."""
    name: str


class SetupRequest(BaseModel):
    """Schema for the onboarding step. Empty lists fall back to defaults."""
    paid_by: List[str] = []
    events: List[str] = []


class SetupStatus(BaseModel):
    """Schema for onboarding status."""
    needs_setup: bool


class SetupResponse(BaseModel):
    """Schema for onboarding result."""
    paid_by: List[ReferenceResponse]
    events: List[ReferenceResponse]
