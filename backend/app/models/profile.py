"""
Profile model carrying optional wedding metadata.
"""
from sqlalchemy import Column, String, Date, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Profile(BaseModel):
    """One profile per owner; only wedding_date feeds the dashboard countdown."""
    __tablename__ = "profiles"

    owner_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False, index=True)
    display_name = Column(String(100), nullable=True)
    wedding_date = Column(Date, nullable=True)
    contact_phone = Column(String(30), nullable=True)
    estimated_guests = Column(Integer, nullable=True)
    venue_preference = Column(String(100), nullable=True)
    budget_range = Column(String(50), nullable=True)
    package_preference = Column(String(100), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="profile")
