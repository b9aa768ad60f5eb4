"""
Reference entities that normalize names referenced by expenses.

Category and PaymentMode are global and read-only to users.
PaidBy and Event are scoped per owner.
"""
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Category(BaseModel):
    """Global expense category."""
    __tablename__ = "categories"

    name = Column(String(100), unique=True, nullable=False)


class PaymentMode(BaseModel):
    """Global payment mode (cash, UPI, ...)."""
    __tablename__ = "payment_modes"

    name = Column(String(100), unique=True, nullable=False)


class PaidBy(BaseModel):
    """Person who paid, managed by the owner."""
    __tablename__ = "paid_by"

    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="paid_by")

    __table_args__ = (
        UniqueConstraint('owner_id', 'name', name='uq_paid_by_owner_name'),
    )


class Event(BaseModel):
    """Wedding event (haldi, sangeet, ...), managed by the owner."""
    __tablename__ = "events"

    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="events")

    __table_args__ = (
        UniqueConstraint('owner_id', 'name', name='uq_event_owner_name'),
    )
