"""
Expense model for wedding line items.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class PaidStatus(str, enum.Enum):
    """Payment status derived from paid amount versus total."""
    PAID = "paid"
    HALF_PAID = "half_paid"
    UNPAID = "unpaid"


class Expense(BaseModel):
    """Expense model; total_amount, balance and paid_status are always derived."""
    __tablename__ = "expenses"

    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    item_name = Column(Text, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    paid_amount = Column(Numeric(10, 2), nullable=False, default=0)
    balance = Column(Numeric(10, 2), nullable=False)
    paid_status = Column(
        SQLEnum(PaidStatus, name="paid_status", values_callable=lambda e: [m.value for m in e]),
        default=PaidStatus.UNPAID,
        nullable=False
    )
    paid_by_id = Column(String(36), ForeignKey("paid_by.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    payment_mode_id = Column(String(36), ForeignKey("payment_modes.id"), nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="expenses")
    category = relationship("Category")
    paid_by = relationship("PaidBy")
    event = relationship("Event")
    payment_mode = relationship("PaymentMode")
