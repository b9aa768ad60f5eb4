"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from app.models.expense import PaidStatus


class ExpenseCreate(BaseModel):
    """Schema for expense creation. Derived fields are never accepted from the client."""
    date: dt_date
    item_name: str
    category_id: str
    quantity: int = 1
    unit_price: Decimal
    paid_amount: Decimal = Decimal(0)
    paid_by_id: str
    event_id: str
    payment_mode_id: str
    notes: Optional[str] = None


class ExpenseUpdate(BaseModel):
    """Schema for expense update. Omitted fields keep their stored value."""
    date: Optional[dt_date] = None
    item_name: Optional[str] = None
    category_id: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None
    paid_amount: Optional[Decimal] = None
    paid_by_id: Optional[str] = None
    event_id: Optional[str] = None
    payment_mode_id: Optional[str] = None
    notes: Optional[str] = None


class DeriveRequest(BaseModel):
    """Schema for previewing derived fields before submitting an expense."""
    quantity: int = 1
    unit_price: Decimal
    paid_amount: Decimal = Decimal(0)


class DerivedFieldsResponse(BaseModel):
    """Schema for derived expense fields."""
    total_amount: Decimal
    balance: Decimal
    paid_status: PaidStatus


class ExpenseResponse(BaseModel):
    """
    Schema for expense response.

    Carries the joined reference names so the aggregation functions can work
    on a denormalized view without further lookups.
    """
    id: str
    owner_id: str
    date: dt_date
    item_name: str
    category_id: str
    category_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    paid_status: PaidStatus
    paid_by_id: str
    paid_by_name: Optional[str] = None
    event_id: str
    event_name: Optional[str] = None
    payment_mode_id: str
    payment_mode_name: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
