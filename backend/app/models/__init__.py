"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.profile import Profile
from app.models.reference import Category, PaymentMode, PaidBy, Event
from app.models.expense import Expense, PaidStatus

__all__ = [
    "User",
    "Profile",
    "Category",
    "PaymentMode",
    "PaidBy",
    "Event",
    "Expense",
    "PaidStatus",
]
