"""
Pydantic schemas for dashboard and analytics summaries.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from decimal import Decimal
from app.models.expense import PaidStatus
from app.schemas.expense import ExpenseResponse


class ExpenseTotals(BaseModel):
    """Scalar rollups over an expense collection."""
    total_expenses: Decimal = Decimal("0.00")
    total_paid: Decimal = Decimal("0.00")
    total_balance: Decimal = Decimal("0.00")
    expense_count: int = 0


class StatusCounts(BaseModel):
    """Headline status counters."""
    completed: int = 0  # paid
    pending: int = 0  # unpaid
    partial: int = 0  # half_paid, counted in neither headline bucket


class GroupSummaryItem(BaseModel):
    """Expenses grouped by one reference dimension."""
    name: str
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    count: int
    percentage: float  # Share of total expenses (0-100, one decimal)


class StatusSummaryItem(BaseModel):
    """Expenses grouped by payment status."""
    status: PaidStatus
    count: int
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal


class MonthlySummaryItem(BaseModel):
    """Expenses grouped by calendar month of their date."""
    month: str  # YYYY-MM
    label: str  # e.g. "Oct 2026"
    total_amount: Decimal
    paid_amount: Decimal
    balance: Decimal
    count: int


class TrendPoint(BaseModel):
    """One month of the trailing payment trend."""
    month: str
    label: str
    amount: Decimal  # Sum of paid_amount


class DashboardSummary(BaseModel):
    """Schema for the dashboard view."""
    currency: str
    totals: ExpenseTotals
    percent_paid: int
    completed_payments: int
    pending_payments: int
    partial_payments: int
    category_breakdown: List[GroupSummaryItem] = []
    top_categories: List[GroupSummaryItem] = []
    recent_activity: List[ExpenseResponse] = []
    wedding_date: Optional[date] = None
    days_until_wedding: Optional[int] = None


class AnalyticsSummary(BaseModel):
    """Schema for the analytics view."""
    currency: str
    totals: ExpenseTotals
    percent_paid: int
    estimated_budget: Decimal
    budget_used: float
    categories: List[GroupSummaryItem] = []
    events: List[GroupSummaryItem] = []
    payment_modes: List[GroupSummaryItem] = []
    paid_by: List[GroupSummaryItem] = []
    statuses: List[StatusSummaryItem] = []
    monthly: List[MonthlySummaryItem] = []
    trend: List[TrendPoint] = []
    recent_expenses: List[ExpenseResponse] = []
    upcoming_payments: List[ExpenseResponse] = []
    largest_expenses: List[ExpenseResponse] = []
