"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.models.expense import PaidStatus
from app.schemas.expense import (
    ExpenseCreate, ExpenseUpdate, ExpenseResponse, DeriveRequest, DerivedFieldsResponse
)
from app.services import expense_service
from app.services.aggregation_service import filter_expenses
from app.services.derivation_service import derive_expense_fields
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseResponse])
async def get_expenses(
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    paid_status: Optional[PaidStatus] = Query(None, alias="status"),
    event_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's expenses, newest first, with optional filters."""
    expenses = expense_service.list_expenses(current_user.id, db)
    return filter_expenses(
        expenses,
        search=search,
        category_id=category_id,
        status=paid_status,
        event_id=event_id
    )


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an expense; totals, balance and status are derived."""
    record = expense_service.build_expense_record(**expense_data.model_dump())
    return expense_service.create_expense(current_user.id, record, db)


@router.post("/derive", response_model=DerivedFieldsResponse)
async def derive_fields(
    derive_data: DeriveRequest,
    current_user: User = Depends(get_current_user)
):
    """Preview the derived fields for the given amounts without saving anything."""
    amounts = expense_service.validate_amounts(
        derive_data.quantity, derive_data.unit_price, derive_data.paid_amount
    )
    derived = derive_expense_fields(*amounts)
    return DerivedFieldsResponse(
        total_amount=derived.total_amount,
        balance=derived.balance,
        paid_status=derived.paid_status
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one expense."""
    return expense_service.get_expense(expense_id, current_user.id, db)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an expense. Omitted fields keep their value; derived fields are recomputed."""
    existing = expense_service.get_expense(expense_id, current_user.id, db)
    record = expense_service.rebuild_expense_record(
        existing, expense_data.model_dump(exclude_unset=True)
    )
    return expense_service.update_expense(expense_id, current_user.id, record, db)


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense_service.delete_expense(expense_id, current_user.id, db)
    return {"message": "Expense deleted successfully"}
