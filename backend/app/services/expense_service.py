"""
Expense service: validated record construction and expense persistence.
"""
import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload
from app.core.exceptions import ValidationError, NotFoundError
from app.core.utils import to_money, MAX_AMOUNT
from app.db.base import utcnow
from app.db.session import store_call
from app.models.expense import Expense, PaidStatus
from app.models.reference import Category, PaymentMode, PaidBy, Event
from app.schemas.expense import ExpenseResponse
from app.services.derivation_service import derive_expense_fields

logger = logging.getLogger(__name__)

# Upper bound of the Integer quantity column
MAX_QUANTITY = 2147483647

# Order matters: the first violated field is the one reported
RECORD_INPUT_FIELDS = (
    "date", "item_name", "category_id", "quantity", "unit_price",
    "paid_amount", "paid_by_id", "event_id", "payment_mode_id", "notes",
)


@dataclass(frozen=True)
class ExpenseRecord:
    """A validated expense with its derived fields, ready to persist."""
    date: date
    item_name: str
    category_id: str
    quantity: int
    unit_price: Decimal
    paid_amount: Decimal
    paid_by_id: str
    event_id: str
    payment_mode_id: str
    notes: Optional[str]
    total_amount: Decimal
    balance: Decimal
    paid_status: PaidStatus

    def as_columns(self) -> Dict[str, Any]:
        """Column values for the Expense model."""
        return asdict(self)


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError("date", "date must be a valid calendar date (YYYY-MM-DD)")


def _parse_text(field: str, value) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(field, f"{field} must not be empty")
    return text


def _parse_reference_id(field: str, value) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(field, f"{field} is required")
    return text


def _parse_quantity(value) -> int:
    if isinstance(value, bool) or value is None:
        raise ValidationError("quantity", "quantity must be a whole number")
    if isinstance(value, int):
        quantity = value
    else:
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError("quantity", "quantity must be a whole number")
        if not number.is_finite() or number != number.to_integral_value():
            raise ValidationError("quantity", "quantity must be a whole number")
        quantity = int(number)
    if quantity < 1:
        raise ValidationError("quantity", "quantity must be at least 1")
    if quantity > MAX_QUANTITY:
        raise ValidationError("quantity", f"quantity must not exceed {MAX_QUANTITY}")
    return quantity


def _parse_amount(field: str, value) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError(field, f"{field} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(field, f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(field, f"{field} must be a number")
    if amount < 0:
        raise ValidationError(field, f"{field} must not be negative")
    # Bound before quantizing; very large values overflow the decimal context
    if amount > MAX_AMOUNT or to_money(amount) > MAX_AMOUNT:
        raise ValidationError(field, f"{field} must not exceed {MAX_AMOUNT}")
    return to_money(amount)


def _check_total(quantity: int, unit_price: Decimal) -> None:
    if to_money(unit_price * quantity) > MAX_AMOUNT:
        raise ValidationError("unit_price", f"total amount must not exceed {MAX_AMOUNT}")


def validate_amounts(quantity, unit_price, paid_amount=0) -> Tuple[int, Decimal, Decimal]:
    """Validate only the numeric inputs, for previews that have no full record yet."""
    qty = _parse_quantity(quantity)
    price = _parse_amount("unit_price", unit_price)
    _check_total(qty, price)
    return qty, price, _parse_amount("paid_amount", paid_amount)


def build_expense_record(
    date,
    item_name,
    category_id,
    quantity,
    unit_price,
    paid_amount=0,
    paid_by_id=None,
    event_id=None,
    payment_mode_id=None,
    notes=None
) -> ExpenseRecord:
    """
    Validate raw expense input and derive its dependent fields.

    Raises ValidationError naming the first invalid field. Pure: no record is
    built unless every check passes, and nothing is written anywhere.
    Whether the referenced ids exist is checked at persist time.
    """
    expense_date = _parse_date(date)
    name = _parse_text("item_name", item_name)
    category = _parse_reference_id("category_id", category_id)
    qty = _parse_quantity(quantity)
    price = _parse_amount("unit_price", unit_price)
    _check_total(qty, price)
    paid = _parse_amount("paid_amount", paid_amount)
    paid_by = _parse_reference_id("paid_by_id", paid_by_id)
    event = _parse_reference_id("event_id", event_id)
    payment_mode = _parse_reference_id("payment_mode_id", payment_mode_id)
    clean_notes = notes.strip() if isinstance(notes, str) else None

    derived = derive_expense_fields(qty, price, paid)
    return ExpenseRecord(
        date=expense_date,
        item_name=name,
        category_id=category,
        quantity=qty,
        unit_price=price,
        paid_amount=paid,
        paid_by_id=paid_by,
        event_id=event,
        payment_mode_id=payment_mode,
        notes=clean_notes or None,
        total_amount=derived.total_amount,
        balance=derived.balance,
        paid_status=derived.paid_status
    )


def rebuild_expense_record(existing: ExpenseResponse, changes: Dict[str, Any]) -> ExpenseRecord:
    """
    Merge changed inputs over a stored expense and run the full construction again.

    Derived fields are never carried over; they are recomputed from the merged
    inputs, so an edit ends in the same state as a fresh create of those values.
    """
    inputs = {field: getattr(existing, field) for field in RECORD_INPUT_FIELDS}
    inputs.update({k: v for k, v in changes.items() if k in RECORD_INPUT_FIELDS})
    return build_expense_record(**inputs)


def to_expense_response(expense: Expense) -> ExpenseResponse:
    """Build the denormalized view of an expense from its loaded relationships."""
    return ExpenseResponse(
        id=expense.id,
        owner_id=expense.owner_id,
        date=expense.date,
        item_name=expense.item_name,
        category_id=expense.category_id,
        category_name=expense.category.name if expense.category else None,
        quantity=expense.quantity,
        unit_price=expense.unit_price,
        total_amount=expense.total_amount,
        paid_amount=expense.paid_amount,
        balance=expense.balance,
        paid_status=expense.paid_status,
        paid_by_id=expense.paid_by_id,
        paid_by_name=expense.paid_by.name if expense.paid_by else None,
        event_id=expense.event_id,
        event_name=expense.event.name if expense.event else None,
        payment_mode_id=expense.payment_mode_id,
        payment_mode_name=expense.payment_mode.name if expense.payment_mode else None,
        notes=expense.notes,
        created_at=expense.created_at,
        updated_at=expense.updated_at
    )


def _expense_query(db: Session):
    return db.query(Expense).options(
        joinedload(Expense.category),
        joinedload(Expense.paid_by),
        joinedload(Expense.event),
        joinedload(Expense.payment_mode)
    )


def _get_owned_expense(expense_id: str, owner_id: str, db: Session) -> Expense:
    expense = _expense_query(db).filter(
        Expense.id == expense_id,
        Expense.owner_id == owner_id
    ).first()
    if not expense:
        raise NotFoundError("Expense", expense_id)
    return expense


def _check_references(owner_id: str, record: ExpenseRecord, db: Session) -> None:
    """Referenced rows must exist; paid-by and event must also belong to the owner."""
    if not db.query(Category.id).filter(Category.id == record.category_id).first():
        raise ValidationError("category_id", "Unknown category")
    if not db.query(PaymentMode.id).filter(PaymentMode.id == record.payment_mode_id).first():
        raise ValidationError("payment_mode_id", "Unknown payment mode")
    if not db.query(PaidBy.id).filter(
        PaidBy.id == record.paid_by_id,
        PaidBy.owner_id == owner_id
    ).first():
        raise ValidationError("paid_by_id", "Unknown paid-by person")
    if not db.query(Event.id).filter(
        Event.id == record.event_id,
        Event.owner_id == owner_id
    ).first():
        raise ValidationError("event_id", "Unknown event")


def list_expenses(owner_id: str, db: Session) -> List[ExpenseResponse]:
    """All expenses of an owner with joined reference names, newest first."""
    with store_call(db, "list expenses"):
        expenses = _expense_query(db).filter(
            Expense.owner_id == owner_id
        ).order_by(Expense.created_at.desc()).all()
        return [to_expense_response(expense) for expense in expenses]


def get_expense(expense_id: str, owner_id: str, db: Session) -> ExpenseResponse:
    """Get one expense owned by owner_id."""
    with store_call(db, "load expense"):
        return to_expense_response(_get_owned_expense(expense_id, owner_id, db))


def create_expense(owner_id: str, record: ExpenseRecord, db: Session) -> ExpenseResponse:
    """Persist a validated record for owner_id."""
    with store_call(db, "create expense"):
        _check_references(owner_id, record, db)
        expense = Expense(owner_id=owner_id, **record.as_columns())
        db.add(expense)
        db.commit()
        expense_id = expense.id
        logger.info(f"Created expense {expense_id} for owner {owner_id}")
        return to_expense_response(_get_owned_expense(expense_id, owner_id, db))


def update_expense(expense_id: str, owner_id: str, record: ExpenseRecord, db: Session) -> ExpenseResponse:
    """Overwrite every input and derived field of an owned expense in one commit."""
    with store_call(db, "update expense"):
        expense = _get_owned_expense(expense_id, owner_id, db)
        _check_references(owner_id, record, db)
        for column, value in record.as_columns().items():
            setattr(expense, column, value)
        expense.updated_at = utcnow()
        db.commit()
        logger.info(f"Updated expense {expense_id} for owner {owner_id}")
        return to_expense_response(_get_owned_expense(expense_id, owner_id, db))


def delete_expense(expense_id: str, owner_id: str, db: Session) -> None:
    """Hard-delete an owned expense."""
    with store_call(db, "delete expense"):
        expense = _get_owned_expense(expense_id, owner_id, db)
        db.delete(expense)
        db.commit()
        logger.info(f"Deleted expense {expense_id} for owner {owner_id}")
