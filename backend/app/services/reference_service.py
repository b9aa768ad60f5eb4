"""
Reference entity service: lookup lists and owner onboarding.

Categories and payment modes are global and read-only. Paid-by people and
events belong to one owner and are seeded by the setup step.
"""
import logging
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import ValidationError, NotFoundError
from app.db.session import store_call
from app.models.expense import Expense
from app.models.reference import Category, PaymentMode, PaidBy, Event

logger = logging.getLogger(__name__)


def _clean_names(names: Iterable[str]) -> List[str]:
    """Trim names, drop blanks and case-insensitive duplicates, keep first spelling."""
    seen = set()
    cleaned = []
    for name in names or []:
        text = (name or "").strip()
        if not text or text.lower() in seen:
            continue
        seen.add(text.lower())
        cleaned.append(text)
    return cleaned


def list_categories(db: Session) -> List[Category]:
    """All global categories by name."""
    with store_call(db, "list categories"):
        return db.query(Category).order_by(Category.name).all()


def list_payment_modes(db: Session) -> List[PaymentMode]:
    """All global payment modes by name."""
    with store_call(db, "list payment modes"):
        return db.query(PaymentMode).order_by(PaymentMode.name).all()


def list_paid_by(owner_id: str, db: Session) -> List[PaidBy]:
    """Paid-by people of an owner by name."""
    with store_call(db, "list paid-by people"):
        return db.query(PaidBy).filter(PaidBy.owner_id == owner_id).order_by(PaidBy.name).all()


def list_events(owner_id: str, db: Session) -> List[Event]:
    """Events of an owner by name."""
    with store_call(db, "list events"):
        return db.query(Event).filter(Event.owner_id == owner_id).order_by(Event.name).all()


def _add_owned(model, owner_id: str, name: str, db: Session):
    names = _clean_names([name])
    if not names:
        raise ValidationError("name", "name must not be empty")
    clean = names[0]
    existing = db.query(model).filter(model.owner_id == owner_id).all()
    if any(row.name.lower() == clean.lower() for row in existing):
        raise ValidationError("name", f"'{clean}' already exists")
    row = model(owner_id=owner_id, name=clean)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _delete_owned(model, expense_column, label: str, owner_id: str, entity_id: str, db: Session) -> None:
    row = db.query(model).filter(model.id == entity_id, model.owner_id == owner_id).first()
    if not row:
        raise NotFoundError(label, entity_id)
    if db.query(Expense.id).filter(expense_column == entity_id).first():
        raise ValidationError("id", f"{label} is still used by expenses")
    db.delete(row)
    db.commit()


def add_paid_by(owner_id: str, name: str, db: Session) -> PaidBy:
    """Add a paid-by person to the owner's list."""
    with store_call(db, "add paid-by person"):
        return _add_owned(PaidBy, owner_id, name, db)


def add_event(owner_id: str, name: str, db: Session) -> Event:
    """Add an event to the owner's list."""
    with store_call(db, "add event"):
        return _add_owned(Event, owner_id, name, db)


def delete_paid_by(owner_id: str, entity_id: str, db: Session) -> None:
    """Remove a paid-by person that no expense references."""
    with store_call(db, "delete paid-by person"):
        _delete_owned(PaidBy, Expense.paid_by_id, "Paid-by person", owner_id, entity_id, db)


def delete_event(owner_id: str, entity_id: str, db: Session) -> None:
    """Remove an event that no expense references."""
    with store_call(db, "delete event"):
        _delete_owned(Event, Expense.event_id, "Event", owner_id, entity_id, db)


def needs_setup(owner_id: str, db: Session) -> bool:
    """An owner needs onboarding until they have at least one paid-by person and one event."""
    with store_call(db, "check setup status"):
        has_paid_by = db.query(PaidBy.id).filter(PaidBy.owner_id == owner_id).first() is not None
        has_events = db.query(Event.id).filter(Event.owner_id == owner_id).first() is not None
        return not (has_paid_by and has_events)


def complete_setup(
    owner_id: str,
    paid_by_names: Optional[List[str]],
    event_names: Optional[List[str]],
    db: Session
):
    """
    Seed the owner's paid-by and event lists.

    Empty lists fall back to the configured defaults. Names the owner already
    has are skipped, so running setup twice adds nothing. All rows are written
    in one commit. Returns the owner's full (paid_by, events) lists.
    """
    paid_by_names = _clean_names(paid_by_names) or list(settings.DEFAULT_PAID_BY)
    event_names = _clean_names(event_names) or list(settings.DEFAULT_EVENTS)

    with store_call(db, "complete setup"):
        added = 0
        for model, names in ((PaidBy, paid_by_names), (Event, event_names)):
            existing = {
                row.name.lower() for row in db.query(model).filter(model.owner_id == owner_id).all()
            }
            for name in names:
                if name.lower() in existing:
                    continue
                db.add(model(owner_id=owner_id, name=name))
                added += 1
        db.commit()
        logger.info(f"Setup for owner {owner_id} added {added} reference rows")

    return list_paid_by(owner_id, db), list_events(owner_id, db)
