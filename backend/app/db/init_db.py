"""
Database initialization script.

Creates all tables and seeds the global reference data (categories and
payment modes). Safe to run repeatedly.
"""
import logging
from sqlalchemy.orm import Session
from app.db.session import SessionLocal, init_db
from app.models.reference import Category, PaymentMode

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    "Catering",
    "Food & Beverages",
    "Snacks & Sweets",
    "Vehicle & Transportation",
    "Photographer",
    "Videographer",
    "Makeup & Grooming",
    "Venue Booking",
    "Stage & Decoration",
    "Lighting & Sound",
    "Printing & Invitations",
    "Gifts & Return Gifts",
    "Outfits / Dresses / Sherwani",
    "Jewelry & Accessories",
    "Priest / Pandit",
    "Security",
    "Accommodation",
    "Event Management",
    "Mehendi Function",
    "Sangeet / Music Night",
    "Reception",
    "Miscellaneous / Other",
]

DEFAULT_PAYMENT_MODES = ["Cash", "UPI", "Bank Transfer", "Credit Card", "Other"]


def seed_reference_data(db: Session) -> int:
    """Insert missing global categories and payment modes. Returns rows added."""
    added = 0
    existing_categories = {name for (name,) in db.query(Category.name).all()}
    for name in DEFAULT_CATEGORIES:
        if name not in existing_categories:
            db.add(Category(name=name))
            added += 1

    existing_modes = {name for (name,) in db.query(PaymentMode.name).all()}
    for name in DEFAULT_PAYMENT_MODES:
        if name not in existing_modes:
            db.add(PaymentMode(name=name))
            added += 1

    db.commit()
    if added:
        logger.info(f"Seeded {added} reference rows")
    return added


def initialize(bind=None) -> None:
    """Create tables and seed reference data."""
    init_db(bind)
    db = SessionLocal(bind=bind) if bind is not None else SessionLocal()
    try:
        seed_reference_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Initializing database...")
    initialize()
    print("Database initialized successfully!")
