"""
Declarative base and shared columns for all models.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_uuid() -> str:
    """Generate a new primary key value."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Abstract model with a UUID primary key and audit timestamps."""
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=generate_uuid)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
