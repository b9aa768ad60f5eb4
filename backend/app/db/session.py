"""
Database session management.
"""
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from app.core.config import settings
from app.core.exceptions import DependencyError
from app.db.base import Base

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Sessions are used from FastAPI's threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_call(db: Session, action: str):
    """
    Run a block of store operations, turning driver failures into DependencyError.

    The session is rolled back before the error propagates. No retry.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Store failure while trying to {action}: {exc}")
        raise DependencyError(f"Could not {action}") from exc


def init_db(bind=None):
    """Initialize database tables."""
    # Import all models so SQLAlchemy registers them on Base.metadata
    import app.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
