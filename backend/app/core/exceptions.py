"""
Domain exceptions raised by the services and mapped to HTTP responses in main.py.
"""
from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """An expense input violates a record invariant."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class NotFoundError(LedgerError):
    """Target record does not exist or is not owned by the caller."""

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        message = f"{entity} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id
        self.message = message


class DependencyError(LedgerError):
    """The persistent store (or another collaborator) failed."""
    pass
