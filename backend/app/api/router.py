"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import (
    auth, users, profile, setup, reference, expenses, dashboard
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(profile.router)
api_router.include_router(setup.router)
api_router.include_router(reference.router)
api_router.include_router(expenses.router)
api_router.include_router(dashboard.router)
