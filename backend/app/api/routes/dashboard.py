"""
Dashboard and analytics routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db, store_call
from app.models.user import User
from app.models.profile import Profile
from app.schemas.summary import DashboardSummary, AnalyticsSummary
from app.services import expense_service
from app.services.aggregation_service import build_dashboard_summary, build_analytics_summary
from app.api.dependencies import get_current_user

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Headline totals, status counters, category split, recent activity and countdown."""
    expenses = expense_service.list_expenses(current_user.id, db)

    with store_call(db, "load profile"):
        profile = db.query(Profile).filter(Profile.owner_id == current_user.id).first()
    wedding_date = profile.wedding_date if profile else None

    return build_dashboard_summary(expenses, wedding_date=wedding_date)


@router.get("/analytics", response_model=AnalyticsSummary)
async def get_analytics(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Breakdowns by category, event, payment mode, payer and status with trends."""
    expenses = expense_service.list_expenses(current_user.id, db)
    return build_analytics_summary(expenses)
