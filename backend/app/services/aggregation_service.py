"""
Aggregation of expense collections into dashboard and analytics summaries.

All functions are pure reductions over a sequence of denormalized expense
views (ExpenseResponse). None of them mutate their input, and all of them are
total: an empty collection gives zero rollups and empty groupings.
"""
import math
from collections import OrderedDict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from app.core.config import settings
from app.core.utils import to_money, round_percent, ZERO
from app.models.expense import PaidStatus
from app.schemas.expense import ExpenseResponse
from app.schemas.summary import (
    ExpenseTotals, StatusCounts, GroupSummaryItem, StatusSummaryItem,
    MonthlySummaryItem, TrendPoint, DashboardSummary, AnalyticsSummary
)

# Group labels for expenses whose reference name is missing
UNCATEGORIZED_LABEL = "Other"
NO_EVENT_LABEL = "General"
UNKNOWN_LABEL = "Unknown"

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

STATUS_ORDER = (PaidStatus.PAID, PaidStatus.HALF_PAID, PaidStatus.UNPAID)


def _total(values) -> Decimal:
    return to_money(sum(values, ZERO))


def summarize_totals(expenses: Sequence[ExpenseResponse]) -> ExpenseTotals:
    """Sum total, paid and balance and count the records."""
    return ExpenseTotals(
        total_expenses=_total(e.total_amount for e in expenses),
        total_paid=_total(e.paid_amount for e in expenses),
        total_balance=_total(e.balance for e in expenses),
        expense_count=len(expenses)
    )


def percent_paid(total_paid: Decimal, total_expenses: Decimal) -> int:
    """Paid share as a whole percent; 0 when nothing is owed."""
    return round_percent(total_paid, total_expenses)


def share_percent(part: Decimal, whole: Decimal) -> float:
    """Share of a group in the whole, one decimal place; 0.0 when the whole is 0."""
    return round_percent(part, whole, places=1)


def count_statuses(expenses: Sequence[ExpenseResponse]) -> StatusCounts:
    """
    Headline counters: completed is paid, pending is unpaid.

    half_paid records are counted in partial only, never in pending.
    """
    counts = StatusCounts()
    for expense in expenses:
        if expense.paid_status == PaidStatus.PAID:
            counts.completed += 1
        elif expense.paid_status == PaidStatus.UNPAID:
            counts.pending += 1
        else:
            counts.partial += 1
    return counts


def status_breakdown(expenses: Sequence[ExpenseResponse]) -> List[StatusSummaryItem]:
    """Count and amounts per status, in the order paid, half_paid, unpaid; absent statuses omitted."""
    items = []
    for status in STATUS_ORDER:
        matching = [e for e in expenses if e.paid_status == status]
        if not matching:
            continue
        items.append(StatusSummaryItem(
            status=status,
            count=len(matching),
            total_amount=_total(e.total_amount for e in matching),
            paid_amount=_total(e.paid_amount for e in matching),
            balance=_total(e.balance for e in matching)
        ))
    return items


def group_breakdown(
    expenses: Sequence[ExpenseResponse],
    name_of: Callable[[ExpenseResponse], Optional[str]],
    fallback: str
) -> List[GroupSummaryItem]:
    """
    Group expenses by a display name, in order of first appearance.

    Records without a name go to the fallback group, so the group totals always
    add up to the overall total.
    """
    grand_total = _total(e.total_amount for e in expenses)
    groups: Dict[str, List[ExpenseResponse]] = OrderedDict()
    for expense in expenses:
        name = (name_of(expense) or "").strip() or fallback
        groups.setdefault(name, []).append(expense)

    items = []
    for name, members in groups.items():
        group_total = _total(e.total_amount for e in members)
        items.append(GroupSummaryItem(
            name=name,
            total_amount=group_total,
            paid_amount=_total(e.paid_amount for e in members),
            balance=_total(e.balance for e in members),
            count=len(members),
            percentage=share_percent(group_total, grand_total)
        ))
    return items


def breakdown_by_category(expenses: Sequence[ExpenseResponse]) -> List[GroupSummaryItem]:
    return group_breakdown(expenses, lambda e: e.category_name, UNCATEGORIZED_LABEL)


def breakdown_by_event(expenses: Sequence[ExpenseResponse]) -> List[GroupSummaryItem]:
    return group_breakdown(expenses, lambda e: e.event_name, NO_EVENT_LABEL)


def breakdown_by_payment_mode(expenses: Sequence[ExpenseResponse]) -> List[GroupSummaryItem]:
    return group_breakdown(expenses, lambda e: e.payment_mode_name, UNKNOWN_LABEL)


def breakdown_by_paid_by(expenses: Sequence[ExpenseResponse]) -> List[GroupSummaryItem]:
    return group_breakdown(expenses, lambda e: e.paid_by_name, UNKNOWN_LABEL)


def top_groups(groups: Sequence[GroupSummaryItem], n: int) -> List[GroupSummaryItem]:
    """Largest groups by total amount; ties keep their input order."""
    if n <= 0:
        return []
    return sorted(groups, key=lambda g: g.total_amount, reverse=True)[:n]


def largest_expenses(expenses: Sequence[ExpenseResponse], n: int = 5) -> List[ExpenseResponse]:
    """Most expensive records by total amount; ties keep their input order."""
    if n <= 0:
        return []
    return sorted(expenses, key=lambda e: e.total_amount, reverse=True)[:n]


def _month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def _month_label(year: int, month: int) -> str:
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def monthly_trend(
    expenses: Sequence[ExpenseResponse],
    months: int = 6,
    today: Optional[date] = None
) -> List[TrendPoint]:
    """
    Paid amount per calendar month over a trailing window, oldest month first.

    The window ends with the current month and is built before looking at the
    data, so months without records are present with amount 0.
    """
    today = today or date.today()
    window = OrderedDict()
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(today.year, today.month, -offset)
        window[f"{year:04d}-{month:02d}"] = (year, month, [])

    for expense in expenses:
        bucket = window.get(_month_key(expense.date))
        if bucket is not None:
            bucket[2].append(expense.paid_amount)

    return [
        TrendPoint(month=key, label=_month_label(year, month), amount=_total(amounts))
        for key, (year, month, amounts) in window.items()
    ]


def monthly_breakdown(expenses: Sequence[ExpenseResponse]) -> List[MonthlySummaryItem]:
    """Totals for every month that has records, oldest first."""
    groups: Dict[str, List[ExpenseResponse]] = {}
    for expense in expenses:
        groups.setdefault(_month_key(expense.date), []).append(expense)

    items = []
    for key in sorted(groups):
        members = groups[key]
        year, month = int(key[:4]), int(key[5:])
        items.append(MonthlySummaryItem(
            month=key,
            label=_month_label(year, month),
            total_amount=_total(e.total_amount for e in members),
            paid_amount=_total(e.paid_amount for e in members),
            balance=_total(e.balance for e in members),
            count=len(members)
        ))
    return items


def recent_activity(
    expenses: Sequence[ExpenseResponse],
    n: int = 5,
    by: str = "created_at"
) -> List[ExpenseResponse]:
    """Newest records first by created_at (or date), truncated to n."""
    if by not in ("created_at", "date"):
        raise ValueError(f"Cannot order recent activity by {by!r}")
    if n <= 0:
        return []
    return sorted(expenses, key=lambda e: getattr(e, by), reverse=True)[:n]


def upcoming_payments(expenses: Sequence[ExpenseResponse], n: int = 5) -> List[ExpenseResponse]:
    """Records that still have a positive balance, in input order."""
    if n <= 0:
        return []
    return [e for e in expenses if e.balance > 0][:n]


def days_until(target: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole days from today until target; negative once the day has passed."""
    if target is None:
        return None
    if isinstance(target, datetime):
        target = target.date()
    today = today or date.today()
    return math.ceil((target - today) / timedelta(days=1))


def filter_expenses(
    expenses: Sequence[ExpenseResponse],
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    status: Optional[PaidStatus] = None,
    event_id: Optional[str] = None
) -> List[ExpenseResponse]:
    """
    Narrow an expense list. All given filters must match.

    search is a case-insensitive substring match over item name and notes.
    """
    needle = (search or "").strip().lower()
    result = []
    for expense in expenses:
        if needle and needle not in expense.item_name.lower() and needle not in (expense.notes or "").lower():
            continue
        if category_id and expense.category_id != category_id:
            continue
        if status and expense.paid_status != status:
            continue
        if event_id and expense.event_id != event_id:
            continue
        result.append(expense)
    return result


def build_dashboard_summary(
    expenses: Sequence[ExpenseResponse],
    wedding_date: Optional[date] = None,
    today: Optional[date] = None
) -> DashboardSummary:
    """Headline figures, category split, recent activity and wedding countdown."""
    totals = summarize_totals(expenses)
    counts = count_statuses(expenses)
    categories = breakdown_by_category(expenses)
    return DashboardSummary(
        currency=settings.CURRENCY_CODE,
        totals=totals,
        percent_paid=percent_paid(totals.total_paid, totals.total_expenses),
        completed_payments=counts.completed,
        pending_payments=counts.pending,
        partial_payments=counts.partial,
        category_breakdown=categories,
        top_categories=top_groups(categories, settings.DASHBOARD_TOP_CATEGORIES),
        recent_activity=recent_activity(expenses, settings.DASHBOARD_RECENT_LIMIT, by="created_at"),
        wedding_date=wedding_date,
        days_until_wedding=days_until(wedding_date, today)
    )


def build_analytics_summary(
    expenses: Sequence[ExpenseResponse],
    estimated_budget: Optional[Decimal] = None,
    today: Optional[date] = None
) -> AnalyticsSummary:
    """Full breakdowns by every dimension plus trend and ranking lists."""
    totals = summarize_totals(expenses)
    budget = to_money(settings.ESTIMATED_BUDGET if estimated_budget is None else estimated_budget)
    categories = breakdown_by_category(expenses)
    return AnalyticsSummary(
        currency=settings.CURRENCY_CODE,
        totals=totals,
        percent_paid=percent_paid(totals.total_paid, totals.total_expenses),
        estimated_budget=budget,
        budget_used=share_percent(totals.total_expenses, budget),
        categories=top_groups(categories, len(categories)),
        events=breakdown_by_event(expenses),
        payment_modes=breakdown_by_payment_mode(expenses),
        paid_by=breakdown_by_paid_by(expenses),
        statuses=status_breakdown(expenses),
        monthly=monthly_breakdown(expenses),
        trend=monthly_trend(expenses, settings.TREND_MONTHS, today),
        recent_expenses=recent_activity(expenses, settings.ANALYTICS_RECENT_LIMIT, by="date"),
        upcoming_payments=upcoming_payments(expenses, settings.ANALYTICS_TOP_LIMIT),
        largest_expenses=largest_expenses(expenses, settings.ANALYTICS_TOP_LIMIT)
    )
