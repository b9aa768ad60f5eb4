"""
Derivation of dependent expense fields.

total_amount, balance and paid_status are never entered by the user; they are
recomputed from quantity, unit_price and paid_amount on every create and
update. Everything here is a pure function of its arguments.
"""
from dataclasses import dataclass
from decimal import Decimal
from app.core.utils import to_money
from app.models.expense import PaidStatus


@dataclass(frozen=True)
class DerivedFields:
    """Fields computed from the user-entered amounts."""
    total_amount: Decimal
    balance: Decimal
    paid_status: PaidStatus


def classify_paid_status(total_amount: Decimal, paid_amount: Decimal) -> PaidStatus:
    """
    Classify payment status. Rules are evaluated in order:

    1. total_amount > 0 and paid_amount >= total_amount -> paid
    2. paid_amount > 0 -> half_paid
    3. otherwise -> unpaid

    A zero-value expense with nothing paid is unpaid. Over-payment is still
    paid.
    """
    if total_amount > 0 and paid_amount >= total_amount:
        return PaidStatus.PAID
    if paid_amount > 0:
        return PaidStatus.HALF_PAID
    return PaidStatus.UNPAID


def derive_expense_fields(quantity: int, unit_price, paid_amount) -> DerivedFields:
    """
    Compute total_amount, balance and paid_status.

    Inputs are expected to be validated already (see
    expense_service.build_expense_record). Amounts are kept at currency scale.
    """
    unit_price = to_money(unit_price)
    paid_amount = to_money(paid_amount)
    total_amount = to_money(unit_price * quantity)
    balance = to_money(total_amount - paid_amount)
    return DerivedFields(
        total_amount=total_amount,
        balance=balance,
        paid_status=classify_paid_status(total_amount, paid_amount)
    )
