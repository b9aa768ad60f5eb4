"""
Tests for derived expense fields.
"""
import pytest
from decimal import Decimal
from app.models.expense import PaidStatus
from app.services.derivation_service import classify_paid_status, derive_expense_fields


@pytest.mark.parametrize(
    "total, paid, expected",
    [
        ("100", "100", PaidStatus.PAID),
        ("100", "50", PaidStatus.HALF_PAID),
        ("100", "0", PaidStatus.UNPAID),
        ("0", "0", PaidStatus.UNPAID),
        ("100", "150", PaidStatus.PAID),
        ("0", "10", PaidStatus.HALF_PAID),
        ("100", "99.99", PaidStatus.HALF_PAID),
    ],
)
def test_classify_paid_status(total, paid, expected):
    """Test status rules, including the zero-value and over-payment boundaries."""
    assert classify_paid_status(Decimal(total), Decimal(paid)) == expected


def test_total_is_quantity_times_unit_price():
    """Test total amount derivation."""
    derived = derive_expense_fields(3, Decimal("333.33"), Decimal("0"))
    assert derived.total_amount == Decimal("999.99")
    assert derived.balance == Decimal("999.99")
    assert derived.paid_status == PaidStatus.UNPAID


def test_balance_can_be_negative():
    """Test that over-payment gives a negative balance and still counts as paid."""
    derived = derive_expense_fields(1, Decimal("100"), Decimal("150"))
    assert derived.balance == Decimal("-50.00")
    assert derived.paid_status == PaidStatus.PAID


def test_amounts_kept_at_currency_scale():
    """Test that results carry two decimal places."""
    derived = derive_expense_fields(2, Decimal("10.005"), Decimal("0.004"))
    assert derived.total_amount == Decimal("20.02")
    assert derived.total_amount.as_tuple().exponent == -2
    assert derived.balance == Decimal("20.02")


def test_zero_value_expense_is_unpaid():
    """Test scenario: quantity 1, price 0, paid 0."""
    derived = derive_expense_fields(1, Decimal("0"), Decimal("0"))
    assert derived.total_amount == Decimal("0")
    assert derived.balance == Decimal("0")
    assert derived.paid_status == PaidStatus.UNPAID


def test_derivation_is_pure():
    """Test that repeated calls with the same inputs agree."""
    first = derive_expense_fields(2, Decimal("500"), Decimal("1000"))
    second = derive_expense_fields(2, Decimal("500"), Decimal("1000"))
    assert first == second
    assert first.paid_status == PaidStatus.PAID
