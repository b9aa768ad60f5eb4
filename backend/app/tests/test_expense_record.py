"""
Tests for validated expense record construction.
"""
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from app.core.exceptions import ValidationError
from app.models.expense import PaidStatus
from app.schemas.expense import ExpenseResponse
from app.services.expense_service import build_expense_record, rebuild_expense_record, validate_amounts


def raw_input(**overrides):
    values = {
        "date": date(2026, 11, 20),
        "item_name": "Catering for 200",
        "category_id": "cat-1",
        "quantity": 2,
        "unit_price": Decimal("500"),
        "paid_amount": Decimal("1000"),
        "paid_by_id": "payer-1",
        "event_id": "event-1",
        "payment_mode_id": "mode-1",
        "notes": None,
    }
    values.update(overrides)
    return values


def test_build_record_derives_fields():
    """Test that a valid input yields a fully derived record."""
    record = build_expense_record(**raw_input())
    assert record.total_amount == Decimal("1000.00")
    assert record.balance == Decimal("0.00")
    assert record.paid_status == PaidStatus.PAID
    assert record.unit_price == Decimal("500.00")


def test_build_record_normalizes_text():
    """Test trimming of item name, ids and notes."""
    record = build_expense_record(**raw_input(
        item_name="  Haldi decor  ",
        category_id=" cat-1 ",
        notes="   "
    ))
    assert record.item_name == "Haldi decor"
    assert record.category_id == "cat-1"
    assert record.notes is None


def test_build_record_accepts_iso_date_string():
    """Test that ISO date strings are parsed, past and future alike."""
    assert build_expense_record(**raw_input(date="2019-01-31")).date == date(2019, 1, 31)
    assert build_expense_record(**raw_input(date="2031-12-01")).date == date(2031, 12, 1)


def test_build_record_drops_time_of_day():
    """Test that a datetime is reduced to its calendar date."""
    record = build_expense_record(**raw_input(date=datetime(2026, 5, 4, 18, 30)))
    assert record.date == date(2026, 5, 4)


@pytest.mark.parametrize(
    "field, value",
    [
        ("date", "2026-02-30"),
        ("date", "tomorrow"),
        ("date", None),
        ("item_name", ""),
        ("item_name", "   "),
        ("category_id", ""),
        ("quantity", 0),
        ("quantity", -1),
        ("quantity", 1.5),
        ("quantity", True),
        ("unit_price", Decimal("-0.01")),
        ("unit_price", "abc"),
        ("unit_price", Decimal("NaN")),
        ("paid_amount", Decimal("-5")),
        ("paid_by_id", None),
        ("event_id", "  "),
        ("payment_mode_id", ""),
    ],
)
def test_build_record_rejects_invalid_field(field, value):
    """Test that each rejected value names the offending field."""
    with pytest.raises(ValidationError) as exc_info:
        build_expense_record(**raw_input(**{field: value}))
    assert exc_info.value.field == field


def test_first_invalid_field_is_reported():
    """Test that validation stops at the first violation in input order."""
    with pytest.raises(ValidationError) as exc_info:
        build_expense_record(**raw_input(item_name="", quantity=0))
    assert exc_info.value.field == "item_name"


def test_quantity_accepts_integral_values():
    """Test that integral decimals and strings are accepted as quantity."""
    assert build_expense_record(**raw_input(quantity=Decimal("3"))).quantity == 3
    assert build_expense_record(**raw_input(quantity="4")).quantity == 4


def test_validate_amounts():
    """Test the numeric-only validation used by the preview."""
    assert validate_amounts(2, "10.5", 0) == (2, Decimal("10.50"), Decimal("0.00"))
    with pytest.raises(ValidationError):
        validate_amounts(0, "10", 0)


def test_rebuild_matches_fresh_create():
    """Test that editing to a final state equals creating that state directly."""
    now = datetime.now(timezone.utc)
    original = build_expense_record(**raw_input())
    stored = ExpenseResponse(
        id="exp-1",
        owner_id="owner-1",
        created_at=now,
        updated_at=now,
        **original.as_columns()
    )

    edited = rebuild_expense_record(stored, {"unit_price": Decimal("800")})
    fresh = build_expense_record(**raw_input(unit_price=Decimal("800")))

    assert edited == fresh
    assert edited.total_amount == Decimal("1600.00")
    assert edited.balance == Decimal("600.00")
    assert edited.paid_status == PaidStatus.HALF_PAID


def test_rebuild_ignores_derived_fields_in_changes():
    """Test that derived values sent by a client are never trusted."""
    now = datetime.now(timezone.utc)
    original = build_expense_record(**raw_input())
    stored = ExpenseResponse(id="exp-1", owner_id="owner-1", created_at=now, updated_at=now, **original.as_columns())

    edited = rebuild_expense_record(stored, {"total_amount": Decimal("1"), "paid_status": "unpaid"})
    assert edited == original


@pytest.mark.parametrize(
    "field, value",
    [
        ("unit_price", Decimal("1e30")),
        ("unit_price", Decimal("100000000")),
        ("unit_price", Decimal("99999999.995")),
        ("paid_amount", "123456789012345678901234567890"),
        ("quantity", 10 ** 27),
        ("quantity", 2147483648),
    ],
)
def test_build_record_rejects_out_of_range_values(field, value):
    """Test that values beyond the storable range name their field."""
    with pytest.raises(ValidationError) as exc_info:
        build_expense_record(**raw_input(**{field: value}))
    assert exc_info.value.field == field


def test_build_record_rejects_total_out_of_range():
    """Test that an oversized quantity times price is reported on unit_price."""
    with pytest.raises(ValidationError) as exc_info:
        build_expense_record(**raw_input(quantity=1000, unit_price=Decimal("100000"), paid_amount=0))
    assert exc_info.value.field == "unit_price"

    record = build_expense_record(**raw_input(quantity=1, unit_price=Decimal("99999999.99"), paid_amount=0))
    assert record.total_amount == Decimal("99999999.99")


def test_validate_amounts_out_of_range():
    """Test that the preview check applies the same bounds."""
    with pytest.raises(ValidationError) as exc_info:
        validate_amounts(10 ** 27, "10", 0)
    assert exc_info.value.field == "quantity"
    with pytest.raises(ValidationError) as exc_info:
        validate_amounts(10, "10000000", 0)
    assert exc_info.value.field == "unit_price"
