"""
Tests for dashboard, analytics and profile endpoints.
"""
from datetime import date, timedelta
from decimal import Decimal


def test_dashboard_without_expenses(client, auth_headers):
    """Test the dashboard for a new user."""
    response = client.get("/api/dashboard", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["totals"]["total_expenses"]) == Decimal("0")
    assert data["totals"]["expense_count"] == 0
    assert data["percent_paid"] == 0
    assert data["category_breakdown"] == []
    assert data["recent_activity"] == []
    assert data["days_until_wedding"] is None
    assert data["currency"] == "INR"


def test_dashboard_rollups(client, auth_headers, refs, expense_payload):
    """Test headline figures for one paid and one unpaid expense."""
    client.post("/api/expenses", json=expense_payload(quantity=2, unit_price="500", paid_amount="1000"), headers=auth_headers)
    client.post("/api/expenses", json=expense_payload(
        unit_price="300",
        category_id=refs["categories"]["Photographer"]
    ), headers=auth_headers)

    data = client.get("/api/dashboard", headers=auth_headers).json()
    totals = data["totals"]
    assert Decimal(totals["total_expenses"]) == Decimal("1300")
    assert Decimal(totals["total_paid"]) == Decimal("1000")
    assert Decimal(totals["total_balance"]) == Decimal("300")
    assert data["percent_paid"] == 77
    assert data["completed_payments"] == 1
    assert data["pending_payments"] == 1
    assert data["partial_payments"] == 0
    assert [c["name"] for c in data["top_categories"]] == ["Catering", "Photographer"]
    assert len(data["recent_activity"]) == 2


def test_dashboard_countdown_uses_profile(client, auth_headers):
    """Test that the wedding date set on the profile drives the countdown."""
    wedding = date.today() + timedelta(days=30)
    response = client.put("/api/profile", json={"wedding_date": wedding.isoformat()}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["wedding_date"] == wedding.isoformat()

    data = client.get("/api/dashboard", headers=auth_headers).json()
    assert data["wedding_date"] == wedding.isoformat()
    assert data["days_until_wedding"] == 30


def test_profile_partial_update(client, auth_headers):
    """Test that omitted profile fields keep their value."""
    client.put("/api/profile", json={"estimated_guests": 250, "venue_preference": "Garden"}, headers=auth_headers)
    response = client.put("/api/profile", json={"budget_range": "10-15L"}, headers=auth_headers)
    data = response.json()
    assert data["estimated_guests"] == 250
    assert data["venue_preference"] == "Garden"
    assert data["budget_range"] == "10-15L"

    invalid = client.put("/api/profile", json={"estimated_guests": -1}, headers=auth_headers)
    assert invalid.status_code == 422


def test_analytics(client, auth_headers, refs, expense_payload):
    """Test the analytics breakdowns."""
    client.post("/api/expenses", json=expense_payload(
        unit_price="1000",
        paid_amount="400",
        payment_mode_id=refs["payment_modes"]["Cash"],
        date=date.today().isoformat()
    ), headers=auth_headers)
    client.post("/api/expenses", json=expense_payload(
        unit_price="500",
        paid_amount="500",
        event_id=refs["events"]["Haldi"],
        paid_by_id=refs["paid_by"]["Mom"],
        date=date.today().isoformat()
    ), headers=auth_headers)

    response = client.get("/api/analytics", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["totals"]["total_expenses"]) == Decimal("1500")
    assert data["percent_paid"] == 60
    assert sorted(e["name"] for e in data["events"]) == ["Haldi", "Wedding"]
    assert sorted(m["name"] for m in data["payment_modes"]) == ["Cash", "UPI"]
    assert sorted(p["name"] for p in data["paid_by"]) == ["Dad", "Mom"]
    assert [s["status"] for s in data["statuses"]] == ["paid", "half_paid"]
    assert len(data["trend"]) == 6
    assert Decimal(data["trend"][-1]["amount"]) == Decimal("900")
    assert [e["item_name"] for e in data["upcoming_payments"]] == ["Stage flowers"]
    assert Decimal(data["largest_expenses"][0]["total_amount"]) == Decimal("1000")
    assert data["budget_used"] == 0.3  # 1500 of the default 500000


def test_dashboard_requires_auth(client):
    """Test that summaries need a bearer token."""
    assert client.get("/api/dashboard").status_code == 401
    assert client.get("/api/analytics").status_code == 401
