"""
Shared fixtures: an in-memory database, an API client bound to it, and a
signed-up owner with seeded reference lists.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.db.session import get_db, init_db
from app.db.init_db import seed_reference_data


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    seed_reference_data(db)
    db.close()
    return factory


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def signup_and_login(client, username: str) -> dict:
    """Create a user through the API and return bearer auth headers."""
    response = client.post(
        "/api/auth/signup",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 201
    response = client.post(
        "/api/auth/login",
        json={"username": username, "password": "testpassword123"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return signup_and_login(client, "bride")


@pytest.fixture
def other_headers(client):
    return signup_and_login(client, "groom")


def load_refs(client, headers) -> dict:
    """Complete setup for the user and pick one id of each reference list."""
    response = client.post("/api/setup", json={"paid_by": [], "events": []}, headers=headers)
    assert response.status_code == 201

    def by_name(path):
        rows = client.get(f"/api/reference/{path}", headers=headers).json()
        return {row["name"]: row["id"] for row in rows}

    categories = by_name("categories")
    payment_modes = by_name("payment-modes")
    paid_by = by_name("paid-by")
    events = by_name("events")
    return {
        "categories": categories,
        "payment_modes": payment_modes,
        "paid_by": paid_by,
        "events": events,
        "category_id": categories["Catering"],
        "payment_mode_id": payment_modes["UPI"],
        "paid_by_id": paid_by["Dad"],
        "event_id": events["Wedding"],
    }


@pytest.fixture
def refs(client, auth_headers):
    return load_refs(client, auth_headers)


@pytest.fixture
def expense_payload(refs):
    """Build a valid create payload; keyword arguments override fields."""
    def build(**overrides):
        payload = {
            "date": "2026-10-01",
            "item_name": "Stage flowers",
            "category_id": refs["category_id"],
            "quantity": 1,
            "unit_price": "300.00",
            "paid_amount": "0",
            "paid_by_id": refs["paid_by_id"],
            "event_id": refs["event_id"],
            "payment_mode_id": refs["payment_mode_id"],
            "notes": None,
        }
        payload.update(overrides)
        return payload
    return build
