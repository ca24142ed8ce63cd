"""
Shared pytest fixtures.

Each test gets a fresh in-memory SQLite database (StaticPool keeps the single
connection alive) and a TestClient whose ``get_db`` is bound to it.
Environment overrides are applied before ``pharmacy`` is imported because
settings are read once at import time.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ALLOWED_HOSTS"] = "testserver,localhost,127.0.0.1"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="pharmacy-media-")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from pharmacy.api.deps import get_db  # noqa: E402
from pharmacy.db.base import Base  # noqa: E402
from pharmacy.db.session import build_engine  # noqa: E402
from pharmacy.main import app  # noqa: E402

PASSWORD = "Secret123"


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ------------------------------------------------------------------ helpers

def _register(client, email, full_name="Test User", role="Customer", password=PASSWORD, **extra):
    body = {"fullName": full_name, "email": email, "password": password, "role": role}
    if role == "Customer":
        body.setdefault("address", "12 MG Road, Bengaluru")
        body.setdefault("phoneNumber", "9876543210")
    body.update(extra)
    return client.post("/auth/register", json=body)


@pytest.fixture()
def register_user(client):
    """POST /auth/register with customer defaults filled in; returns the response."""

    def _make(email, **kwargs):
        return _register(client, email, **kwargs)

    return _make


def _customer_id_for(client, user_id):
    for c in client.get("/customers").json():
        if c["userId"] == user_id:
            return c["id"]
    raise AssertionError(f"no customer row for user {user_id}")


@pytest.fixture()
def make_customer(client):
    """Register a customer account and return ``(user_id, customer_id)``."""
    counter = {"n": 0}

    def _make(full_name="Asha Verma", email=None, **extra):
        counter["n"] += 1
        email = email or f"customer{counter['n']}@medplus.in"
        resp = _register(client, email, full_name=full_name, **extra)
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["userId"]
        return user_id, _customer_id_for(client, user_id)

    return _make


@pytest.fixture()
def make_medicine(client):
    def _make(name="Paracetamol 500mg", price=10.00, stock=100, category_id=None, brand="Crocin"):
        resp = client.post(
            "/medicines",
            json={
                "name": name,
                "brand": brand,
                "price": price,
                "quantityInStock": stock,
                "expiryDate": "2030-12-31",
                "categoryId": category_id,
            },
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _make


@pytest.fixture()
def make_order(client):
    def _make(customer_id, total=0, status="Pending"):
        resp = client.post("/orders", json={"customerId": customer_id, "totalAmount": total, "status": status})
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _make
