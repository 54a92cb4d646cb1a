import os

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from database.connection import SessionLocal, create_all_tables, drop_all_tables
from main import app
from modules.security.bootstrap import ensure_default_admin
from modules.security.model import User, UserRole
from modules.security.passwords import hash_password

ADMIN_EMAIL = "admin@rechub.local"
ADMIN_PASSWORD = "admin"


@pytest.fixture
def db():
    drop_all_tables()
    create_all_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin(db):
    return ensure_default_admin()


@pytest.fixture
def anon_client(db):
    with TestClient(app) as c:
        yield c


def login(client, email, password):
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def client(anon_client):
    login(anon_client, ADMIN_EMAIL, ADMIN_PASSWORD)
    return anon_client


@pytest.fixture
def make_user():
    def _make(email, password="secret", full_name="Test User", is_active=True):
        with SessionLocal() as s:
            user = User(
                email=email,
                full_name=full_name,
                password_hash=hash_password(password),
                role=UserRole.USER,
                is_active=is_active,
            )
            s.add(user)
            s.commit()
            s.refresh(user)
            return user.id
    return _make


@pytest.fixture
def other_client(anon_client, make_user):
    """a second logged-in user with no grants"""
    uid = make_user("bob@company.com", "bobpass", "Bob Other")
    c = TestClient(app)
    login(c, "bob@company.com", "bobpass")
    c.user_id = uid
    return c


def staff_payload(n, **overrides):
    data = {
        "employee_id": f"EMP{n:03d}",
        "first_name": f"First{n}",
        "last_name": f"Last{n}",
        "email": f"staff{n}@company.com",
        "department": "Engineering",
        "status": "Active",
    }
    data.update(overrides)
    return data
