"""
Pytest fixtures for the HR portal backend.

Every test runs against a fresh in-memory SQLite database shared by the
test session and the application.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("SMTP_HOST", None)

from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401
from database import Base, SessionLocal, engine
from main import app
from models.enums import Role
from services import account_service, employee_service

PASSWORD = "secret123"


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(db_session):
    # No context manager, so the startup hook (init_db) does not run
    return TestClient(app)


@pytest.fixture
def make_account(db_session):
    def _make(email, role=Role.USER, first_name="Test"):
        return account_service.create(db_session, {
            "title": "Mr",
            "first_name": first_name,
            "last_name": "User",
            "email": email,
            "role": role,
            "password": PASSWORD,
        })
    return _make


@pytest.fixture
def make_employee(db_session):
    def _make(code, account=None, **extra):
        params = {
            "employee_id": code,
            "user_id": account.id if account else None,
            "position": "Engineer",
            "hire_date": date(2024, 1, 15),
        }
        params.update(extra)
        return employee_service.create(db_session, params)
    return _make


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD):
        response = client.post("/accounts/authenticate", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['jwt_token']}"}
    return _login


def _member(make_account, make_employee, login, email, role, code):
    account = make_account(email, role=role)
    employee = make_employee(code, account=account)
    return SimpleNamespace(account_id=account.id, employee_id=employee.id, email=email, headers=login(email))


@pytest.fixture
def admin(make_account, make_employee, login):
    return _member(make_account, make_employee, login, "admin@example.com", Role.ADMIN, "EMP-ADMIN")


@pytest.fixture
def user(make_account, make_employee, login):
    return _member(make_account, make_employee, login, "jane@example.com", Role.USER, "EMP-001")


@pytest.fixture
def other_user(make_account, make_employee, login):
    return _member(make_account, make_employee, login, "john@example.com", Role.USER, "EMP-002")
