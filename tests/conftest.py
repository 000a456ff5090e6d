"""Pytest configuration and shared fixtures for the payment review tests."""

import os

# Must be set before database/dependencies are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from database import SessionLocal, engine
from dependencies import get_swift_directory
from models import Base, Payment, User
from services import SwiftDirectory, VerificationService

SENDER_ACCOUNT = "1234567890"
RECEIVER_ACCOUNT = "7410852096374108520"


@pytest.fixture
def tables():
    """Fresh schema in the shared in-memory database for each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def directory():
    """Small fixture dataset instead of the bundled file."""
    return SwiftDirectory.from_records([
        {"bic": "ABSAZAXXX", "bank": "ABSA"},
        {"bic": "ABSAZAJJ", "bank": "ABSA"},
        {"bic": "deutdeff", "bank": "Deutsche Bank"},
    ])


@pytest.fixture
def verifier(directory):
    return VerificationService(directory)


@pytest.fixture
def accounts(db):
    """Sender, receiver and an employee account."""
    sender = User(email="alice@example.com", username="alice", account_number=SENDER_ACCOUNT, role="customer")
    receiver = User(email="bob@example.com", username="bob", account_number=RECEIVER_ACCOUNT, role="customer")
    employee = User(email="john.doe@example.com", username="john_doe", account_number="5550001111", role="employee")
    db.add_all([sender, receiver, employee])
    db.commit()
    return {"sender": sender, "receiver": receiver, "employee": employee}


@pytest.fixture
def make_payment(db):
    """Factory for payment records with valid defaults."""

    def _make(**overrides) -> Payment:
        values = {
            "sender_email": "alice@example.com",
            "receiver_email": "bob@example.com",
            "account_number": SENDER_ACCOUNT,
            "account_info": RECEIVER_ACCOUNT,
            "provider": "SWIFT",
            "swift_code": "ABSAZAJJ",
            "amount": Decimal("250.00"),
            "currency": "USD",
        }
        values.update(overrides)
        payment = Payment(**values)
        db.add(payment)
        db.commit()
        return payment

    return _make


@pytest.fixture
def app(directory):
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_swift_directory] = lambda: directory
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    fastapi_app.state.revalidate_on_persist = False


@pytest.fixture
def client(app, tables):
    return TestClient(app)


def make_token(**claims) -> str:
    return jwt.encode(claims, "test-secret", algorithm="HS256")


@pytest.fixture
def employee_headers(accounts):
    token = make_token(id=accounts["employee"].id, role="employee")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(accounts):
    token = make_token(id=accounts["sender"].id, role="customer")
    return {"Authorization": f"Bearer {token}"}


def at(day: int) -> datetime:
    return datetime(2026, 10, day, 9, 0, 0)
