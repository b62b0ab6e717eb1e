"""Shared fixtures: an app over in-memory SQLite and helpers to seed it."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

import core.security
from app import create_app
from config import Settings
from models import (
    DesignModel,
    DesignStatus,
    TransactionModel,
    TransactionStatus,
    UserModel,
    WithdrawalModel,
    WithdrawalStatus,
)
from utils.user_manager import UserManager

PASSWORD = "password123"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(core.security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        database_url="sqlite://",
        jwt_secret="test-secret",
        jwt_expires_in=timedelta(hours=1),
        upload_dir=tmp_path / "uploads",
        max_file_size=1024,
        rate_limit_max_requests=0,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_buyer(client, email="buyer@shop.com", name="Bea Buyer"):
    resp = client.post(
        "/api/auth/register/buyer",
        json={"name": name, "email": email, "password": PASSWORD},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def register_designer(client, email="designer@studio.com", name="Dee Designer"):
    resp = client.post(
        "/api/auth/register/designer",
        json={
            "name": name,
            "email": email,
            "password": PASSWORD,
            "bio": "Logos and lettering",
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def design_payload(**overrides) -> dict:
    payload = {
        "title": "Mountain Logo",
        "description": "A minimalist mountain mark",
        "category": "logos",
        "price": 25,
        "fileUrl": "https://cdn.studio.com/files/mountain.ai",
        "watermarkedPreviewUrl": "https://cdn.studio.com/previews/mountain.png",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def buyer(client):
    return register_buyer(client)


@pytest.fixture
def designer(client):
    return register_designer(client)


@pytest.fixture
def admin(client, app):
    with app.state.session_factory() as session:
        UserManager(session).create_admin("Ada Admin", "admin@market.com", PASSWORD)
    resp = client.post(
        "/api/auth/login", json={"email": "admin@market.com", "password": PASSWORD}
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def create_design(client):
    """Create a design as the given designer and return its JSON."""

    def _create(designer_auth, **overrides):
        resp = client.post(
            "/api/designs",
            json=design_payload(**overrides),
            headers=auth_headers(designer_auth["token"]),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["design"]

    return _create


@pytest.fixture
def set_design_status(db):
    def _set(design_id: int, status: DesignStatus):
        design = db.get(DesignModel, design_id)
        design.status = status
        db.commit()

    return _set


@pytest.fixture
def add_transaction(db):
    def _add(buyer_auth, design_id, amount=25.0, status=TransactionStatus.COMPLETED, **kwargs):
        user = db.get(UserModel, buyer_auth["user"]["id"])
        transaction = TransactionModel(
            buyer_id=user.buyer.id,
            design_id=design_id,
            amount=amount,
            status=status,
            payment_method="card",
            **kwargs,
        )
        db.add(transaction)
        db.commit()
        return transaction.id

    return _add


@pytest.fixture
def add_withdrawal(db):
    def _add(designer_auth, amount=50.0, status=WithdrawalStatus.PENDING):
        withdrawal = WithdrawalModel(
            designer_id=designer_auth["designer"]["id"],
            amount=amount,
            status=status,
        )
        db.add(withdrawal)
        db.commit()
        return withdrawal.id

    return _add
