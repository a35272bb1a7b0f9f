from datetime import datetime, timedelta, timezone

from ebee.core import security
from ebee.db import models
from ebee.tasks import notification_tasks
from tests.helpers import auth_headers


def signup(client, **overrides):
    payload = {"email": "Rider@Example.com", "name": "Rider", "phoneNumber": "0711111111", "password": "pedal-on"}
    payload.update(overrides)
    return client.post("/api/auth/signup", json=payload)


def test_signup_creates_unapproved_customer(client, db):
    response = signup(client)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "rider@example.com"

    user = db.get(models.User, data["userId"])
    assert user.user_type == models.UserType.customer
    assert user.is_approved is False
    assert user.hashed_password != "pedal-on"


def test_signup_lists_missing_fields(client):
    response = client.post("/api/auth/signup", json={"email": "a@b.co"})

    assert response.status_code == 400
    assert response.json()["message"] == "Please fill in name, phone number, password!"


def test_signup_rejects_duplicate_email(client):
    signup(client)

    response = signup(client, email="rider@example.com")

    assert response.status_code == 400
    assert response.json()["message"] == "User already registered"


def test_signup_rejects_malformed_email(client):
    response = signup(client, email="not-an-email")

    assert response.status_code == 400


def test_login_returns_token_with_identity_claims(client):
    signup(client)

    response = client.post("/api/auth/login", json={"email": "rider@example.com", "password": "pedal-on"})

    assert response.status_code == 200
    data = response.json()["data"]
    claims = security.verify_token(data["token"])
    assert claims["email"] == "rider@example.com"
    assert claims["userType"] == "customer"
    assert claims["isApproved"] is False
    assert data["user"]["name"] == "Rider"


def test_login_unknown_user(client):
    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})

    assert response.status_code == 404
    assert response.json()["message"] == "User doesn't exist"


def test_login_wrong_password(client):
    signup(client)

    response = client.post("/api/auth/login", json={"email": "rider@example.com", "password": "wrong"})

    assert response.status_code == 401


def test_forgot_and_change_password_flow(client, db):
    signup(client)

    response = client.post("/api/auth/forgot-password", json={"email": "rider@example.com"})
    assert response.status_code == 200

    user = db.query(models.User).filter_by(email="rider@example.com").one()
    token = user.reset_token
    assert len(token) == 40

    response = client.post(f"/api/auth/change-password/{token}", json={"password": "new-pass"})
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": "rider@example.com", "password": "new-pass"})
    assert login.status_code == 200
    db.expire_all()
    assert db.get(models.User, user.id).reset_token is None


def test_forgot_password_unknown_email(client):
    response = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})

    assert response.status_code == 404


def test_change_password_with_expired_token(client, db, customer):
    customer.reset_token = "a" * 40
    customer.reset_token_expires = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    response = client.post(f"/api/auth/change-password/{'a' * 40}", json={"password": "whatever"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired reset code"


def test_token_for_deleted_user_is_rejected(client, db, customer):
    headers = auth_headers(customer)
    db.delete(customer)
    db.commit()

    response = client.get("/api/users/me", headers=headers)

    assert response.status_code == 401


def test_x_auth_token_header_is_accepted(client, customer):
    token = security.create_access_token(customer)

    response = client.get("/api/users/me", headers={"x-auth-token": token})

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "jane@example.com"


def test_garbage_token_is_rejected(client):
    response = client.get("/api/users/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_signup_survives_broker_outage(client, db, monkeypatch):
    class UnreachableBroker:
        def delay(self, *args, **kwargs):
            raise ConnectionRefusedError("redis://localhost:6379/0 refused")

    monkeypatch.setattr(notification_tasks, "send_email", UnreachableBroker())

    response = signup(client)

    assert response.status_code == 201
    assert db.query(models.User).filter_by(email="rider@example.com").count() == 1
