import pytest

from models.account import Account, RefreshToken
from models.enums import Role
from services import account_service
from utils.errors import AppError, ErrorKind

REGISTRATION = {
    "title": "Ms",
    "first_name": "Ada",
    "last_name": "Lovelace",
    "password": "secret123",
    "confirm_password": "secret123",
    "accept_terms": True,
}


def _register(client, email):
    response = client.post("/accounts/register", json={**REGISTRATION, "email": email})
    assert response.status_code == 200, response.text
    return response


def test_first_registered_account_is_admin(client, db_session):
    _register(client, "first@example.com")
    _register(client, "second@example.com")

    first = db_session.query(Account).filter(Account.email == "first@example.com").one()
    second = db_session.query(Account).filter(Account.email == "second@example.com").one()
    assert first.role == Role.ADMIN
    assert second.role == Role.USER
    assert first.verification_token


def test_duplicate_registration_does_not_reveal_email(client, db_session):
    first = _register(client, "ada@example.com")
    second = _register(client, "ADA@example.com")

    assert first.json() == second.json()
    assert db_session.query(Account).count() == 1


def test_registration_validates_passwords(client, db_session):
    payload = {**REGISTRATION, "email": "ada@example.com", "confirm_password": "different"}
    response = client.post("/accounts/register", json=payload)
    assert response.status_code == 400
    assert "Passwords must match" in response.json()["message"]


def test_login_requires_verified_email(client, db_session):
    _register(client, "ada@example.com")
    credentials = {"email": "ada@example.com", "password": "secret123"}

    response = client.post("/accounts/authenticate", json=credentials)
    assert response.status_code == 401
    assert response.json()["message"] == "Email or password is incorrect"

    token = db_session.query(Account).one().verification_token
    response = client.post("/accounts/verify-email", json={"token": token})
    assert response.status_code == 200

    response = client.post("/accounts/authenticate", json=credentials)
    assert response.status_code == 200
    data = response.json()
    assert data["jwt_token"]
    assert data["is_verified"] is True
    assert "refreshToken" in response.cookies


def test_verify_email_with_unknown_token(client, db_session):
    response = client.post("/accounts/verify-email", json={"token": "nope"})
    assert response.status_code == 400
    assert response.json()["message"] == "Verification failed"


def test_wrong_password_is_rejected(client, user):
    response = client.post("/accounts/authenticate", json={"email": user.email, "password": "wrong-password"})
    assert response.status_code == 401


def test_refresh_token_rotation(client, db_session, make_account):
    make_account("ada@example.com")
    client.post("/accounts/authenticate", json={"email": "ada@example.com", "password": "secret123"})
    old_token = client.cookies.get("refreshToken")

    response = client.post("/accounts/refresh-token")
    assert response.status_code == 200, response.text
    assert response.json()["jwt_token"]

    db_session.expire_all()
    old = db_session.query(RefreshToken).filter(RefreshToken.token == old_token).one()
    assert old.revoked is not None
    assert old.replaced_by_token == client.cookies.get("refreshToken")
    assert not old.is_active

    # A rotated token cannot be used again
    with pytest.raises(AppError) as exc:
        account_service.refresh_token(db_session, old_token, "127.0.0.1")
    assert exc.value.kind == ErrorKind.FORBIDDEN


def test_refresh_without_cookie(client, db_session):
    response = client.post("/accounts/refresh-token")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_revoked_token_cannot_refresh(client, db_session, make_account):
    make_account("ada@example.com")
    auth = client.post("/accounts/authenticate", json={"email": "ada@example.com", "password": "secret123"})
    headers = {"Authorization": f"Bearer {auth.json()['jwt_token']}"}

    response = client.post("/accounts/revoke-token", json={}, headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Token revoked"

    response = client.post("/accounts/refresh-token")
    assert response.status_code == 401


def test_cannot_revoke_someone_elses_token(client, db_session, make_account, login):
    make_account("ada@example.com")
    make_account("bob@example.com")
    ada_headers = login("ada@example.com")
    login("bob@example.com")
    bob_token = client.cookies.get("refreshToken")

    response = client.post("/accounts/revoke-token", json={"token": bob_token}, headers=ada_headers)
    assert response.status_code == 401


def test_password_reset_flow(client, db_session, make_account):
    make_account("ada@example.com")

    response = client.post("/accounts/forgot-password", json={"email": "ada@example.com"})
    assert response.status_code == 200
    db_session.expire_all()
    token = db_session.query(Account).one().reset_token
    assert token

    assert client.post("/accounts/validate-reset-token", json={"token": token}).status_code == 200

    response = client.post("/accounts/reset-password", json={
        "token": token, "password": "newpass123", "confirm_password": "newpass123",
    })
    assert response.status_code == 200

    response = client.post("/accounts/authenticate", json={"email": "ada@example.com", "password": "newpass123"})
    assert response.status_code == 200

    # Reset tokens are single use
    response = client.post("/accounts/validate-reset-token", json={"token": token})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid token"


def test_forgot_password_for_unknown_email_succeeds(client, db_session):
    response = client.post("/accounts/forgot-password", json={"email": "ghost@example.com"})
    assert response.status_code == 200


def test_account_listing_is_admin_only(client, admin, user):
    assert client.get("/accounts", headers=user.headers).status_code == 401

    response = client.get("/accounts", headers=admin.headers)
    assert response.status_code == 200
    assert {a["email"] for a in response.json()} == {admin.email, user.email}


def test_user_can_view_only_own_account(client, admin, user):
    assert client.get(f"/accounts/{user.account_id}", headers=user.headers).status_code == 200
    assert client.get(f"/accounts/{admin.account_id}", headers=user.headers).status_code == 401
    assert client.get(f"/accounts/{user.account_id}", headers=admin.headers).status_code == 200


def test_user_cannot_change_own_role(client, user):
    response = client.put(f"/accounts/{user.account_id}", json={"role": "Admin"}, headers=user.headers)
    assert response.status_code == 401
    assert response.json()["message"] == "Only admins can change account roles"

    response = client.put(f"/accounts/{user.account_id}", json={"first_name": "Janet"}, headers=user.headers)
    assert response.status_code == 200
    assert response.json()["first_name"] == "Janet"
    assert response.json()["updated"] is not None


def test_admin_creates_verified_account(client, admin):
    payload = {
        "title": "Mr",
        "first_name": "Bob",
        "last_name": "Builder",
        "email": "bob@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
        "role": "User",
    }
    response = client.post("/accounts", json=payload, headers=admin.headers)
    assert response.status_code == 200, response.text
    assert response.json()["is_verified"] is True
    assert response.json()["role"] == "User"

    response = client.post("/accounts", json=payload, headers=admin.headers)
    assert response.status_code == 400


def test_delete_account_keeps_employee(client, db_session, admin, user):
    response = client.delete(f"/accounts/{user.account_id}", headers=admin.headers)
    assert response.status_code == 200

    db_session.expire_all()
    assert db_session.query(Account).filter(Account.id == user.account_id).first() is None
    response = client.get(f"/employees/{user.employee_id}", headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["user_id"] is None
