from datetime import timedelta

from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from jose import jwt

from spa_booking.auth import Identity, get_current_identity, require_identity
from spa_booking.config import AUTH_COOKIE_NAME
from spa_booking.enums import RoleEnum
from spa_booking.errors import register_exception_handlers
from spa_booking.security_utils import create_access_token, decode_access_token

from .conftest import API


def _guarded_app() -> FastAPI:
    guarded = FastAPI()
    register_exception_handlers(guarded)

    @guarded.get("/whoami")
    async def whoami(identity: Identity = Depends(get_current_identity)):
        return {"accountId": identity.account_id, "role": identity.role.value}

    @guarded.get("/unguarded")
    async def unguarded(request: Request):
        return require_identity(request).model_dump()

    return guarded


def test_token_round_trip_claims():
    token = create_access_token("acc-1", RoleEnum.STAFF.value)

    payload = decode_access_token(token)

    assert payload["sub"] == "acc-1"
    assert payload["role"] == "Staff"
    assert "exp" in payload


def test_missing_cookie_is_unauthorized(client):
    response = client.get(f"{API}/transaction")

    assert response.status_code == 401
    assert response.json() == {"message": "Authentication required"}


def test_expired_token(client):
    client.cookies.set(
        AUTH_COOKIE_NAME,
        create_access_token("acc-1", "Customer", expires_delta=timedelta(minutes=-5)),
    )

    response = client.get(f"{API}/transaction")

    assert response.status_code == 401
    assert response.json() == {"message": "Token expired"}


def test_token_signed_with_other_secret(client):
    forged = jwt.encode({"sub": "acc-1", "role": "Admin"}, "not-the-secret", algorithm="HS256")
    client.cookies.set(AUTH_COOKIE_NAME, forged)

    response = client.get(f"{API}/transaction")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}


def test_token_with_unknown_role(client):
    client.cookies.set(AUTH_COOKIE_NAME, create_access_token("acc-1", "Superuser"))

    response = client.get(f"{API}/transaction")

    assert response.status_code == 401


def test_identity_is_exposed_to_handlers():
    guarded = TestClient(_guarded_app())
    guarded.cookies.set(AUTH_COOKIE_NAME, create_access_token("acc-9", "Therapist"))

    response = guarded.get("/whoami")

    assert response.json() == {"accountId": "acc-9", "role": "Therapist"}


def test_authorization_without_authentication_is_server_error():
    guarded = TestClient(_guarded_app())

    response = guarded.get("/unguarded")

    assert response.status_code == 500
    assert response.json() == {"message": "Authentication must run before authorization"}


def test_staff_guard_rejects_customer(client, customer, login_as):
    login_as(customer)

    response = client.post(
        f"{API}/service",
        json={"serviceName": "Massage", "description": "Hot stone", "price": 80},
    )

    assert response.status_code == 403
    assert response.json() == {"message": "Staff access required"}


def test_guard_runs_before_body_validation(client):
    response = client.post(f"{API}/service", json={})

    assert response.status_code == 401


def test_deactivated_account_cannot_book(client, make_account, login_as, booking):
    inactive = make_account(is_active=False)
    login_as(inactive)

    response = client.post(f"{API}/appointment", json={**booking, "customerId": inactive.id})

    assert response.status_code == 403
    assert response.json() == {"message": "Account is inactive"}
