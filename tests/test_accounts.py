from datetime import timedelta

from spa_booking.config import AUTH_COOKIE_NAME
from spa_booking.enums import RoleEnum
from spa_booking.models import Account
from spa_booking.security_utils import create_access_token

from .conftest import API, PASSWORD

NEW_ACCOUNT = {
    "username": "alice",
    "password": "pa55word",
    "email": "Alice@Example.com",
    "dob": "1995-04-12",
}


def test_create_account_defaults_to_active_customer(client, db):
    response = client.post(f"{API}/account", json=NEW_ACCOUNT)

    assert response.status_code == 201
    body = response.json()
    assert body["isActive"] is True
    assert body["role"] == "Customer"
    assert body["email"] == "alice@example.com"
    assert "password" not in body

    stored = db.query(Account).filter(Account.username == "alice").one()
    assert stored.password != "pa55word"


def test_create_account_missing_dob_is_bad_request(client, db):
    payload = {k: v for k, v in NEW_ACCOUNT.items() if k != "dob"}

    response = client.post(f"{API}/account", json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Bad request"
    assert db.query(Account).count() == 0


def test_anonymous_cannot_create_staff_account(client):
    response = client.post(f"{API}/account", json={**NEW_ACCOUNT, "role": "Staff"})

    assert response.status_code == 403


def test_admin_can_create_staff_account(client, admin, login_as):
    login_as(admin)

    response = client.post(f"{API}/account", json={**NEW_ACCOUNT, "role": "Staff"})

    assert response.status_code == 201
    assert response.json()["role"] == "Staff"


def test_stale_session_cookie_registers_as_guest(client):
    client.cookies.set(
        AUTH_COOKIE_NAME,
        create_access_token("gone", "Admin", expires_delta=timedelta(minutes=-5)),
    )

    response = client.post(f"{API}/account", json=NEW_ACCOUNT)

    assert response.status_code == 201
    assert response.json()["role"] == "Customer"


def test_stale_admin_cookie_cannot_create_staff_account(client):
    client.cookies.set(AUTH_COOKIE_NAME, "not-a-jwt")

    response = client.post(f"{API}/account", json={**NEW_ACCOUNT, "role": "Staff"})

    assert response.status_code == 403


def test_duplicate_username_conflicts(client, customer):
    response = client.post(
        f"{API}/account", json={**NEW_ACCOUNT, "username": customer.username}
    )

    assert response.status_code == 409
    assert response.json() == {"message": "Username already exists"}


def test_register_ignores_requested_role(client):
    response = client.post(f"{API}/account/register", json={**NEW_ACCOUNT, "role": "Admin"})

    assert response.status_code == 201
    assert response.json()["role"] == "Customer"


def test_login_sets_session_cookie(client, customer):
    response = client.post(
        f"{API}/account/login", json={"username": customer.username, "password": PASSWORD}
    )

    assert response.status_code == 200
    assert response.json()["account"]["id"] == customer.id
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("jwt=")
    assert "httponly" in set_cookie.lower()

    me = client.get(f"{API}/account/{customer.id}")
    assert me.status_code == 200
    assert me.json()["username"] == customer.username


def test_login_by_email(client, customer):
    response = client.post(
        f"{API}/account/login", json={"email": customer.email, "password": PASSWORD}
    )

    assert response.status_code == 200


def test_login_with_wrong_password(client, customer):
    response = client.post(
        f"{API}/account/login", json={"username": customer.username, "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid username or password"}


def test_login_inactive_account_is_forbidden(client, make_account):
    account = make_account(is_active=False)

    response = client.post(
        f"{API}/account/login", json={"username": account.username, "password": PASSWORD}
    )

    assert response.status_code == 403


def test_logout_clears_cookie(client):
    response = client.post(f"{API}/account/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}
    assert 'jwt=""' in response.headers["set-cookie"] or "jwt=;" in response.headers["set-cookie"]


def test_change_password(client, customer, login_as):
    login_as(customer)

    wrong = client.post(
        f"{API}/account/changePassword",
        json={"oldPassword": "wrong-one", "newPassword": "brand-new"},
    )
    assert wrong.status_code == 400

    changed = client.post(
        f"{API}/account/changePassword",
        json={"oldPassword": PASSWORD, "newPassword": "brand-new"},
    )
    assert changed.status_code == 200

    client.cookies.clear()
    login = client.post(
        f"{API}/account/login", json={"username": customer.username, "password": "brand-new"}
    )
    assert login.status_code == 200


def test_list_accounts_is_admin_only(client, customer, admin, login_as):
    login_as(customer)
    assert client.get(f"{API}/account").status_code == 403

    login_as(admin)
    response = client.get(f"{API}/account")
    assert response.status_code == 200
    assert {a["id"] for a in response.json()} == {customer.id, admin.id}


def test_customer_cannot_read_other_account(client, make_account, login_as):
    me = make_account()
    other = make_account()
    login_as(me)

    assert client.get(f"{API}/account/{other.id}").status_code == 403


def test_get_missing_account_as_staff(client, staff, login_as):
    login_as(staff)

    response = client.get(f"{API}/account/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json() == {"message": "Account not found"}


def test_update_own_account(client, customer, login_as):
    login_as(customer)

    response = client.put(f"{API}/account/{customer.id}", json={"phone": "+1 (555) 010-2030"})

    assert response.status_code == 200
    assert response.json()["phone"] == "+15550102030"


def test_customer_cannot_change_own_role(client, customer, login_as):
    login_as(customer)

    response = client.put(f"{API}/account/{customer.id}", json={"role": "Admin"})

    assert response.status_code == 403


def test_delete_account_deactivates(client, customer, admin, login_as, db):
    login_as(admin)

    response = client.delete(f"{API}/account/{customer.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Account deactivated successfully"
    assert body["account"]["isActive"] is False
    db.expire_all()
    assert db.get(Account, customer.id).is_active is False


def test_delete_account_requires_admin(client, make_account, login_as):
    target = make_account()
    login_as(make_account(RoleEnum.STAFF))

    response = client.delete(f"{API}/account/{target.id}")

    assert response.status_code == 403
    assert response.json() == {"message": "Admin access required"}
