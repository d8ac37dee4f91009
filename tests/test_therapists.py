from spa_booking.enums import RoleEnum

from .conftest import API

MISSING_ID = "00000000-0000-0000-0000-000000000000"


def _payload(account_id, service_id):
    return {
        "accountId": account_id,
        "specialization": [service_id],
        "certification": [
            {"name": "CIDESCO", "issuedBy": "CIDESCO International", "issuedDate": "2019-06-01"}
        ],
        "experience": "7 years",
    }


def test_admin_creates_therapist(client, admin, login_as, make_account, service_row):
    account = make_account(RoleEnum.THERAPIST)
    login_as(admin)

    response = client.post(f"{API}/therapist", json=_payload(account.id, service_row.id))

    assert response.status_code == 201
    body = response.json()
    assert body["account"]["id"] == account.id
    assert body["specialization"][0]["serviceName"] == service_row.service_name
    assert body["certification"][0]["issuedBy"] == "CIDESCO International"


def test_staff_cannot_create_therapist(client, staff, login_as, make_account, service_row):
    account = make_account(RoleEnum.THERAPIST)
    login_as(staff)

    response = client.post(f"{API}/therapist", json=_payload(account.id, service_row.id))

    assert response.status_code == 403


def test_only_therapist_accounts_can_be_linked(client, admin, login_as, customer, service_row):
    login_as(admin)

    response = client.post(f"{API}/therapist", json=_payload(customer.id, service_row.id))

    assert response.status_code == 400
    assert response.json() == {"message": "Account must have the Therapist role"}
    assert client.get(f"{API}/therapist").status_code == 404


def test_account_links_to_one_therapist(client, admin, login_as, therapist_row, service_row):
    login_as(admin)

    response = client.post(
        f"{API}/therapist", json=_payload(therapist_row.account_id, service_row.id)
    )

    assert response.status_code == 409


def test_unknown_specialization_is_404(client, admin, login_as, make_account):
    account = make_account(RoleEnum.THERAPIST)
    login_as(admin)

    response = client.post(f"{API}/therapist", json=_payload(account.id, MISSING_ID))

    assert response.status_code == 404


def test_therapists_by_service(client, therapist_row, service_row):
    response = client.get(f"{API}/therapist/service/{service_row.id}")

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [therapist_row.id]

    assert client.get(f"{API}/therapist/service/{MISSING_ID}").status_code == 404


def test_update_therapist_experience(client, admin, login_as, therapist_row):
    login_as(admin)

    response = client.put(f"{API}/therapist/{therapist_row.id}", json={"experience": "8 years"})

    assert response.status_code == 200
    assert response.json()["experience"] == "8 years"
    assert len(response.json()["specialization"]) == 1
